# ramen_runner/game/game.py
import sys, argparse, logging, random
from pathlib import Path
import pygame
from pygame import K_SPACE, K_UP, K_ESCAPE, K_p, K_d, K_m, K_r

from .config import WIDTH, HEIGHT, FPS, MAX_FRAME_MS, SCORES_PATH_DEFAULT, WorldConfig
from .audio import AudioCues
from .clock import SystemClock
from .leaderboard import Leaderboard
from .render import Renderer
from .state import RunState


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Ramen Runner")
    p.add_argument("--seed", type=int, default=None,
                   help="Spawn RNG seed. Omit for a random run.")
    p.add_argument("--width", type=int, default=WIDTH)
    p.add_argument("--height", type=int, default=HEIGHT)
    p.add_argument("--assets", type=str, default="assets",
                   help="Directory holding sprites/ and audio/ (missing files fall back to shapes/silence)")
    p.add_argument("--character", type=str, default="idle.png",
                   help="Player sprite file inside the sprites directory")
    p.add_argument("--scores", type=str, default=SCORES_PATH_DEFAULT,
                   help="Leaderboard JSON file")
    p.add_argument("--log-level", type=str, default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Ramen Runner")
    screen = pygame.display.set_mode((args.width, args.height), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    assets = Path(args.assets)
    audio = AudioCues(assets / "audio")
    leaderboard = Leaderboard(args.scores)
    state = RunState(
        cfg=WorldConfig.for_canvas(args.width, args.height),
        clock=SystemClock(),
        rng=random.Random(args.seed),
        leaderboard=leaderboard,
        on_cue=audio,
    )
    renderer = Renderer(screen, assets / "sprites", character=args.character)
    top_scores = leaderboard.load_top_scores()
    was_over = False

    def quit_game():
        pygame.quit(); sys.exit()

    while True:
        delta_ms = clock.tick(FPS)
        if delta_ms > MAX_FRAME_MS:  # clamp stalls
            delta_ms = MAX_FRAME_MS

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_game()
            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                renderer.screen = screen
                state.resize(event.w, event.h)
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    quit_game()
                if event.key in (K_SPACE, K_UP):
                    state.jump()
                if event.key == K_p:
                    state.toggle_pause()
                if event.key == K_d:
                    renderer.debug = not renderer.debug
                    logging.getLogger(__name__).info("Debug mode: %s", "ON" if renderer.debug else "OFF")
                if event.key == K_m:
                    audio.toggle_mute()
                if event.key == K_r and state.game_over:
                    state.restart()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if not audio.music_started:
                    audio("music_start")
                if state.game_over:
                    state.restart()
                else:
                    state.jump()

        state.step(delta_ms)

        if state.game_over and not was_over:
            top_scores = leaderboard.load_top_scores()
        was_over = state.game_over

        renderer.draw(state, top_scores)
        pygame.display.flip()


if __name__ == "__main__":
    run()
