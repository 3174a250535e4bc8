# ramen_runner/game/render.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from .config import (
    OBSTACLE_SPRITE_COUNT, WALK_FRAME_COUNT, JUMP_FRAME_COUNT,
    COLOR_SKY, COLOR_GROUND, COLOR_PLAYER, COLOR_OBSTACLE, COLOR_PLANE,
    COLOR_POWERUP, COLOR_HUD, COLOR_HITBOX,
)
from .geometry import Box
from .state import RunState

logger = logging.getLogger(__name__)


def load_image(path: Path) -> Optional[pygame.Surface]:
    """Load a sprite, or None (logged) so the renderer falls back to a shape."""
    try:
        return pygame.image.load(str(path))
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("Failed to load sprite %s: %s", path, e)
        return None


def _rect(x: float, y: float, w: float, h: float) -> pygame.Rect:
    return pygame.Rect(int(x), int(y), max(1, int(w)), max(1, int(h)))


class Renderer:
    """Draws a RunState. Reads the state only; never mutates it."""

    def __init__(self, screen: pygame.Surface, sprite_dir: Optional[Path] = None,
                 character: str = "idle.png"):
        self.screen = screen
        self.debug = False
        self.font = pygame.font.SysFont("arial", 22)
        self.big_font = pygame.font.SysFont("arial", 48)
        self.sprites: Dict[str, Optional[pygame.Surface]] = {}
        self.walk_frames: List[Optional[pygame.Surface]] = []
        self.jump_frames: List[Optional[pygame.Surface]] = []
        if sprite_dir is not None:
            self._load(Path(sprite_dir), character)

    def _load(self, d: Path, character: str):
        self.sprites["background"] = load_image(d / "background.png")
        self.sprites["player"] = load_image(d / character)
        self.sprites["plane"] = load_image(d / "plane.png")
        self.sprites["powerup"] = load_image(d / "powerup.png")
        self.sprites["heart"] = load_image(d / "heart.png")
        for i in range(OBSTACLE_SPRITE_COUNT):
            self.sprites[f"obstacle{i}"] = load_image(d / "obstacles" / f"obstacle{i + 1}.png")
        self.walk_frames = [load_image(d / "character" / f"walk{i}.png")
                            for i in range(1, WALK_FRAME_COUNT + 1)]
        self.jump_frames = [load_image(d / "character" / f"jump{i}.png")
                            for i in range(1, JUMP_FRAME_COUNT + 1)]

    def _blit_or_fill(self, sprite: Optional[pygame.Surface], r: pygame.Rect, color):
        if sprite is None:
            pygame.draw.rect(self.screen, color, r)
        else:
            self.screen.blit(pygame.transform.scale(sprite, r.size), r)

    def _player_sprite(self, state: RunState) -> Optional[pygame.Surface]:
        frames = self.walk_frames if state.grounded else self.jump_frames
        idx = state.walk_frame if state.grounded else state.jump_frame
        if frames and frames[idx % len(frames)] is not None:
            return frames[idx % len(frames)]
        return self.sprites.get("player")

    def draw(self, state: RunState, top_scores: Optional[List[int]] = None):
        cfg = state.cfg
        w, h = self.screen.get_size()

        bg = self.sprites.get("background")
        if bg is None:
            self.screen.fill(COLOR_SKY)
        else:
            bg = pygame.transform.scale(bg, (w, int(cfg.ground_y)))
            off = int(state.background_offset) % w
            self.screen.blit(bg, (-off, 0))
            self.screen.blit(bg, (w - off, 0))
        pygame.draw.rect(self.screen, COLOR_GROUND, _rect(0, cfg.ground_y, w, h - cfg.ground_y))

        for e in state.entities:
            parts = e.members or [e]
            for part in parts:
                r = _rect(part.x, part.y, part.width, part.height)
                if part.kind == "plane":
                    self._blit_or_fill(self.sprites.get("plane"), r, COLOR_PLANE)
                elif part.kind == "powerup":
                    sprite = self.sprites.get("powerup")
                    if sprite is None:
                        pygame.draw.ellipse(self.screen, COLOR_POWERUP, r)
                    else:
                        self._blit_or_fill(sprite, r, COLOR_POWERUP)
                else:
                    self._blit_or_fill(self.sprites.get(f"obstacle{part.sprite_index}"), r, COLOR_OBSTACLE)

        p = state.player
        pr = _rect(p.x, p.y, p.width, p.height)
        sprite = self._player_sprite(state)
        if sprite is not None and state.is_invincible():
            sprite = sprite.copy()
            sprite.set_alpha(128)
        self._blit_or_fill(sprite, pr, COLOR_PLAYER)

        if self.debug:
            self._draw_hitboxes([p.hitbox()] + [hb for e in state.entities for hb in e.hitboxes()])

        self._draw_hud(state)
        if state.paused:
            self._center_text("PAUSED", h // 2)
        if state.game_over:
            self._draw_game_over(state, top_scores or [])

    def _draw_hitboxes(self, boxes: List[Box]):
        for b in boxes:
            pygame.draw.rect(self.screen, COLOR_HITBOX, _rect(b.x, b.y, b.w, b.h), width=2)

    def _draw_hud(self, state: RunState):
        self.screen.blit(self.font.render(f"Score: {int(state.score)}", True, COLOR_HUD), (12, 10))
        heart = self.sprites.get("heart")
        for i in range(state.health):
            r = _rect(12 + i * 34, 40, 28, 28)
            self._blit_or_fill(heart, r, COLOR_OBSTACLE)

    def _center_text(self, text: str, y: int, big: bool = True, color=COLOR_HUD):
        font = self.big_font if big else self.font
        surf = font.render(text, True, color)
        self.screen.blit(surf, (self.screen.get_width() // 2 - surf.get_width() // 2, y))

    def _draw_game_over(self, state: RunState, top_scores: List[int]):
        w, h = self.screen.get_size()
        panel = pygame.Surface((w, h), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 170))
        self.screen.blit(panel, (0, 0))
        y = h // 4
        white = (255, 255, 255)
        self._center_text("GAME OVER", y, color=white)
        self._center_text(f"Score: {int(state.score)}", y + 60, big=False, color=white)
        for i, s in enumerate(top_scores):
            self._center_text(f"{i + 1}. {s}", y + 100 + i * 28, big=False, color=white)
        self._center_text("Click or press R to restart", y + 110 + len(top_scores) * 28,
                          big=False, color=white)
