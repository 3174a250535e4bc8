# ramen_runner/game/state.py
from __future__ import annotations
import logging
import random
from typing import Any, Callable, Dict, List, Optional

from .clock import SystemClock
from .config import (
    WorldConfig, REFERENCE_FRAME_MS,
    HIT_GRACE_MS, POWERUP_INVINCIBILITY_MS,
    SPEED_UP_INTERVAL_MS, SCORE_CHECKPOINT, SCORE_SPEED_MULTIPLIER,
    SCORE_PER_TICK, BACKGROUND_SPEED_RATIO,
    WALK_FRAME_MS, WALK_FRAME_COUNT, JUMP_FRAME_MS, JUMP_FRAME_COUNT,
)
from .entities import Entity
from .player import Player
from .spawners import ObstacleSpawner, PlaneSpawner, PowerUpSpawner, Spawner

logger = logging.getLogger(__name__)

# Audio cue names
CUE_JUMP = "jump"
CUE_COLLISION = "collision"
CUE_POWERUP = "powerup"
CUE_MUSIC_START = "music_start"
CUE_MUSIC_STOP = "music_stop"


def _no_cue(_name: str) -> None:
    pass


class RunState:
    """
    Whole mutable world of one run: player, live entities, score, health,
    difficulty, invincibility window and the Running / Paused / GameOver flags.

    A frame driver calls `step(delta_ms)` once per frame; input calls `jump()`,
    `toggle_pause()` and `restart()`. Every timer is an absolute timestamp from
    `clock.now_ms()` compared on each step, so injecting a `ManualClock` makes
    the whole simulation reproducible.
    """

    def __init__(self,
                 cfg: Optional[WorldConfig] = None,
                 clock=None,
                 rng: Optional[random.Random] = None,
                 leaderboard=None,
                 on_cue: Optional[Callable[[str], None]] = None):
        self.cfg = cfg if cfg is not None else WorldConfig.for_canvas()
        self.clock = clock if clock is not None else SystemClock()
        self.rng = rng if rng is not None else random.Random()
        self.leaderboard = leaderboard
        self.on_cue = on_cue if on_cue is not None else _no_cue

        now = self.clock.now_ms()
        self.player = Player(x=self.cfg.player_x, y=self.cfg.player_ground_y,
                             width=self.cfg.player_w, height=self.cfg.player_h)
        self.obstacle_spawner = ObstacleSpawner(self.cfg, self.rng, now)
        self.plane_spawner = PlaneSpawner(self.cfg, self.rng, now)
        self.powerup_spawner = PowerUpSpawner(self.cfg, self.rng, now)
        self._reset(now)

    # -------------------- Lifecycle --------------------

    @property
    def spawners(self) -> List[Spawner]:
        return [self.obstacle_spawner, self.plane_spawner, self.powerup_spawner]

    def _reset(self, now: float):
        self.score: float = 0.0
        self.health: int = self.cfg.max_health
        self.entities: List[Entity] = []
        self.obstacle_speed: float = self.cfg.base_speed
        self.invincible_until: Optional[float] = None
        self.game_over: bool = False
        self.paused: bool = False
        self._paused_at: Optional[float] = None
        self.last_speed_up_at: float = now
        self.last_score_checkpoint: int = 0
        self.grounded: bool = True
        self.walk_frame: int = 0
        self.jump_frame: int = 0
        self._last_walk_frame_at: float = now
        self._last_jump_frame_at: float = now
        self.background_offset: float = 0.0

        self.player.x = self.cfg.player_x
        self.player.land(self.cfg.ground_y)
        for sp in self.spawners:
            sp.start(now)

    def restart(self):
        """Back to a fresh Running state; the leaderboard is kept."""
        self._reset(self.clock.now_ms())
        self.on_cue(CUE_MUSIC_START)
        logger.info("Run restarted")

    def _enter_game_over(self):
        if self.game_over:
            return
        self.game_over = True
        for sp in self.spawners:
            sp.stop()
        self.player.vy = 0.0
        self.on_cue(CUE_MUSIC_STOP)
        final = int(self.score)
        if self.leaderboard is not None:
            self.leaderboard.record_score(final)
        logger.info("Game over. Final score: %d", final)

    # -------------------- Input --------------------

    def jump(self):
        if self.game_over or self.paused:
            return
        if self.player.jump(self.cfg.jump_force):
            self.on_cue(CUE_JUMP)

    def toggle_pause(self):
        if self.game_over:
            return
        now = self.clock.now_ms()
        if not self.paused:
            self.paused = True
            self._paused_at = now
            self.on_cue(CUE_MUSIC_STOP)
            logger.info("Paused")
            return
        paused_for = now - (self._paused_at if self._paused_at is not None else now)
        self._shift_timers(paused_for)
        self.paused = False
        self._paused_at = None
        self.on_cue(CUE_MUSIC_START)
        logger.info("Resumed after %.0f ms", paused_for)

    def _shift_timers(self, delta_ms: float):
        for sp in self.spawners:
            sp.shift(delta_ms)
        if self.invincible_until is not None:
            self.invincible_until += delta_ms
        self.last_speed_up_at += delta_ms
        self._last_walk_frame_at += delta_ms
        self._last_jump_frame_at += delta_ms

    def resize(self, width: float, height: float):
        """
        Rebuild scaled values for a new canvas. Live entities and a mid-air
        player follow the world by the same scale ratio.
        """
        old_scale, old_ground_y = self.cfg.scale, self.cfg.ground_y
        self.cfg = WorldConfig.for_canvas(width, height, max_health=self.cfg.max_health)
        ratio = self.cfg.scale / old_scale
        for sp in self.spawners:
            sp.cfg = self.cfg
        self.obstacle_speed *= ratio
        for e in self.entities:
            e.rescale(ratio, old_ground_y, self.cfg.ground_y)

        p = self.player
        feet_above_ground = old_ground_y - (p.y + p.height)
        p.x = self.cfg.player_x
        p.width = self.cfg.player_w
        p.height = self.cfg.player_h
        if p.is_jumping:
            p.vy *= ratio
            p.y = self.cfg.player_ground_y - feet_above_ground * ratio
        if not p.is_jumping or p.y > self.cfg.player_ground_y:
            p.land(self.cfg.ground_y)

    # -------------------- Damage / pickups --------------------

    def is_invincible(self, now: Optional[float] = None) -> bool:
        if self.invincible_until is None:
            return False
        if now is None:
            # frozen at the pause instant until resume shifts the window
            now = self._paused_at if self.paused and self._paused_at is not None else self.clock.now_ms()
        return now < self.invincible_until

    def apply_damage(self, now: Optional[float] = None) -> bool:
        """One hit. Ignored while invincible or after game over. Returns True if health was lost."""
        now = self.clock.now_ms() if now is None else now
        if self.game_over or self.is_invincible(now):
            return False
        self.health = max(0, self.health - 1)
        self.on_cue(CUE_COLLISION)
        logger.info("Hit! Health: %d", self.health)
        if self.health <= 0:
            self._enter_game_over()
        else:
            self.invincible_until = now + HIT_GRACE_MS
        return True

    def collect_powerup(self, powerup: Entity, now: Optional[float] = None):
        now = self.clock.now_ms() if now is None else now
        powerup.collected = True
        until = now + POWERUP_INVINCIBILITY_MS
        if self.invincible_until is None or self.invincible_until < until:
            self.invincible_until = until
        self.on_cue(CUE_POWERUP)
        logger.info("Power-up collected, invincible until %.0f", self.invincible_until)

    # -------------------- Simulation --------------------

    @property
    def hazards(self) -> List[Entity]:
        return [e for e in self.entities if e.is_hazard]

    @property
    def power_ups(self) -> List[Entity]:
        return [e for e in self.entities if e.kind == "powerup"]

    def step(self, delta_ms: float):
        if self.game_over or self.paused:
            return
        now = self.clock.now_ms()
        factor = max(0.0, float(delta_ms)) / REFERENCE_FRAME_MS
        cfg = self.cfg

        self.grounded = self.player.apply_gravity(factor, cfg.gravity, cfg.ground_y)
        self._advance_animation(now)
        self._apply_difficulty(now)

        for sp in self.spawners:
            self.entities.extend(sp.update(now, self.obstacle_speed))

        for e in self.entities:
            e.advance(factor)

        me = self.player.hitbox()
        if not self.is_invincible(now):
            # first hit only: one damage per frame at most
            if any(e.collides_with(me) for e in self.hazards):
                self.apply_damage(now)
                if self.game_over:
                    return

        for p in self.power_ups:
            if not p.collected and p.collides_with(me):
                self.collect_powerup(p, now)

        self.prune()

        self.score += SCORE_PER_TICK * factor
        self.background_offset += self.obstacle_speed * BACKGROUND_SPEED_RATIO * factor

    def prune(self):
        """Drop off-screen entities and collected power-ups."""
        self.entities = [e for e in self.entities if not e.expired()]

    def _apply_difficulty(self, now: float):
        if now - self.last_speed_up_at >= SPEED_UP_INTERVAL_MS:
            self.obstacle_speed += self.cfg.speed_up_increment
            self.last_speed_up_at = now
            logger.debug("time-based speed up -> %.2f", self.obstacle_speed)

        while self.score >= self.last_score_checkpoint + SCORE_CHECKPOINT:
            self.obstacle_speed *= SCORE_SPEED_MULTIPLIER
            self.last_score_checkpoint += SCORE_CHECKPOINT
            logger.debug("score-based speed up -> %.2f", self.obstacle_speed)

    def _advance_animation(self, now: float):
        if self.grounded:
            if now - self._last_walk_frame_at >= WALK_FRAME_MS:
                self.walk_frame = (self.walk_frame + 1) % WALK_FRAME_COUNT
                self._last_walk_frame_at = now
        else:
            if now - self._last_jump_frame_at >= JUMP_FRAME_MS:
                self.jump_frame = (self.jump_frame + 1) % JUMP_FRAME_COUNT
                self._last_jump_frame_at = now

    # -------------------- Read side --------------------

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of the run for renderers, logs and the env's info dict."""
        p = self.player
        return {
            "player": {
                "x": p.x, "y": p.y, "w": p.width, "h": p.height, "vy": p.vy,
                "is_jumping": p.is_jumping, "can_double_jump": p.can_double_jump,
                "pose": "walk" if self.grounded else "jump",
                "frame": self.walk_frame if self.grounded else self.jump_frame,
            },
            "entities": [
                {"kind": e.kind, "x": e.x, "y": e.y, "w": e.width, "h": e.height,
                 "sprite": e.sprite_index}
                for e in self.entities
            ],
            "score": int(self.score),
            "health": self.health,
            "speed": self.obstacle_speed,
            "invincible": self.is_invincible(),
            "paused": self.paused,
            "game_over": self.game_over,
        }
