# ramen_runner/game/spawners.py
from __future__ import annotations
import logging
import random
from typing import List, Optional, Tuple

from .config import (
    WorldConfig,
    OBSTACLE_COOLDOWN, PLANE_COOLDOWN, POWERUP_COOLDOWN,
    OBSTACLE_SPRITE_COUNT, GATE_CHANCE, GATE_CLEARANCE,
    PLANE_SPEED_RATIO, PLANE_BAND, POWERUP_BAND,
)
from .entities import Entity, make_gate, make_ground_obstacle, make_plane, make_powerup

logger = logging.getLogger(__name__)


class Spawner:
    """
    Retriggering countdown timer. While active, once `cooldown_ms` has elapsed
    since the last spawn it emits entities and draws a fresh jittered cooldown:
        cooldown = base + randint(min_extra, max_extra)
    Subclasses implement `_spawn(speed)`.
    """
    name = "spawner"

    def __init__(self, cfg: WorldConfig, rng: random.Random,
                 cooldown: Tuple[int, int, int], now_ms: float = 0.0):
        self.cfg = cfg
        self.rng = rng
        self.base_cooldown_ms, self.min_extra_ms, self.max_extra_ms = cooldown
        self.last_spawn_at = float(now_ms)
        self.cooldown_ms = self._next_cooldown()
        self.active = True

    def _next_cooldown(self) -> float:
        return float(self.base_cooldown_ms + self.rng.randint(self.min_extra_ms, self.max_extra_ms))

    def start(self, now_ms: float):
        self.active = True
        self.last_spawn_at = float(now_ms)
        self.cooldown_ms = self._next_cooldown()

    def stop(self):
        self.active = False

    def shift(self, delta_ms: float):
        """Push the timer forward, e.g. by the length of a pause."""
        self.last_spawn_at += delta_ms

    def update(self, now_ms: float, speed: float) -> List[Entity]:
        if not self.active:
            return []
        if now_ms - self.last_spawn_at < self.cooldown_ms:
            return []
        spawned = self._spawn(speed)
        self.last_spawn_at = float(now_ms)
        self.cooldown_ms = self._next_cooldown()
        logger.debug("%s spawned %s (next in %.0f ms)",
                     self.name, [e.kind for e in spawned], self.cooldown_ms)
        return spawned

    def _spawn(self, speed: float) -> List[Entity]:
        raise NotImplementedError


class ObstacleSpawner(Spawner):
    """Single ground obstacles, or with GATE_CHANCE a clearable ground+overhead gate."""
    name = "obstacles"

    def __init__(self, cfg: WorldConfig, rng: random.Random, now_ms: float = 0.0):
        super().__init__(cfg, rng, OBSTACLE_COOLDOWN, now_ms)

    def _rand_height(self) -> float:
        return self.rng.uniform(self.cfg.obstacle_min_h, self.cfg.obstacle_max_h)

    def _sprite(self) -> int:
        return self.rng.randrange(OBSTACLE_SPRITE_COUNT)

    def gate_gap(self) -> float:
        return self.cfg.max_jump_height * GATE_CLEARANCE

    def _spawn(self, speed: float) -> List[Entity]:
        if self.rng.random() < GATE_CHANCE:
            gate = self._try_gate(speed)
            if gate is not None:
                return [gate]
        return [make_ground_obstacle(self.cfg.spawn_x, self.cfg.ground_y, self.cfg.obstacle_w,
                                     self._rand_height(), speed, self._sprite())]

    def _try_gate(self, speed: float) -> Optional[Entity]:
        cfg = self.cfg
        h = self._rand_height()
        gate = make_gate(cfg.spawn_x, cfg.ground_y, cfg.obstacle_w, h, self.gate_gap(),
                         speed, (self._sprite(), self._sprite()))
        if gate.y < cfg.gate_top_margin:
            # Overhead member would leave the play area; shrinking the gap is not allowed.
            logger.debug("gate does not fit (top=%.1f), spawning single obstacle", gate.y)
            return None
        return gate


class PlaneSpawner(Spawner):
    name = "planes"

    def __init__(self, cfg: WorldConfig, rng: random.Random, now_ms: float = 0.0):
        super().__init__(cfg, rng, PLANE_COOLDOWN, now_ms)

    def _spawn(self, speed: float) -> List[Entity]:
        lo, hi = PLANE_BAND
        y = self.rng.uniform(self.cfg.height * lo, self.cfg.height * hi)
        return [make_plane(self.cfg.spawn_x, y, self.cfg.plane_w, self.cfg.plane_h,
                           speed * PLANE_SPEED_RATIO)]


class PowerUpSpawner(Spawner):
    name = "powerups"

    def __init__(self, cfg: WorldConfig, rng: random.Random, now_ms: float = 0.0):
        super().__init__(cfg, rng, POWERUP_COOLDOWN, now_ms)

    def _spawn(self, speed: float) -> List[Entity]:
        lo, hi = POWERUP_BAND
        y = self.rng.uniform(self.cfg.height * lo, self.cfg.height * hi)
        return [make_powerup(self.cfg.spawn_x, y, self.cfg.powerup_size, speed)]
