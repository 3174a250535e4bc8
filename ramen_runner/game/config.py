# ramen_runner/game/config.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Tuple

# --- Display ---
WIDTH = 1280
HEIGHT = 720
FPS = 60
REFERENCE_SIZE = 800.0      # scale = min(width, height) / REFERENCE_SIZE
MAX_FRAME_MS = 50.0         # frame driver clamps stalls to this

# --- Timing ---
REFERENCE_FRAME_MS = 16.67  # one 60 Hz tick; factor = delta_ms / REFERENCE_FRAME_MS

# --- Physics (unscaled, per reference tick) ---
GRAVITY = 0.6
JUMP_FORCE = -16.0
DOUBLE_JUMP_RATIO = 0.8     # second jump is weaker

# --- Player ---
PLAYER_X_RATIO = 0.2        # player x = width * ratio
PLAYER_SIZE = 100.0
GROUND_OFFSET = 100.0       # ground line sits this far above the bottom edge

# --- Obstacles ---
OBSTACLE_W = 45.0
OBSTACLE_MIN_H = 55.0
OBSTACLE_MAX_H = 85.0
OBSTACLE_SPRITE_COUNT = 3
GATE_CHANCE = 0.3
GATE_CLEARANCE = 1.2        # gap = max jump height * clearance
GATE_TOP_MARGIN = 10.0      # overhead member must stay below this line
SPAWN_X_OFFSET = 100.0      # spawn this far right of the canvas edge

# --- Planes ---
PLANE_W = 120.0
PLANE_H = 60.0
PLANE_SPEED_RATIO = 1.2
PLANE_BAND = (0.3, 0.6)     # fraction of canvas height

# --- Power-ups ---
POWERUP_SIZE = 50.0
POWERUP_BAND = (0.2, 0.7)

# --- Spawn cooldowns (ms): base, min extra, max extra ---
OBSTACLE_COOLDOWN = (900, 200, 1200)
PLANE_COOLDOWN = (5000, 1000, 2999)
POWERUP_COOLDOWN = (7000, 1000, 2999)

# --- Health / invincibility ---
MAX_HEALTH = 4
HIT_GRACE_MS = 1000
POWERUP_INVINCIBILITY_MS = 3000

# --- Difficulty ramp ---
BASE_SPEED = 4.0
SPEED_UP_INTERVAL_MS = 25000
SPEED_UP_INCREMENT = 0.5
SCORE_CHECKPOINT = 300
SCORE_SPEED_MULTIPLIER = 1.2
SCORE_PER_TICK = 0.3
BACKGROUND_SPEED_RATIO = 0.5

# --- Animation ---
WALK_FRAME_MS = 150
WALK_FRAME_COUNT = 6
JUMP_FRAME_MS = 100
JUMP_FRAME_COUNT = 8

# --- Hitbox insets: (x, y, w, h) as fractions of the sprite box ---
HITBOX_INSETS: Dict[str, Tuple[float, float, float, float]] = {
    "player":   (0.2, 0.2, 0.6, 0.6),
    "ground":   (0.05, 0.05, 0.9, 0.9),
    "overhead": (0.1, 0.1, 0.8, 0.8),
    "plane":    (0.1, 0.1, 0.8, 0.8),
    "powerup":  (0.1, 0.1, 0.8, 0.8),
}

# --- Leaderboard ---
SCORES_KEY = "highScores"
MAX_SCORES = 5
SCORES_PATH_DEFAULT = "highscores.json"

# --- Colors (RGB) ---
COLOR_SKY = (135, 206, 235)
COLOR_GROUND = (46, 139, 87)
COLOR_PLAYER = (250, 240, 230)
COLOR_OBSTACLE = (200, 40, 40)
COLOR_PLANE = (128, 0, 128)
COLOR_POWERUP = (255, 215, 0)
COLOR_HUD = (20, 20, 30)
COLOR_HITBOX = (255, 255, 0)


@dataclass(frozen=True)
class WorldConfig:
    """Canvas-dependent values, already multiplied by `scale`."""
    width: float
    height: float
    scale: float
    ground_y: float
    player_x: float
    player_w: float
    player_h: float
    gravity: float
    jump_force: float
    obstacle_w: float
    obstacle_min_h: float
    obstacle_max_h: float
    plane_w: float
    plane_h: float
    powerup_size: float
    base_speed: float
    speed_up_increment: float
    spawn_x: float
    gate_top_margin: float
    max_health: int = MAX_HEALTH

    @classmethod
    def for_canvas(cls, width: float = WIDTH, height: float = HEIGHT, **overrides) -> "WorldConfig":
        s = min(width, height) / REFERENCE_SIZE
        cfg = cls(
            width=float(width),
            height=float(height),
            scale=s,
            ground_y=height - GROUND_OFFSET * s,
            player_x=width * PLAYER_X_RATIO,
            player_w=PLAYER_SIZE * s,
            player_h=PLAYER_SIZE * s,
            gravity=GRAVITY * s,
            jump_force=JUMP_FORCE * s,
            obstacle_w=OBSTACLE_W * s,
            obstacle_min_h=OBSTACLE_MIN_H * s,
            obstacle_max_h=OBSTACLE_MAX_H * s,
            plane_w=PLANE_W * s,
            plane_h=PLANE_H * s,
            powerup_size=POWERUP_SIZE * s,
            base_speed=BASE_SPEED * s,
            speed_up_increment=SPEED_UP_INCREMENT * s,
            spawn_x=width + SPAWN_X_OFFSET * s,
            gate_top_margin=GATE_TOP_MARGIN * s,
        )
        return replace(cfg, **overrides) if overrides else cfg

    @property
    def player_ground_y(self) -> float:
        return self.ground_y - self.player_h

    @property
    def max_jump_height(self) -> float:
        """Peak rise of a single jump: v^2 / (2g)."""
        return self.jump_force * self.jump_force / (2.0 * self.gravity)
