# ramen_runner/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np

from ramen_runner.game.geometry import Box
from ramen_runner.game.state import RunState

# Number of upcoming hazard hitboxes described in the vector
N_HAZARDS = 2
# Speed is normalized against base_speed * this
SPEED_NORM_RATIO = 4.0

OBS_SIZE = 6 + 3 * N_HAZARDS
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0] + [0.0, 0.0, 0.0] * N_HAZARDS, dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _hazards_ahead(state: RunState, me: Box) -> List[Box]:
    """Hazard hitboxes not yet fully behind the player, nearest first."""
    boxes = [hb for e in state.hazards for hb in e.hitboxes() if hb.right >= me.x]
    return sorted(boxes, key=lambda b: b.x)


def build_observation(state: RunState) -> np.ndarray:
    """
    Returns a fixed (12,) float32 vector:
      [ y_norm, vy_norm, is_jumping, can_double_jump, invincible, speed_norm,
        dx@1, top@1, bottom@1,
        dx@2, top@2, bottom@2 ]
    - y_norm in [0,1]: 0 = top of screen, 1 = standing on the ground
    - vy_norm in [-1,1]: vy / |jump_force|, clipped
    - dx: gap from the player's hitbox right edge to the hazard's left edge,
      over canvas width; top/bottom: hazard hitbox edges over canvas height.
      Sentinel for a missing hazard: dx=1, top=1, bottom=1.
    """
    cfg = state.cfg
    p = state.player
    me = p.hitbox()

    vmax = max(1e-6, abs(cfg.jump_force))
    vy = max(-vmax, min(p.vy, vmax))

    feats: List[float] = [
        _clamp01(p.y / max(1.0, cfg.player_ground_y)),
        vy / vmax,
        float(p.is_jumping),
        float(p.can_double_jump),
        float(state.is_invincible()),
        _clamp01(state.obstacle_speed / (cfg.base_speed * SPEED_NORM_RATIO)),
    ]

    ahead = _hazards_ahead(state, me)
    for i in range(N_HAZARDS):
        if i < len(ahead):
            hb = ahead[i]
            feats.extend([
                _clamp01((hb.x - me.right) / cfg.width),
                _clamp01(hb.y / cfg.height),
                _clamp01(hb.bottom / cfg.height),
            ])
        else:
            feats.extend([1.0, 1.0, 1.0])

    return np.asarray(feats, dtype=np.float32)
