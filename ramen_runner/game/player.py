# ramen_runner/game/player.py
from __future__ import annotations
from dataclasses import dataclass

from .config import DOUBLE_JUMP_RATIO, HITBOX_INSETS
from .geometry import Box, inset_box


@dataclass
class Player:
    """
    Runner with a fixed x. y is the TOP of the sprite, y grows downward,
    so a jump is a negative vy.
    """
    x: float
    y: float
    width: float
    height: float
    vy: float = 0.0
    is_jumping: bool = False
    can_double_jump: bool = False

    def hitbox(self) -> Box:
        return inset_box(self.x, self.y, self.width, self.height, HITBOX_INSETS["player"])

    def jump(self, jump_force: float) -> bool:
        """First jump from the ground, one weaker jump in the air. Returns True if performed."""
        if not self.is_jumping:
            self.vy = jump_force
            self.is_jumping = True
            self.can_double_jump = True
            return True
        if self.can_double_jump:
            self.vy = jump_force * DOUBLE_JUMP_RATIO
            self.can_double_jump = False
            return True
        return False

    def apply_gravity(self, factor: float, gravity: float, ground_y: float) -> bool:
        """Integrate one step and clamp to the ground line. Returns True when grounded."""
        self.vy += gravity * factor
        self.y += self.vy * factor

        floor = ground_y - self.height
        if self.y > floor:
            self.y = floor
            self.vy = 0.0
            self.is_jumping = False
            self.can_double_jump = False
        return self.y >= floor and not self.is_jumping

    def land(self, ground_y: float):
        self.y = ground_y - self.height
        self.vy = 0.0
        self.is_jumping = False
        self.can_double_jump = False
