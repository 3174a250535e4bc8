# ramen_runner/game/entities.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .config import HITBOX_INSETS
from .geometry import Box, boxes_overlap, inset_box

HAZARD_KINDS = ("ground", "overhead", "gate", "plane")


@dataclass
class Entity:
    """
    One scrolling world object. `kind` is one of:
      - "ground"   : obstacle standing on the ground line
      - "overhead" : obstacle hanging above a ground obstacle (gate member)
      - "gate"     : a ground + overhead pair that moves and expires together
      - "plane"    : fast airborne obstacle
      - "powerup"  : pickup granting invincibility
    Each entity owns its speed, captured when it was spawned.
    """
    kind: str
    x: float
    y: float
    width: float
    height: float
    speed: float
    sprite_index: int = 0
    collected: bool = False
    members: List["Entity"] = field(default_factory=list)

    def __post_init__(self):
        assert self.width > 0 and self.height > 0, "entity size must be positive"
        assert self.speed > 0, "entities only move leftward"

    @property
    def is_hazard(self) -> bool:
        return self.kind in HAZARD_KINDS

    def advance(self, factor: float):
        """Scroll left by speed * factor (members follow the gate)."""
        dx = self.speed * factor
        self.x -= dx
        for m in self.members:
            m.x -= dx

    def rescale(self, ratio: float, old_ground_y: float, new_ground_y: float):
        """Scale size, x and speed by `ratio`; y keeps its scaled distance to the ground line."""
        self.x *= ratio
        self.y = new_ground_y - (old_ground_y - self.y) * ratio
        self.width *= ratio
        self.height *= ratio
        self.speed *= ratio
        for m in self.members:
            m.rescale(ratio, old_ground_y, new_ground_y)

    def off_screen(self) -> bool:
        if self.members:
            return all(m.off_screen() for m in self.members)
        return self.x + self.width < 0

    def expired(self) -> bool:
        return self.collected or self.off_screen()

    def hitboxes(self) -> List[Box]:
        if self.members:
            return [box for m in self.members for box in m.hitboxes()]
        return [inset_box(self.x, self.y, self.width, self.height, HITBOX_INSETS[self.kind])]

    def collides_with(self, box: Box) -> bool:
        return any(boxes_overlap(box, hb) for hb in self.hitboxes())


def make_ground_obstacle(x: float, ground_y: float, width: float, height: float,
                         speed: float, sprite_index: int = 0) -> Entity:
    return Entity("ground", x, ground_y - height, width, height, speed, sprite_index)


def make_gate(x: float, ground_y: float, width: float, height: float, gap: float,
              speed: float, sprite_indices=(0, 0)) -> Entity:
    """
    Ground obstacle plus an overhead one of the same size whose bottom sits
    `gap` above the ground obstacle's top.
    """
    ground = make_ground_obstacle(x, ground_y, width, height, speed, sprite_indices[0])
    overhead = Entity("overhead", x, ground.y - gap - height, width, height, speed, sprite_indices[1])
    top = overhead.y
    return Entity("gate", x, top, width, ground_y - top, speed, members=[ground, overhead])


def make_plane(x: float, y: float, width: float, height: float, speed: float) -> Entity:
    return Entity("plane", x, y, width, height, speed)


def make_powerup(x: float, y: float, size: float, speed: float) -> Entity:
    return Entity("powerup", x, y, size, size, speed)
