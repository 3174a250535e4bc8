# ramen_runner/game/geometry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in float screen space (y grows downward)."""
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h


def inset_box(x: float, y: float, w: float, h: float,
              inset: Tuple[float, float, float, float]) -> Box:
    """Shrink a sprite box to its collidable interior."""
    ix, iy, iw, ih = inset
    return Box(x + ix * w, y + iy * h, iw * w, ih * h)


def boxes_overlap(a: Box, b: Box) -> bool:
    """Touching edges count as an overlap."""
    return not (
        a.right < b.x or
        a.x > b.right or
        a.bottom < b.y or
        a.y > b.bottom
    )
