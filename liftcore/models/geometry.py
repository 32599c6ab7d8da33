"""Plan-view geometry: points, axis-aligned rectangles and distances (metres)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, d: Dict[str, float]) -> Point:
        return cls(x=float(d["x"]), y=float(d["y"]))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its minimum corner. Bounds are inclusive."""

    x: float
    y: float
    width: float
    height: float

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, p: Point) -> bool:
        return self.x <= p.x <= self.x_max and self.y <= p.y <= self.y_max

    def contains_rect(self, other: Rect) -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.x_max <= self.x_max
            and other.y_max <= self.y_max
        )

    def overlap_area(self, other: Rect) -> float:
        """Intersection area; rectangles that only share an edge overlap by 0."""
        dx = min(self.x_max, other.x_max) - max(self.x, other.x)
        dy = min(self.y_max, other.y_max) - max(self.y, other.y)
        return max(dx, 0.0) * max(dy, 0.0)

    @classmethod
    def centered_square(cls, center: Point, side: float) -> Rect:
        return cls(center.x - side / 2.0, center.y - side / 2.0, side, side)


def distance(a: Point, b: Point) -> float:
    """Euclidean plan distance between two points."""
    return float(np.hypot(b.x - a.x, b.y - a.y))


def distance_to_rect(p: Point, r: Rect) -> float:
    """Shortest distance from a point to a rectangle, 0 if the point is inside."""
    dx = max(r.x - p.x, 0.0, p.x - r.x_max)
    dy = max(r.y - p.y, 0.0, p.y - r.y_max)
    return float(np.hypot(dx, dy))
