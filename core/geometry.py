"""Canvas geometry primitives shared by the overlay and compositing code."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"negative size: {self.width}x{self.height}")

    @property
    def center(self) -> "Point":
        return Point(self.width / 2, self.height / 2)


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: "Vector") -> "Point":
        return Point(self.x + other.dx, self.y + other.dy)


@dataclass(frozen=True)
class Vector:
    """Incremental motion since the previous event of a gesture."""

    dx: float
    dy: float


def clamp(value: float, lo: float, hi: float) -> float:
    # lo wins when the range is empty
    return max(lo, min(value, hi))
