"""
Shared geometry for pointer tracking.

Coordinates are page coordinates in pixels. An axis may be ``None`` when
the event it was read from carried no position.
"""

from typing import Optional, NamedTuple


class Point(NamedTuple):
    """A 2D page coordinate, or a displacement between two of them."""

    x: Optional[float]
    y: Optional[float]

    def __repr__(self):
        return f"Point({self.x}, {self.y})"

    def is_complete(self) -> bool:
        """True when both axes hold numbers."""
        return GeometryUtils.is_number(self.x) and GeometryUtils.is_number(self.y)


class Rect(NamedTuple):
    """An axis-aligned box in page coordinates."""

    left: float
    top: float
    width: float = 0
    height: float = 0

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def x(self) -> float:
        return self.left

    @property
    def y(self) -> float:
        return self.top

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies inside the box (right/bottom edges excluded)."""
        return self.left <= x < self.right and self.top <= y < self.bottom


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def is_number(value) -> bool:
        """True for ints and floats other than NaN (bools excluded)."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return value == value

    @staticmethod
    def squared_distance(p1: Point, p2: Point) -> float:
        """Squared Euclidean distance, so thresholds can skip the square root."""
        dx = p1.x - p2.x
        dy = p1.y - p2.y
        return dx * dx + dy * dy

    @staticmethod
    def clamp(value: float, low: float, high: float) -> float:
        """Constrain a value to the closed range [low, high]."""
        return max(low, min(value, high))

    @staticmethod
    def scale_distance(width: float, height: float, percent: float) -> int:
        """Convert a percentage of the screen diagonal into pixels."""
        diagonal = (width ** 2 + height ** 2) ** 0.5
        return int(diagonal * percent / 100)
