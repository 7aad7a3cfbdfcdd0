"""
What happens to the dragged thing while a gesture is tracked.

A tracking session delivers every move as ``on_move(point, event)`` and the
end of the gesture as ``on_end(event)``. ``MoveWithPointer`` keeps an
element under the pointer; ``CallbackBehavior`` adapts plain functions.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..utils.coordinates import get_page_xy, get_non_static_parent
from ..utils.gesture_utils import Point, Rect

logger = logging.getLogger(__name__)


class DragBehavior(ABC):
    """Receives the moves and the end of one tracked gesture."""

    @abstractmethod
    def on_move(self, point: Point, event) -> None:
        """Called for every move event, in delivery order."""

    def on_end(self, event) -> None:
        """Called once when the gesture ends."""


class CallbackBehavior(DragBehavior):
    """Forwards moves and the end of the gesture to plain callables."""

    def __init__(self, drag: Optional[Callable] = None, drop: Optional[Callable] = None):
        self.drag = drag
        self.drop = drop

    def on_move(self, point: Point, event) -> None:
        if self.drag is not None:
            self.drag(event)

    def on_end(self, event) -> None:
        if self.drop is not None:
            self.drop(event)


class MoveWithPointer(DragBehavior):
    """Move an element so the pointer stays over the point it grabbed.

    The element is the start event's target, or its closest ancestor
    matching ``selector``. Unless a complete ``offset`` is given, the offset
    is measured once from the element's box relative to its closest
    positioned ancestor, minus the starting pointer position.
    """

    def __init__(self, event, selector: Optional[str] = None, offset: Optional[Point] = None):
        target = event.target
        if isinstance(selector, str):
            target = target.closest(selector)
        self.target = target

        given = _as_point(offset)
        self.offset = given if given is not None else self.measure_offset(event, target)

    @staticmethod
    def measure_offset(event, target) -> Point:
        fix = get_non_static_parent(target)
        fix_rect = fix.get_bounding_client_rect() if fix is not None else Rect(0, 0)
        rect = target.get_bounding_client_rect()
        x, y = get_page_xy(event)

        offset = Point(rect.left - fix_rect.left - x, rect.top - fix_rect.top - y)
        logger.debug(f"Drag offset for {target!r} relative to {fix!r}: {offset}")
        return offset

    def on_move(self, point: Point, event) -> None:
        if not point.is_complete():
            return
        self.target.style["left"] = f"{_px(self.offset.x + point.x)}px"
        self.target.style["top"] = f"{_px(self.offset.y + point.y)}px"

    def __call__(self, event) -> None:
        self.on_move(get_page_xy(event), event)


def default_drag_action(event, selector: Optional[str] = None,
                        offset: Optional[Point] = None) -> Callable:
    """Drag handler that moves the target (or its ``selector`` ancestor) with the pointer.

    Returns a callable taking each move event.
    """
    return MoveWithPointer(event, selector, offset)


def _as_point(offset) -> Optional[Point]:
    """Accept a Point, any object with x and y, or a dict. Incomplete offsets give None."""
    if offset is None:
        return None
    if isinstance(offset, dict):
        point = Point(offset.get("x"), offset.get("y"))
    else:
        point = Point(getattr(offset, "x", None), getattr(offset, "y", None))
    return point if point.is_complete() else None


def _px(value: float):
    """Drop a trailing ``.0`` so whole pixels render as ``12px``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
