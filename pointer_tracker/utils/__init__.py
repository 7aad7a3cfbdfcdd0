"""
Utilities package for pointer tracking.

This package provides geometry, coordinate extraction and list helpers
shared by the tracker, the drag behaviours and their consumers.
"""

from .gesture_utils import (
    Point,
    Rect,
    GeometryUtils
)
from .coordinates import get_page_xy, get_non_static_parent
from .array_utils import remove_from

__all__ = [
    'Point',
    'Rect',
    'GeometryUtils',
    'get_page_xy',
    'get_non_static_parent',
    'remove_from'
]
