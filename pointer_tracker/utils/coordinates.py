"""
Input-agnostic positions for mouse and touch events.
"""

from .gesture_utils import Point


def get_page_xy(event) -> Point:
    """Current page position of a mouse event, or of the first touch point.

    Touch events that still have fingers down report the first finger.
    Everything else reports the event's own page coordinates, which are
    ``None`` for a ``touchend`` that lifted the last finger.
    """
    source = event
    touches = getattr(event, 'target_touches', None)
    if touches:
        source = touches[0]

    return Point(getattr(source, 'page_x', None), getattr(source, 'page_y', None))


def get_non_static_parent(element):
    """Closest ancestor whose position is not static.

    The walk stops at the body: if nothing below it is positioned, the body
    is returned. A detached element gives None.
    """
    parent = None
    while element.tag != "body":
        parent = element.parent
        if parent is None or parent.computed_position != "static":
            break
        element = parent

    return parent
