"""
Pointer Tracker Package
Drag-and-drop tracking for mouse and touch input behind one abstraction.
"""

from .core.elements import Document, Element
from .core.events import GestureEvent, Touch, InputFamily
from .core.tracking import TrackingSession, start_tracking
from .core.movement import detect_movement
from .gestures.drag_behavior import DragBehavior, MoveWithPointer, default_drag_action
from .errors import MovementRejected, RejectReason
from .utils import get_page_xy, get_non_static_parent, remove_from

__version__ = "1.0.0"
__all__ = [
    "Document", "Element", "GestureEvent", "Touch", "InputFamily",
    "TrackingSession", "start_tracking", "detect_movement",
    "DragBehavior", "MoveWithPointer", "default_drag_action",
    "MovementRejected", "RejectReason",
    "get_page_xy", "get_non_static_parent", "remove_from",
]
