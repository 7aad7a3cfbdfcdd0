"""
Tracking sessions: follow one mouse or touch gesture from start to end.

A session listens on the document body for the move and end events of the
gesture's input family, so fast drags that leave the original target are
still followed. It also blocks the page's default touch scrolling while the
gesture lasts.

Only one session should be live at a time. Starting a second one without
cancelling the first is not detected: both would receive every move.
"""

import logging
from typing import Callable, Optional, Union

from ..config.settings import TrackerConfig
from ..errors import PointerTrackerError
from ..gestures.drag_behavior import DragBehavior, CallbackBehavior, MoveWithPointer
from ..utils.coordinates import get_page_xy
from ..utils.gesture_utils import Point
from .events import InputFamily

logger = logging.getLogger(__name__)

DragHandler = Union[Callable, DragBehavior, str, None]


def suppress_default(event):
    """Stop the page scrolling under a touch drag.

    Module level so the listener that is removed is the one that was added.
    """
    event.prevent_default()


def make_behavior(event, drag: DragHandler = None, offset: Optional[Point] = None) -> DragBehavior:
    """Turn the ``drag`` argument of a session into a DragBehavior.

    Behaviours are used as they are and callables are wrapped. Anything else
    is taken as a selector (or None) for the default move-with-pointer
    behaviour.
    """
    if isinstance(drag, DragBehavior):
        return drag
    if callable(drag):
        return CallbackBehavior(drag)
    return MoveWithPointer(event, drag, offset)


class TrackingSession:
    """Listeners and state for one tracked gesture."""

    def __init__(self, event, drag: DragHandler = None, drop: Optional[Callable] = None,
                 offset: Optional[Point] = None, document=None):
        self.event = event
        if document is None:
            document = getattr(event.target, "document", None)
        if document is None:
            raise PointerTrackerError(
                f"{event.type} event has no document to track on; pass document="
            )
        self.document = document
        self.family = InputFamily.for_event(event)
        self.behavior = make_behavior(event, drag, offset)
        self.drop = drop
        self.active = False

        # Bound once: listeners are removed by identity
        self._move_listener = self._on_move
        self._end_listener = self._on_end

    @property
    def move_event(self) -> str:
        return self.family.move_event

    @property
    def end_event(self) -> str:
        return self.family.end_event

    def start(self) -> Callable[[], None]:
        """Attach the listeners. Returns the cancellation function."""
        body = self.document.body
        body.add_listener(self.move_event, self._move_listener, capture=False)
        body.add_listener(self.end_event, self._end_listener, capture=False)
        self.document.add_listener(TrackerConfig.TOUCH_START, suppress_default, passive=False)
        self.active = True

        logger.debug(f"Tracking {self.move_event}/{self.end_event} from {self.event.target!r}")
        return self.cancel

    def cancel(self):
        """Detach the listeners. Safe to call more than once."""
        if not self.active:
            return
        self.active = False

        body = self.document.body
        body.remove_listener(self.move_event, self._move_listener, capture=False)
        body.remove_listener(self.end_event, self._end_listener, capture=False)
        self.document.remove_listener(TrackerConfig.TOUCH_START, suppress_default)

        logger.debug(f"Stopped tracking {self.move_event}/{self.end_event}")

    def _on_move(self, event):
        self.behavior.on_move(get_page_xy(event), event)

    def _on_end(self, event):
        self.behavior.on_end(event)
        if self.drop is not None:
            self.drop(event)


def start_tracking(event, drag: DragHandler = None, drop: Optional[Callable] = None,
                   offset: Optional[Point] = None, document=None) -> Callable[[], None]:
    """Start following a gesture and return a function that stops it.

    Args:
        event: the ``mousedown`` or ``touchstart`` event that began the gesture
        drag: a function called with each move event, a DragBehavior, or a
            selector naming the ancestor of the target to move with the
            pointer (the target itself when None)
        drop: called with the event that ends the gesture; usually calls the
            returned function
        offset: pointer-to-element offset for the default drag behaviour
        document: where to listen; defaults to the target's document

    The session is not cancelled automatically when the gesture ends.
    Raises PointerTrackerError when the event was never dispatched (no
    target) and no ``document`` is given.
    """
    session = TrackingSession(event, drag=drag, drop=drop, offset=offset, document=document)
    return session.start()
