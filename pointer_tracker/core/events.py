"""
Gesture events delivered to the element tree.

Mouse events carry their own page coordinates. Touch events carry a list
of the touch points that are still on the surface, which is empty for the
``touchend`` that lifts the last finger.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Any

from ..config.settings import TrackerConfig


class InputFamily(Enum):
    """Which pair of events continues a gesture."""

    POINTER = (TrackerConfig.MOUSE_MOVE, TrackerConfig.MOUSE_END)
    TOUCH = (TrackerConfig.TOUCH_MOVE, TrackerConfig.TOUCH_END)

    @property
    def move_event(self) -> str:
        return self.value[0]

    @property
    def end_event(self) -> str:
        return self.value[1]

    @classmethod
    def for_event(cls, event) -> 'InputFamily':
        """Touch-started gestures continue with touch events, all others with mouse events."""
        if getattr(event, 'type', None) == TrackerConfig.TOUCH_START:
            return cls.TOUCH
        return cls.POINTER


@dataclass
class Touch:
    """One finger on a touch surface."""

    identifier: int
    page_x: float
    page_y: float
    target: Any = None


@dataclass
class GestureEvent:
    """A mouse or touch event dispatched through the element tree."""

    type: str
    target: Any = None
    page_x: Optional[float] = None
    page_y: Optional[float] = None
    target_touches: List[Touch] = field(default_factory=list)
    timestamp: float = field(default_factory=time.time)

    # Dispatch state, maintained by Document.dispatch
    current_target: Any = field(default=None, repr=False)
    default_prevented: bool = field(default=False, repr=False)
    propagation_stopped: bool = field(default=False, repr=False)
    _in_passive_listener: bool = field(default=False, repr=False)

    def prevent_default(self):
        """Cancel the host's default action. Ignored inside passive listeners."""
        if not self._in_passive_listener:
            self.default_prevented = True

    def stop_propagation(self):
        """Stop delivery to targets further along the propagation path."""
        self.propagation_stopped = True


def mouse_event(event_type: str, x: float, y: float, target=None) -> GestureEvent:
    """Build a mouse event at a page position."""
    return GestureEvent(event_type, target=target, page_x=x, page_y=y)


def touch_event(event_type: str, touches: List[Touch], target=None) -> GestureEvent:
    """Build a touch event from the touches still on the surface."""
    if target is None and touches:
        target = touches[0].target
    return GestureEvent(event_type, target=target, target_touches=list(touches))
