"""
Gesture events from a pygame window.

Mouse buttons and motion become ``mousedown``/``mousemove``/``mouseup``;
finger events become ``touchstart``/``touchmove``/``touchend`` with the
same one-gesture rules as the touchscreen listener.
"""

import logging
from dataclasses import replace
from typing import Dict

import pygame

from ..config.settings import TrackerConfig
from ..core.events import Touch, mouse_event, touch_event

logger = logging.getLogger(__name__)

LEFT_BUTTON = 1


class PygameInputSource:
    """Translates pygame events and dispatches them on a document."""

    def __init__(self, document):
        self.document = document
        self.fingers: Dict[int, Touch] = {}
        self.touch_target = None

    def handle_event(self, event) -> bool:
        """Dispatch the gesture event for a pygame event.

        Returns True if the pygame event was translated.
        """
        # Mouse events that SDL synthesizes from touches are seen as fingers
        if getattr(event, 'touch', False):
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_BUTTON:
            self._dispatch_mouse(TrackerConfig.MOUSE_START, event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self._dispatch_mouse(TrackerConfig.MOUSE_MOVE, event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == LEFT_BUTTON:
            self._dispatch_mouse(TrackerConfig.MOUSE_END, event.pos)
        elif event.type == pygame.FINGERDOWN:
            self._finger_down(event)
        elif event.type == pygame.FINGERMOTION:
            self._finger_motion(event)
        elif event.type == pygame.FINGERUP:
            self._finger_up(event)
        else:
            return False
        return True

    def _dispatch_mouse(self, event_type: str, pos):
        x, y = pos
        target = self.document.element_at(x, y)
        self.document.dispatch(mouse_event(event_type, x, y, target=target))

    def _to_page(self, event):
        """Finger positions are normalized to 0..1."""
        return event.x * self.document.width, event.y * self.document.height

    def _finger_down(self, event):
        x, y = self._to_page(event)
        first = not self.fingers
        if first:
            self.touch_target = self.document.element_at(x, y)
        self.fingers[event.finger_id] = Touch(event.finger_id, x, y, target=self.touch_target)

        if first:
            self._dispatch_touch(TrackerConfig.TOUCH_START)

    def _finger_motion(self, event):
        touch = self.fingers.get(event.finger_id)
        if touch is None:
            return
        touch.page_x, touch.page_y = self._to_page(event)
        self._dispatch_touch(TrackerConfig.TOUCH_MOVE)

    def _finger_up(self, event):
        if self.fingers.pop(event.finger_id, None) is None:
            return
        if not self.fingers:
            self._dispatch_touch(TrackerConfig.TOUCH_END)
            self.touch_target = None

    def _dispatch_touch(self, event_type: str):
        # Copies, so earlier events keep the positions they were sent with
        touches = [replace(touch) for touch in self.fingers.values()]
        logger.debug(f"{event_type}: {len(touches)} finger(s)")
        self.document.dispatch(touch_event(event_type, touches, target=self.touch_target))
