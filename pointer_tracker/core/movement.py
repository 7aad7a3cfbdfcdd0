"""
Tell a drag from a click.

``detect_movement`` follows a gesture until the pointer has moved further
than a threshold, the gesture ends, or a timeout elapses, whichever comes
first. Typical use from a ``mousedown``/``touchstart`` listener::

    async def check_for_drag(event):
        event.prevent_default()
        try:
            await detect_movement(event, 10)
        except MovementRejected:
            click_action(event)
        else:
            start_drag(event)

Whichever outcome settles the future also stops the tracking session and
the timer, including the timeout: a timed-out detector leaves no listeners
behind.
"""

import asyncio
import logging
from typing import Optional

from ..config.settings import TrackerConfig
from ..errors import MovementRejected, RejectReason
from ..utils.coordinates import get_page_xy
from ..utils.gesture_utils import GeometryUtils, Point
from .tracking import start_tracking

logger = logging.getLogger(__name__)


class MovementDetector:
    """One race between movement, release and timeout."""

    def __init__(self, event, trigger_delta: float, timeout: Optional[float] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None, document=None):
        self.event = event
        self.trigger2 = trigger_delta * trigger_delta
        self.timeout = _normalize_timeout(timeout)
        self.loop = loop if loop is not None else asyncio.get_running_loop()
        self.document = document

        self.start_point = get_page_xy(event)
        self.future: asyncio.Future = self.loop.create_future()
        self._cancel_tracking = None
        self._timer: Optional[asyncio.TimerHandle] = None

    def start(self) -> asyncio.Future:
        self._cancel_tracking = start_tracking(
            self.event, drag=self._drag, drop=self._drop, document=self.document
        )
        if self.timeout:
            self._timer = self.loop.call_later(self.timeout / 1000.0, self._time_out)

        # A caller cancelling the future must not leave listeners attached
        self.future.add_done_callback(lambda _: self._release())
        return self.future

    def _drag(self, event):
        point = get_page_xy(event)
        if not (point.is_complete() and self.start_point.is_complete()):
            return

        if GeometryUtils.squared_distance(self.start_point, point) > self.trigger2:
            self._settle(point)

    def _drop(self, event):
        self._settle(reason=RejectReason.RELEASED_EARLY)

    def _time_out(self):
        self._timer = None
        self._settle(reason=RejectReason.TIMED_OUT)

    def _settle(self, point: Optional[Point] = None, reason: Optional[RejectReason] = None):
        if self.future.done():
            return
        self._release()

        if reason is None:
            logger.debug(f"Movement detected at {point}")
            self.future.set_result(point)
        else:
            logger.debug(f"No movement detected: {reason.value}")
            self.future.set_exception(MovementRejected(reason))

    def _release(self):
        if self._cancel_tracking is not None:
            self._cancel_tracking()
            self._cancel_tracking = None
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


def detect_movement(event, trigger_delta: float, timeout: Optional[float] = None,
                    loop: Optional[asyncio.AbstractEventLoop] = None,
                    document=None) -> asyncio.Future:
    """Future resolved when the pointer moves more than ``trigger_delta`` pixels.

    Args:
        event: the ``mousedown`` or ``touchstart`` event of the gesture
        trigger_delta: distance in pixels from the start point that must be
            exceeded (reaching it exactly is not enough)
        timeout: milliseconds to wait; None means 250, 0 waits forever
        loop: event loop for the future and timer; defaults to the running loop
        document: where to listen; defaults to the target's document

    The future's result is the position that crossed the threshold. It fails
    with MovementRejected whose ``reason`` is RejectReason.RELEASED_EARLY
    when the gesture ends first, or RejectReason.TIMED_OUT.
    """
    return MovementDetector(event, trigger_delta, timeout, loop, document).start()


def _normalize_timeout(timeout) -> float:
    if not GeometryUtils.is_number(timeout):
        return TrackerConfig.MOVEMENT_TIMEOUT
    return abs(timeout)
