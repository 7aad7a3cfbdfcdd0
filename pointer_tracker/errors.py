"""
Exceptions raised by the pointer tracker.
"""

from enum import Enum


class PointerTrackerError(Exception):
    """Base class for all pointer tracker errors."""


class RejectReason(str, Enum):
    """Why a movement detection did not turn into a drag."""

    RELEASED_EARLY = "released-early"
    TIMED_OUT = "timed-out"


class MovementRejected(PointerTrackerError):
    """The gesture ended, or timed out, before it moved far enough."""

    def __init__(self, reason: RejectReason):
        super().__init__(reason.value)
        self.reason = reason


class DeviceNotFoundError(PointerTrackerError):
    """No multi-touch input device could be found."""
