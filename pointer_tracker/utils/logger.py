"""
Console logging of drags, drops and clicks.
"""

import datetime
import logging
from typing import Optional

from .gesture_utils import Point

logger = logging.getLogger(__name__)


class DragLogger:
    """Prints tracked gestures and mirrors them into an optional debug file."""

    def __init__(self, debug_file: Optional[str] = None):
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    def _timestamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def _write(self, line: str):
        print(line)
        if self.debug_file:
            self.debug_file.write(line + "\n")
            self.debug_file.flush()

    def log_drag_start(self, target, point: Point, input_type: str):
        """Log the start of a drag."""
        self._write(f"[{self._timestamp()}] ✊ DRAG START: {target!r} ({input_type})")
        self._write(f"   Grabbed at: {_format_point(point)}")

    def log_drop(self, target, point: Point, square: Optional[str] = None):
        """Log where a dragged element was dropped."""
        line = f"[{self._timestamp()}] ✋ DROP: {target!r} at {_format_point(point)}"
        if square:
            line += f" → {square}"
        self._write(line)

    def log_click(self, target, reason: str):
        """Log a gesture that did not move far enough to become a drag."""
        self._write(f"[{self._timestamp()}] 👆 CLICK: {target!r} [{reason}]")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None


def _format_point(point: Point) -> str:
    if not point.is_complete():
        return "(?, ?)"
    return f"({int(point.x)}, {int(point.y)})"
