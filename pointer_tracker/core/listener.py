"""
Touchscreen listener that turns evdev multi-touch reports into gesture events.

Events are read with evdev's asyncio reader, so they are dispatched on the
same event loop as the tracker and its movement detectors.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from evdev import ecodes

from ..config.settings import TrackerConfig
from ..device.device_manager import DeviceManager
from ..errors import DeviceNotFoundError
from ..utils.gesture_utils import GeometryUtils
from .events import Touch, touch_event

logger = logging.getLogger(__name__)


class TouchListener:
    """Dispatches touchstart/touchmove/touchend on a document from a touchscreen.

    ``touchstart`` is sent when the first finger lands, ``touchmove`` when
    any finger moves, and ``touchend`` once the last finger lifts. All three
    target the element under the first finger when the gesture started.
    """

    def __init__(self, document, device_manager: Optional[DeviceManager] = None):
        self.document = document
        self.device_manager = device_manager or DeviceManager()

        # State management
        self.running = False
        self.current_slot = 0
        self.slot_data: Dict[int, Dict[str, Optional[int]]] = {}
        self.gesture_active = False
        self.start_target = None

        # Changes since the last SYN_REPORT
        self._lifted = set()
        self._moved = False

        self.task = None

    def start(self) -> bool:
        """Start reading the touchscreen on the running event loop."""
        try:
            device = self.device_manager.require_device()
        except DeviceNotFoundError:
            print("❌ No touchscreen found")
            return False

        device_info = self.device_manager.get_device_info()
        print(f"✅ Found: {device.name}")
        print(f"📺 Screen: {device_info['screen_width']}x{device_info['screen_height']}")

        self.running = True
        self.task = asyncio.get_running_loop().create_task(self._event_loop())
        return True

    def stop(self):
        """Stop the touchscreen listener."""
        self.running = False
        if self.task:
            self.task.cancel()
            self.task = None

    @property
    def trigger_distance(self) -> int:
        """Drag threshold in document pixels, scaled to the screen size."""
        return max(1, GeometryUtils.scale_distance(
            self.document.width or self.device_manager.screen_width,
            self.document.height or self.device_manager.screen_height,
            TrackerConfig.TRIGGER_DISTANCE_PERCENT
        ))

    async def _event_loop(self):
        """Main event processing loop."""
        try:
            async for event in self.device_manager.device.async_read_loop():
                if not self.running:
                    break
                self.process_event(event)
        except OSError as e:
            logger.error(f"Error in event loop: {e}")
            self.running = False

    def process_event(self, ev):
        """Handle one evdev event. Gesture events go out on SYN_REPORT."""
        if ev.type == ecodes.EV_ABS:
            self._handle_abs_event(ev)
        elif ev.type == ecodes.EV_SYN and ev.code == ecodes.SYN_REPORT:
            self._flush()

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate events."""
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            if ev.value == -1:
                # Finger lifted
                self._lifted.add(self.current_slot)
            else:
                # Finger placed
                self.slot_data[self.current_slot] = {'x': None, 'y': None}
                self._lifted.discard(self.current_slot)
        elif ev.code == ecodes.ABS_MT_POSITION_X:
            self._handle_position(self.current_slot, 'x', ev.value)
        elif ev.code == ecodes.ABS_MT_POSITION_Y:
            self._handle_position(self.current_slot, 'y', ev.value)

    def _handle_position(self, slot: int, axis: str, value: int):
        if slot in self.slot_data:
            self.slot_data[slot][axis] = value
            self._moved = True

    def _touches(self) -> List[Touch]:
        """Fingers on the surface with a known position, in landing order."""
        touches = []
        for slot, data in self.slot_data.items():
            if data['x'] is None or data['y'] is None:
                continue
            x, y = self._to_page(data['x'], data['y'])
            touches.append(Touch(slot, x, y))
        return touches

    def _to_page(self, x: int, y: int):
        """Scale device coordinates to document pixels."""
        width = self.document.width or self.device_manager.screen_width
        height = self.document.height or self.device_manager.screen_height
        return (
            x * width / self.device_manager.screen_width,
            y * height / self.device_manager.screen_height,
        )

    def _flush(self):
        for slot in self._lifted:
            self.slot_data.pop(slot, None)
        self._lifted.clear()
        moved, self._moved = self._moved, False

        touches = self._touches()
        if not self.gesture_active:
            if touches:
                self.gesture_active = True
                first = touches[0]
                self.start_target = self.document.element_at(first.page_x, first.page_y)
                self._dispatch(TrackerConfig.TOUCH_START, touches)
        elif not self.slot_data:
            self.gesture_active = False
            self._dispatch(TrackerConfig.TOUCH_END, [])
            self.start_target = None
        elif moved and touches:
            self._dispatch(TrackerConfig.TOUCH_MOVE, touches)

    def _dispatch(self, event_type: str, touches: List[Touch]):
        for touch in touches:
            touch.target = self.start_target
        event = touch_event(event_type, touches, target=self.start_target)
        logger.debug(f"{event_type}: {[(t.page_x, t.page_y) for t in touches]}")
        self.document.dispatch(event)
