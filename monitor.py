#!/usr/bin/env python3
"""
Real-time touchscreen drag monitor.
Tells drags from taps as you touch your touchscreen.
"""

import asyncio
import logging

from pointer_tracker.config.settings import TrackerConfig
from pointer_tracker.core.elements import Document
from pointer_tracker.core.listener import TouchListener
from pointer_tracker.core.movement import detect_movement
from pointer_tracker.core.tracking import start_tracking
from pointer_tracker.device.device_manager import DeviceManager
from pointer_tracker.errors import DeviceNotFoundError, MovementRejected
from pointer_tracker.utils.coordinates import get_page_xy
from pointer_tracker.utils.logger import DragLogger


class DragMonitor:
    def __init__(self, debug_file: str = 'drag_debug.log'):
        self.logger = DragLogger(debug_file)
        self.device_manager = DeviceManager()
        self.document = None
        self.listener = None
        self.trigger_distance = TrackerConfig.TRIGGER_DISTANCE

        # Bumped on every touchstart
        self.gesture = 0
        self.touching = False

    def attach(self, document: Document):
        """Watch the touch gestures dispatched on a document."""
        self.document = document
        document.body.add_listener(TrackerConfig.TOUCH_START, self.check_for_drag)
        document.body.add_listener(TrackerConfig.TOUCH_END, self.end_gesture)

    async def run(self):
        """Monitor touchscreen gestures until interrupted."""
        try:
            self.device_manager.require_device()
        except DeviceNotFoundError:
            print("❌ No touchscreen found")
            return False

        info = self.device_manager.get_device_info()
        self.attach(Document(info['screen_width'], info['screen_height']))

        self.listener = TouchListener(self.document, self.device_manager)
        if not self.listener.start():
            return False
        self.trigger_distance = self.listener.trigger_distance

        print("🎯 Touchscreen Drag Monitor Started")
        print("=" * 50)
        print(f"📏 Drag threshold: {self.trigger_distance}px")
        print(f"⏱️  Tap timeout: {TrackerConfig.MOVEMENT_TIMEOUT}ms")
        print("🖱️  Press Ctrl+C to stop")
        print()

        try:
            await self.listener.task
        except asyncio.CancelledError:
            pass
        return True

    def check_for_drag(self, event):
        """Start movement detection as soon as a finger lands."""
        self.gesture += 1
        self.touching = True
        movement = detect_movement(event, self.trigger_distance, document=self.document)
        asyncio.ensure_future(self.classify(event, movement, self.gesture))

    def end_gesture(self, event):
        self.touching = False

    async def classify(self, event, movement, gesture: int):
        try:
            point = await movement
        except MovementRejected as e:
            self.logger.log_click(event.target, e.reason.value)
            return

        self.logger.log_drag_start(event.target, get_page_xy(event), event.type)

        # Several reports can arrive in one read, so the finger may be up already
        if not self.touching or gesture != self.gesture:
            self.logger.log_drop(event.target, point)
            return

        last_point = point

        def drag(move_event):
            nonlocal last_point
            last_point = get_page_xy(move_event)

        def drop(end_event):
            cancel_tracking()
            self.logger.log_drop(event.target, last_point)

        cancel_tracking = start_tracking(event, drag=drag, drop=drop, document=self.document)

    def stop(self):
        """Stop monitoring."""
        if self.listener:
            self.listener.stop()
        self.logger.close()
        print("\n✅ Monitoring stopped")


def main():
    logging.basicConfig(level=logging.INFO)
    monitor = DragMonitor()
    try:
        asyncio.run(monitor.run())
    except KeyboardInterrupt:
        pass
    finally:
        monitor.stop()

if __name__ == "__main__":
    main()
