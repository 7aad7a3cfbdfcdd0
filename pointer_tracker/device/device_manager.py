"""
Device management for touchscreen discovery and initialization.
"""

import evdev
from evdev import ecodes
import logging

from ..config.settings import TrackerConfig
from ..errors import DeviceNotFoundError

logger = logging.getLogger(__name__)

class DeviceManager:
    """Manages touchscreen device discovery and initialization."""

    def __init__(self):
        self.device = None
        self.screen_width = TrackerConfig.SCREEN_WIDTH
        self.screen_height = TrackerConfig.SCREEN_HEIGHT

    def find_device(self):
        """Find and configure the first multi-touch device."""
        devices = [evdev.InputDevice(path) for path in evdev.list_devices()]

        for device in devices:
            caps = device.capabilities()
            if ecodes.EV_ABS not in caps:
                continue

            # Look for multitouch slots
            abs_info = {code: info for code, info in caps.get(ecodes.EV_ABS, [])}
            if ecodes.ABS_MT_SLOT not in abs_info:
                continue

            if ecodes.ABS_MT_POSITION_X in abs_info:
                self.screen_width = abs_info[ecodes.ABS_MT_POSITION_X].max + 1
            if ecodes.ABS_MT_POSITION_Y in abs_info:
                self.screen_height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1

            self.device = device
            logger.info(f"Found touchscreen: {device.name}")
            logger.info(f"Screen resolution: {self.screen_width}x{self.screen_height}")
            return device

        logger.error("No touchscreen device found")
        return None

    def require_device(self):
        """Like find_device, but raise DeviceNotFoundError when there is none."""
        device = self.device or self.find_device()
        if device is None:
            raise DeviceNotFoundError("No multi-touch input device found")
        return device

    def get_device_info(self):
        """Get device and screen information."""
        return {
            'device': self.device,
            'screen_width': self.screen_width,
            'screen_height': self.screen_height,
            'center_x': self.screen_width // 2,
            'center_y': self.screen_height // 2
        }
