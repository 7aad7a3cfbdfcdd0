"""
Configuration settings for the pointer tracker.
"""

class TrackerConfig:
    """Configuration constants for drag tracking and movement detection."""

    # Gesture start events
    MOUSE_START = "mousedown"
    TOUCH_START = "touchstart"

    # Events tracked for the duration of a gesture, per input family
    MOUSE_MOVE = "mousemove"
    MOUSE_END = "mouseup"
    TOUCH_MOVE = "touchmove"
    TOUCH_END = "touchend"

    # Timing configurations (in milliseconds)
    MOVEMENT_TIMEOUT = 250

    # Distance configurations
    TRIGGER_DISTANCE = 10  # pixels, for mouse input
    TRIGGER_DISTANCE_PERCENT = 1.0  # of screen diagonal, for touchscreens

    # Default document size when no device reports one
    SCREEN_WIDTH = 1920
    SCREEN_HEIGHT = 1080

    # Chessboard demo
    BOARD_SQUARES = 8
    SQUARE_SIZE = 80
    COLUMNS = "abcdefgh"
    LIGHT_SQUARE = (240, 217, 181)
    DARK_SQUARE = (181, 136, 99)
    WHITE_PIECE = (250, 250, 250)
    BLACK_PIECE = (30, 30, 30)
    HIGHLIGHT = (255, 0, 0)
