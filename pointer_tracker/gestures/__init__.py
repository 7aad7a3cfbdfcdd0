"""
Drag behaviours.

This module provides what a tracked gesture does to the dragged element:
the default move-with-pointer behaviour and adapters for custom callbacks.
"""

from .drag_behavior import DragBehavior, CallbackBehavior, MoveWithPointer, default_drag_action

__all__ = [
    'DragBehavior',
    'CallbackBehavior',
    'MoveWithPointer',
    'default_drag_action'
]
