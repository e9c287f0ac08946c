"""Qt widgets that display animated entities."""

from .debug_overlay import DebugOverlay, format_camera_state

__all__ = [
    'DebugOverlay',
    'format_camera_state',
]
