"""
Camera debug overlay.

A small monospace label that periodically reads the camera's position and
target and prints them. It only reads the camera's public fields; values
seen mid-animation are displayed as-is.
"""
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel, QWidget

from core.animation.types import Vector3
from core.logging.logger import get_logger

logger = get_logger(__name__)


def _format_vector(label: str, value: Vector3) -> str:
    return f"{label}: x={value.x:.2f}, y={value.y:.2f}, z={value.z:.2f}"


def format_camera_state(camera) -> str:
    """Two-line text shown by the overlay."""
    return "\n".join((
        _format_vector("Position", camera.position),
        _format_vector("Target", camera.target),
    ))


class DebugOverlay(QLabel):
    """Semi-transparent label showing live camera values."""

    STYLE = (
        "background-color: rgba(0, 0, 0, 128);"
        "color: white;"
        "padding: 8px;"
    )

    def __init__(self, camera, refresh_ms: int = 16, parent: Optional[QWidget] = None):
        """
        Args:
            camera: Object exposing ``position`` and ``target`` Vector3 fields
            refresh_ms: Redraw interval
            parent: Optional parent widget
        """
        super().__init__(parent)
        self._camera = camera

        font = QFont("monospace")
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)
        self.setStyleSheet(self.STYLE)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignBottom)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(refresh_ms)))
        self._timer.timeout.connect(self.refresh)

        self.refresh()
        logger.debug("DebugOverlay created (refresh=%dms)", self._timer.interval())

    def refresh(self) -> None:
        """Re-read the camera and update the text."""
        self.setText(format_camera_state(self._camera))

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_refreshing(self) -> bool:
        return self._timer.isActive()
