"""
Shared pytest fixtures for camera tween tests.
"""
import os
import sys
import uuid

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QApplication

from core.animation import AnimationManager, ManualTickSource
from core.camera import Camera


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv[:1])
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def ticks():
    """Deterministic tick source starting at t=0ms."""
    return ManualTickSource()


@pytest.fixture
def camera(ticks):
    """Camera at the demo start pose, driven by the manual tick source."""
    return Camera(ticks, position=(0, 10, 30), target=(0, 0, 0))


@pytest.fixture
def animation_manager(qt_app):
    """Create an AnimationManager instance for testing."""
    manager = AnimationManager()
    yield manager
    manager.reset_queue()


@pytest.fixture
def settings_manager(qt_app, tmp_path):
    """SettingsManager writing to a throwaway location."""
    from core.settings.settings_manager import SettingsManager

    QSettings.setPath(QSettings.Format.NativeFormat, QSettings.Scope.UserScope, str(tmp_path))
    manager = SettingsManager(organization="CameraTweenTest",
                              application=f"Test-{uuid.uuid4().hex[:8]}")
    yield manager
    manager.clear()
