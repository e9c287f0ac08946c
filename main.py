"""
Camera Tween - demo entry point.

Builds a camera, an animation queue and a debug overlay, queues a short
camera tour (move, look, reset) and runs the Qt event loop until the queue
drains.
"""
import argparse
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from core.animation import AnimationManager, QtTickSource
from core.camera import Camera
from core.events import EventType
from core.logging.logger import setup_logging, get_logger
from core.settings.settings_manager import SettingsManager
from versioning import APP_DESCRIPTION, APP_NAME, APP_VERSION
from widgets.debug_overlay import DebugOverlay

logger = get_logger(__name__)

START_POSITION = {'x': 0, 'y': 10, 'z': 30}
START_TARGET = {'x': 0, 'y': 0, 'z': 0}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=APP_NAME, description=APP_DESCRIPTION)
    parser.add_argument('-d', '--debug', action='store_true', help="debug logging and camera write traces")
    parser.add_argument('-v', '--verbose', action='store_true', help="verbose logging (implies --debug)")
    parser.add_argument('--no-overlay', action='store_true', help="do not show the debug overlay")
    parser.add_argument('--stay', action='store_true', help="keep running after the tour finishes")
    return parser.parse_args(argv)


def queue_camera_tour(camera: Camera, manager: AnimationManager) -> None:
    """Queue the three-step demo tour: move in, look up, smooth reset."""

    def move_in(duration, easing, on_complete):
        camera.move_to({'x': 5, 'y': 5, 'z': 5}, duration, easing)
        camera.once(EventType.POSITION_COMPLETE, on_complete)

    def look_up(duration, easing, on_complete):
        camera.look_at({'x': 0, 'y': 5, 'z': 0}, duration, easing)
        camera.once(EventType.TARGET_COMPLETE, on_complete)

    def reset(duration, easing, on_complete):
        camera.move_to(START_POSITION, duration, easing)
        camera.look_at(START_TARGET, duration, easing)
        camera.once(EventType.POSITION_COMPLETE, on_complete)

    manager.add_animation(move_in, 1500)
    manager.add_animation(look_up, 1000)
    manager.add_animation(reset, 2000)


def run_demo(app: QApplication, settings: SettingsManager, args: argparse.Namespace) -> int:
    defaults = settings.animation_defaults()
    debug = args.debug or args.verbose or settings.get_bool('camera.debug', False)

    tick_source = QtTickSource(interval_ms=defaults.tick_interval_ms)
    camera = Camera(
        tick_source,
        position=START_POSITION,
        target=START_TARGET,
        debug=debug,
        defaults=defaults,
    )
    manager = AnimationManager(defaults=defaults)

    camera.on(EventType.POSITION_COMPLETE, lambda cam: logger.info("Position animation complete: %s", cam.position))
    camera.on(EventType.TARGET_COMPLETE, lambda cam: logger.info("Target animation complete: %s", cam.target))

    overlay = None
    if not args.no_overlay and settings.get_bool('overlay.enabled', True):
        overlay = DebugOverlay(camera, refresh_ms=settings.get_int('overlay.refresh_ms', 16))
        overlay.setWindowTitle(f"{APP_NAME} {APP_VERSION}")
        overlay.show()
        overlay.start()

    if not args.stay:
        manager.queue_idle.connect(app.quit)

    queue_camera_tour(camera, manager)
    logger.info("Camera tour queued - entering event loop")
    exit_code = app.exec()

    if overlay is not None:
        overlay.stop()
    tick_source.stop()
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(debug=args.debug, verbose=args.verbose)

    logger.info("%s %s starting", APP_NAME, APP_VERSION)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)

    settings = SettingsManager()
    try:
        exit_code = run_demo(app, settings, args)
    except Exception as e:
        logger.exception("Fatal error in main: %s", e)
        exit_code = 1

    logger.info("%s exiting (code=%d)", APP_NAME, exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
