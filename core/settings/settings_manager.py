"""
Settings manager implementation for the camera tween application.

Uses QSettings for persistent storage of animation defaults, camera debug
mode and overlay options. Animation state itself is never persisted.
"""
from typing import Any, Callable, Dict, List
import threading
from PySide6.QtCore import QSettings, QObject, Signal
from core.animation.easing import resolve_easing
from core.animation.types import AnimationDefaults
from core.logging.logger import get_logger, is_verbose_logging

logger = get_logger('SettingsManager')


DEFAULT_SETTINGS: Dict[str, Any] = {
    'animation.default_duration_ms': 1000,
    'animation.default_easing': 'quad_in_out',
    'animation.tick_interval_ms': 16,
    'camera.debug': False,
    'overlay.enabled': True,
    'overlay.refresh_ms': 16,
}


class SettingsManager(QObject):
    """
    Centralized settings management.

    Uses QSettings for persistent storage with organization/application name.
    Thread-safe with change notifications.
    """

    # Signal emitted when settings change
    settings_changed = Signal(str, object)  # key, new_value

    def __init__(self, organization: str = "CameraTween",
                 application: str = "CameraTween"):
        """
        Initialize the settings manager.

        Args:
            organization: Organization name for QSettings
            application: Application name for QSettings
        """
        super().__init__()

        self._settings = QSettings(organization, application)
        self._lock = threading.RLock()
        self._change_handlers: Dict[str, List[Callable[[Any, Any], None]]] = {}

        self._set_defaults()
        logger.info("SettingsManager initialized (%s/%s)", organization, application)

    def _set_defaults(self) -> None:
        """Set default values if not already present."""
        with self._lock:
            for key, value in DEFAULT_SETTINGS.items():
                if not self._settings.contains(key):
                    self._settings.setValue(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value.

        Args:
            key: Setting key in dot notation (e.g., 'animation.default_easing')
            default: Default value if key not found
        """
        with self._lock:
            return self._settings.value(key, default)

    @staticmethod
    def to_bool(value: Any, default: bool = False) -> bool:
        """Normalize a stored setting value to bool.

        QSettings ini backends hand booleans back as "true"/"false" strings.
        """
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            v = value.strip().lower()
            if v in ("true", "1", "yes", "on"):
                return True
            if v in ("false", "0", "no", "off"):
                return False
            return default
        if value is None:
            return default
        return bool(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Convenience wrapper around get() that normalizes to bool."""
        return self.to_bool(self.get(key, default), default)

    def get_int(self, key: str, default: int = 0) -> int:
        raw = self.get(key, default)
        try:
            return int(float(raw))
        except (TypeError, ValueError):
            logger.warning("Setting %s has non-integer value %r, using %r", key, raw, default)
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        raw = self.get(key, default)
        try:
            return float(raw)
        except (TypeError, ValueError):
            logger.warning("Setting %s has non-numeric value %r, using %r", key, raw, default)
            return default

    def set(self, key: str, value: Any) -> None:
        """
        Set a setting value.

        Args:
            key: Setting key in dot notation
            value: Value to set
        """
        with self._lock:
            old_value = self._settings.value(key)
            self._settings.setValue(key, value)
            handlers = list(self._change_handlers.get(key, ()))

        self.settings_changed.emit(key, value)
        for handler in handlers:
            try:
                handler(value, old_value)
            except Exception as e:
                logger.error("Error in change handler for %s: %s", key, e, exc_info=True)

        if is_verbose_logging():
            logger.debug("Setting changed: %s: %r -> %r", key, old_value, value)
        else:
            logger.debug("Setting changed: %s", key)

    def on_changed(self, key: str, handler: Callable[[Any, Any], None]) -> None:
        """
        Register a handler for when a specific setting changes.

        Args:
            key: Setting key to watch
            handler: Callback function(new_value, old_value)
        """
        with self._lock:
            self._change_handlers.setdefault(key, []).append(handler)
        logger.debug("Registered change handler for %s", key)

    def contains(self, key: str) -> bool:
        with self._lock:
            return self._settings.contains(key)

    def reset_to_defaults(self) -> None:
        """Clear every stored value and re-seed the defaults."""
        with self._lock:
            self._settings.clear()
            for key, value in DEFAULT_SETTINGS.items():
                self._settings.setValue(key, value)
            self._settings.sync()
        logger.info("Settings reset to defaults")
        self.settings_changed.emit('*', None)

    def clear(self) -> None:
        """Clear all settings (use with caution)."""
        with self._lock:
            self._settings.clear()
        logger.warning("All settings cleared")

    def animation_defaults(self) -> AnimationDefaults:
        """
        Build AnimationDefaults from the stored configuration.

        An unknown easing name or a non-positive duration falls back to the
        built-in default with a warning.
        """
        fallback = AnimationDefaults()

        duration = self.get_float('animation.default_duration_ms', fallback.duration_ms)
        if duration <= 0:
            logger.warning("animation.default_duration_ms=%r is not positive, using %r",
                           duration, fallback.duration_ms)
            duration = fallback.duration_ms

        easing_name = self.get('animation.default_easing', 'quad_in_out')
        try:
            easing = resolve_easing(str(easing_name))
        except ValueError:
            logger.warning("Unknown easing %r in settings, using quad_in_out", easing_name)
            easing = fallback.easing

        interval = self.get_int('animation.tick_interval_ms', fallback.tick_interval_ms)
        return AnimationDefaults(
            duration_ms=duration,
            easing=easing,
            tick_interval_ms=max(1, interval),
        )
