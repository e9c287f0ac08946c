"""Tests for SettingsManager and the animation defaults it produces."""
import logging

import pytest

from core.animation.easing import linear, quad_in_out
from core.settings.settings_manager import DEFAULT_SETTINGS, SettingsManager


class TestDefaults:

    def test_defaults_seeded(self, settings_manager):
        for key in DEFAULT_SETTINGS:
            assert settings_manager.contains(key)
        assert settings_manager.get_int('animation.tick_interval_ms') == 16
        assert settings_manager.get_bool('camera.debug', True) is False
        assert settings_manager.get_bool('overlay.enabled') is True

    def test_animation_defaults_from_fresh_store(self, settings_manager):
        defaults = settings_manager.animation_defaults()
        assert defaults.duration_ms == 1000.0
        assert defaults.easing is quad_in_out
        assert defaults.tick_interval_ms == 16

    def test_reset_to_defaults(self, settings_manager):
        settings_manager.set('animation.default_easing', 'bounce_out')
        settings_manager.set('custom.key', 'x')
        settings_manager.reset_to_defaults()

        assert settings_manager.get('animation.default_easing') == 'quad_in_out'
        assert not settings_manager.contains('custom.key')


class TestAnimationDefaults:

    def test_named_easing_resolves(self, settings_manager):
        settings_manager.set('animation.default_easing', 'linear')
        settings_manager.set('animation.default_duration_ms', 250)

        defaults = settings_manager.animation_defaults()
        assert defaults.easing is linear
        assert defaults.duration_ms == 250.0

    def test_unknown_easing_falls_back(self, settings_manager, caplog):
        settings_manager.set('animation.default_easing', 'wobble')
        with caplog.at_level(logging.WARNING):
            defaults = settings_manager.animation_defaults()

        assert defaults.easing is quad_in_out
        assert "wobble" in caplog.text

    @pytest.mark.parametrize("duration", [0, -5, "-1"])
    def test_non_positive_duration_falls_back(self, settings_manager, duration):
        settings_manager.set('animation.default_duration_ms', duration)
        assert settings_manager.animation_defaults().duration_ms == 1000.0

    def test_tick_interval_clamped(self, settings_manager):
        settings_manager.set('animation.tick_interval_ms', 0)
        assert settings_manager.animation_defaults().tick_interval_ms == 1

    def test_garbage_interval_uses_default(self, settings_manager):
        settings_manager.set('animation.tick_interval_ms', 'fast')
        assert settings_manager.animation_defaults().tick_interval_ms == 16


class TestChangeNotification:

    def test_on_changed_receives_new_and_old(self, settings_manager):
        seen = []
        settings_manager.on_changed('camera.debug', lambda new, old: seen.append((new, old)))
        settings_manager.set('camera.debug', True)

        assert len(seen) == 1
        assert seen[0][0] is True
        assert SettingsManager.to_bool(seen[0][1], True) is False

    def test_failing_handler_is_isolated(self, settings_manager, caplog):
        seen = []

        def broken(new, old):
            raise RuntimeError("handler broke")

        settings_manager.on_changed('overlay.enabled', broken)
        settings_manager.on_changed('overlay.enabled', lambda new, old: seen.append(new))
        with caplog.at_level(logging.ERROR):
            settings_manager.set('overlay.enabled', False)

        assert seen == [False]
        assert "handler broke" in caplog.text

    def test_settings_changed_signal(self, settings_manager, qtbot):
        with qtbot.waitSignal(settings_manager.settings_changed, timeout=1000) as blocker:
            settings_manager.set('overlay.refresh_ms', 33)
        assert blocker.args == ['overlay.refresh_ms', 33]


@pytest.mark.parametrize("raw, expected", [
    (True, True),
    (False, False),
    ("true", True),
    ("False", False),
    (" yes ", True),
    ("off", False),
    ("0", False),
    (1, True),
    (None, False),
    ("maybe", False),
])
def test_to_bool(raw, expected):
    assert SettingsManager.to_bool(raw) is expected
