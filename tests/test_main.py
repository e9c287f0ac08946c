"""Tests for the demo entry point helpers."""
import pytest

from core.animation import Vector3
from main import START_POSITION, START_TARGET, parse_args, queue_camera_tour
from versioning import APP_DESCRIPTION


def test_parse_args_defaults():
    args = parse_args([])
    assert not args.debug
    assert not args.verbose
    assert not args.no_overlay
    assert not args.stay


def test_parse_args_flags():
    args = parse_args(["-d", "--no-overlay", "--stay"])
    assert args.debug
    assert args.no_overlay
    assert args.stay


def test_camera_tour_returns_to_start(animation_manager, camera, ticks):
    idle = []
    animation_manager.queue_idle.connect(lambda: idle.append(ticks.now()))

    queue_camera_tour(camera, animation_manager)
    assert animation_manager.pending_count == 2

    ticks.run_until_idle(step_ms=16)

    assert len(idle) == 1
    assert idle[0] >= 4500
    assert camera.position == Vector3.from_any(START_POSITION)
    assert camera.target == Vector3.from_any(START_TARGET)


def test_help_uses_app_description(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--help"])
    assert APP_DESCRIPTION in " ".join(capsys.readouterr().out.split())
