"""Tests for the serial AnimationManager queue."""
import logging

import pytest

from core.animation import AnimationDefaults, AnimationManager, Vector3
from core.animation.easing import linear, quad_in_out
from core.events import EventType


class _Step:
    """Queue action that records its start and keeps its continuation."""

    def __init__(self, name, log):
        self.name = name
        self.log = log
        self.on_complete = None
        self.args = None

    def __call__(self, duration, easing, on_complete):
        self.log.append(self.name)
        self.args = (duration, easing)
        self.on_complete = on_complete


@pytest.fixture
def log():
    return []


class TestQueueOrdering:
    """FIFO and one-at-a-time guarantees."""

    def test_first_step_runs_immediately_when_idle(self, animation_manager, log):
        a = _Step("A", log)
        animation_manager.add_animation(a)

        assert log == ["A"]
        assert animation_manager.is_animating
        assert animation_manager.pending_count == 0

    def test_steps_run_strictly_in_order(self, animation_manager, log):
        a, b, c = _Step("A", log), _Step("B", log), _Step("C", log)
        for step in (a, b, c):
            animation_manager.add_animation(step)

        assert log == ["A"]
        assert animation_manager.pending_count == 2

        a.on_complete()
        assert log == ["A", "B"]

        b.on_complete()
        assert log == ["A", "B", "C"]

        c.on_complete()
        assert not animation_manager.is_animating

    def test_duplicate_completion_is_ignored(self, animation_manager, log):
        a, b, c = _Step("A", log), _Step("B", log), _Step("C", log)
        for step in (a, b, c):
            animation_manager.add_animation(step)

        a.on_complete()
        a.on_complete()

        assert log == ["A", "B"]
        assert animation_manager.current_step_id == 2

    def test_continuation_accepts_event_argument(self, animation_manager, log):
        """on_complete can be registered directly as an entity listener."""
        a, b = _Step("A", log), _Step("B", log)
        animation_manager.add_animation(a)
        animation_manager.add_animation(b)

        a.on_complete(object())
        assert log == ["A", "B"]

    def test_synchronous_completion_drains_without_recursion(self, animation_manager, log):
        order = []
        blocker = _Step("blocker", log)
        animation_manager.add_animation(blocker)

        def instant(index):
            def action(duration, easing, on_complete):
                order.append(index)
                on_complete()
            return action

        for index in range(3000):
            animation_manager.add_animation(instant(index))
        assert order == []

        blocker.on_complete()

        assert order == list(range(3000))
        assert not animation_manager.is_animating

    def test_step_enqueued_from_running_action_waits(self, animation_manager, log):
        later = _Step("later", log)

        def first(duration, easing, on_complete):
            log.append("first")
            animation_manager.add_animation(later)
            on_complete()

        animation_manager.add_animation(first)
        assert log == ["first", "later"]


class TestReset:
    """reset_queue drops future work only."""

    def test_reset_drops_pending_but_not_running(self, animation_manager, log):
        idle = []
        animation_manager.queue_idle.connect(lambda: idle.append(True))

        a, b, c = _Step("A", log), _Step("B", log), _Step("C", log)
        for step in (a, b, c):
            animation_manager.add_animation(step)

        assert animation_manager.reset_queue() == 2
        assert animation_manager.is_animating

        a.on_complete()

        assert log == ["A"]
        assert not animation_manager.is_animating
        assert animation_manager.pending_count == 0
        assert idle == [True]

    def test_reset_on_idle_manager(self, animation_manager):
        assert animation_manager.reset_queue() == 0
        assert not animation_manager.is_animating


class TestDefaultsAndErrors:

    def test_defaults_passed_to_action(self, animation_manager, log):
        a = _Step("A", log)
        animation_manager.add_animation(a)
        assert a.args == (1000.0, quad_in_out)

    def test_explicit_duration_and_named_easing(self, animation_manager, log):
        a = _Step("A", log)
        animation_manager.add_animation(a, 1500, "linear")
        assert a.args == (1500, linear)

    def test_custom_defaults(self, qt_app, log):
        manager = AnimationManager(defaults=AnimationDefaults(duration_ms=250.0, easing=linear))
        a = _Step("A", log)
        manager.add_animation(a)
        assert a.args == (250.0, linear)

    def test_non_callable_action_rejected(self, animation_manager):
        with pytest.raises(TypeError):
            animation_manager.add_animation("not callable")

    def test_failing_action_is_skipped(self, animation_manager, log, caplog):
        def broken(duration, easing, on_complete):
            raise RuntimeError("step exploded")

        b = _Step("B", log)
        with caplog.at_level(logging.ERROR):
            animation_manager.add_animation(broken)
            animation_manager.add_animation(b)

        assert log == ["B"]
        assert "step exploded" in caplog.text

    def test_action_failing_after_completion_completes_once(self, animation_manager, log, caplog):
        completed = []
        animation_manager.step_completed.connect(lambda step_id: completed.append(step_id))

        def late_failure(duration, easing, on_complete):
            on_complete()
            raise RuntimeError("late failure")

        b = _Step("B", log)
        with caplog.at_level(logging.ERROR):
            first_id = animation_manager.add_animation(late_failure)
            animation_manager.add_animation(b)

        assert completed == [first_id]
        assert log == ["B"]
        assert "late failure" in caplog.text


class TestSignals:

    def test_signals_report_step_lifecycle(self, animation_manager, log):
        started, completed, idle = [], [], []
        animation_manager.step_started.connect(lambda step_id: started.append(step_id))
        animation_manager.step_completed.connect(lambda step_id: completed.append(step_id))
        animation_manager.queue_idle.connect(lambda: idle.append(True))

        a, b = _Step("A", log), _Step("B", log)
        first_id = animation_manager.add_animation(a)
        second_id = animation_manager.add_animation(b)
        a.on_complete()
        b.on_complete()

        assert started == [first_id, second_id]
        assert completed == [first_id, second_id]
        assert idle == [True]

    def test_step_queued_from_idle_signal_runs(self, animation_manager, log):
        follow_up = _Step("follow-up", log)
        fired = []

        def on_idle():
            if not fired:
                fired.append(True)
                animation_manager.add_animation(follow_up)

        animation_manager.queue_idle.connect(on_idle)
        a = _Step("A", log)
        animation_manager.add_animation(a)
        a.on_complete()

        assert log == ["A", "follow-up"]
        assert animation_manager.is_animating


class TestCameraSequencing:
    """Queue driving real camera animations on a manual clock."""

    def test_three_steps_run_back_to_back(self, animation_manager, camera, ticks):
        starts = []

        def move(target, event):
            def action(duration, easing, on_complete):
                starts.append(ticks.now())
                if event == EventType.POSITION_COMPLETE:
                    camera.move_to(target, duration, easing)
                else:
                    camera.look_at(target, duration, easing)
                camera.once(event, on_complete)
            return action

        idle_at = []
        animation_manager.queue_idle.connect(lambda: idle_at.append(ticks.now()))

        animation_manager.add_animation(move((5, 5, 5), EventType.POSITION_COMPLETE), 1500)
        animation_manager.add_animation(move((0, 5, 0), EventType.TARGET_COMPLETE), 1000)
        animation_manager.add_animation(move((0, 10, 30), EventType.POSITION_COMPLETE), 2000)

        ticks.run_until_idle(step_ms=16)

        assert starts[0] == 0
        assert starts[1] - starts[0] >= 1500
        assert starts[2] - starts[1] >= 1000
        assert idle_at[0] - starts[2] >= 2000
        assert 4500 <= idle_at[0] <= 4500 + 3 * 16
        assert camera.position == Vector3(0, 10, 30)
        assert camera.target == Vector3(0, 5, 0)

    def test_back_to_back_moves_chain_from_previous_end(self, animation_manager, camera, ticks):
        animators = []

        def move(target):
            def action(duration, easing, on_complete):
                animators.append(camera.move_to(target, duration, easing))
                camera.once(EventType.POSITION_COMPLETE, on_complete)
            return action

        animation_manager.add_animation(move((5, 5, 5)), 300)
        animation_manager.add_animation(move((-5, 0, 2)), 300)
        ticks.run_until_idle(step_ms=7)

        assert animators[1].task.start == animators[0].end_value
        assert camera.position == Vector3(-5, 0, 2)

    def test_reset_while_camera_step_running(self, animation_manager, camera, ticks):
        ran = []

        def step(name, target):
            def action(duration, easing, on_complete):
                ran.append(name)
                camera.move_to(target, duration, easing)
                camera.once(EventType.POSITION_COMPLETE, on_complete)
            return action

        animation_manager.add_animation(step("A", (5, 5, 5)), 500)
        animation_manager.add_animation(step("B", (1, 1, 1)), 500)
        animation_manager.add_animation(step("C", (2, 2, 2)), 500)
        ticks.advance(100)
        animation_manager.reset_queue()

        ticks.run_until_idle(step_ms=16)

        assert ran == ["A"]
        assert camera.position == Vector3(5, 5, 5)
        assert not animation_manager.is_animating
