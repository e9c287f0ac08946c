"""
Serial animation queue.

AnimationManager runs queued steps strictly one after another. A step is any
callable ``action(duration_ms, easing, on_complete)``; it usually starts one
or more property animations and wires ``on_complete`` to a completion event::

    manager.add_animation(
        lambda duration, easing, done: (
            camera.move_to((5, 5, 5), duration, easing),
            camera.once('positionComplete', done),
        ),
        1500,
    )

The next step starts only after the running step calls ``on_complete``.
reset_queue() drops steps that have not started; the running step is left
alone and the manager goes idle once it completes.
"""
from collections import deque
from typing import Deque, Optional, Union

from PySide6.QtCore import QObject, Signal

from core.animation.easing import resolve_easing
from core.animation.types import (
    AnimationDefaults, EasingCurve, EasingFunction, QueuedStep, StepAction,
    StepCompleteCallback,
)
from core.logging.logger import get_logger
from core.logging.tags import TAG_QUEUE

logger = get_logger(__name__)


class AnimationManager(QObject):
    """
    FIFO queue of animation steps with at most one step running.
    """

    step_started = Signal(int)     # step_id
    step_completed = Signal(int)   # step_id
    queue_idle = Signal()

    def __init__(self, defaults: Optional[AnimationDefaults] = None,
                 parent: Optional[QObject] = None):
        """
        Initialize animation manager.

        Args:
            defaults: Duration/easing applied when add_animation() omits them
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self.defaults = defaults or AnimationDefaults()
        self._queue: Deque[QueuedStep] = deque()
        self._current: Optional[QueuedStep] = None
        self._dispatching = False
        self._next_step_id = 1

        logger.info("AnimationManager initialized (default duration=%sms)",
                    self.defaults.duration_ms)

    @property
    def is_animating(self) -> bool:
        """True while a step is running."""
        return self._current is not None

    @property
    def pending_count(self) -> int:
        """Number of queued steps that have not started."""
        return len(self._queue)

    @property
    def current_step_id(self) -> Optional[int]:
        return self._current.step_id if self._current is not None else None

    def add_animation(self, action: StepAction, duration_ms: Optional[float] = None,
                      easing: Union[EasingFunction, EasingCurve, str, None] = None) -> int:
        """
        Append a step to the queue and start it right away if idle.

        Args:
            action: Callable(duration_ms, easing, on_complete)
            duration_ms: Duration handed to the action (default from defaults)
            easing: Easing handed to the action (default from defaults)

        Returns:
            Step id, as reported by step_started/step_completed

        Raises:
            TypeError: If action is not callable
        """
        if not callable(action):
            raise TypeError("Animation action must be callable")

        step = QueuedStep(
            action=action,
            duration_ms=self.defaults.duration_ms if duration_ms is None else duration_ms,
            easing=self.defaults.easing if easing is None else resolve_easing(easing),
            step_id=self._next_step_id,
        )
        self._next_step_id += 1
        self._queue.append(step)
        logger.debug("%s Step %d queued (duration=%sms, pending=%d)",
                     TAG_QUEUE, step.step_id, step.duration_ms, len(self._queue))

        if self._current is None:
            self._advance()
        return step.step_id

    def reset_queue(self) -> int:
        """
        Drop every step that has not started yet.

        Returns:
            Number of dropped steps
        """
        dropped = len(self._queue)
        self._queue.clear()
        logger.info("%s Queue reset (%d pending steps dropped, running=%s)",
                    TAG_QUEUE, dropped, self.current_step_id)
        return dropped

    def _advance(self) -> None:
        """Run queued steps until one is left waiting for its completion."""
        if self._dispatching:
            return

        went_idle = False
        self._dispatching = True
        try:
            while True:
                if not self._queue:
                    self._current = None
                    went_idle = True
                    break

                step = self._queue.popleft()
                self._current = step
                logger.debug("%s Step %d started (%d pending)",
                             TAG_QUEUE, step.step_id, len(self._queue))
                self.step_started.emit(step.step_id)

                try:
                    step.action(step.duration_ms, step.easing, self._continuation(step))
                except Exception as e:
                    logger.error("%s Step %d action failed, skipping to next step: %s",
                                 TAG_QUEUE, step.step_id, e, exc_info=True)
                    if not step.completed:
                        self._mark_complete(step)

                if not step.completed:
                    break
        finally:
            self._dispatching = False

        if went_idle:
            logger.debug("%s Queue drained, manager idle", TAG_QUEUE)
            self.queue_idle.emit()

    def _continuation(self, step: QueuedStep) -> StepCompleteCallback:
        def on_complete(*_args) -> None:
            if step.completed:
                logger.debug("%s Duplicate completion for step %d ignored", TAG_QUEUE, step.step_id)
                return
            self._mark_complete(step)
            if not self._dispatching:
                self._advance()

        return on_complete

    def _mark_complete(self, step: QueuedStep) -> None:
        step.completed = True
        logger.debug("%s Step %d completed", TAG_QUEUE, step.step_id)
        self.step_completed.emit(step.step_id)
