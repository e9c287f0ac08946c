"""
Property animator.

Drives one vector property of an AnimatedEntity from a start value to
``start + delta`` across externally delivered ticks. Progress depends on the
elapsed time since start() and never on the number of ticks, so irregular
tick spacing only changes how many intermediate samples are written.

State machine::

    IDLE --start()--> RUNNING --t reaches 1--> COMPLETE
                         |
                         +--entity started a newer animation--> SUPERSEDED

Each animate_property() call on an entity bumps that property's generation.
An animator whose generation is no longer current retires on its next tick
without writing and without firing a completion event, so only the newest
animation of a property ever reports completion.
"""
import time
from typing import TYPE_CHECKING, Optional

from core.animation.types import AnimationState, AnimationTask, Vector3
from core.animation.tick_source import TickSource
from core.events.event_types import completion_event
from core.logging.logger import get_logger
from core.logging.tags import TAG_ANIM

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from core.animation.entity import AnimatedEntity

logger = get_logger(__name__)


class PropertyAnimator:
    """
    Interpolates one property of one entity.

    Created by AnimatedEntity.animate_property(); callers normally only read
    ``state``/``progress`` or keep the instance to check ``is_running``.
    """

    def __init__(self, entity: "AnimatedEntity", task: AnimationTask,
                 tick_source: TickSource, generation: int):
        """
        Initialize property animator.

        Args:
            entity: Owner of the animated property
            task: Start/delta/duration/easing of this animation
            tick_source: Source of tick timestamps (ms)
            generation: Generation of the property this animator belongs to
        """
        self.entity = entity
        self.task = task
        self.tick_source = tick_source
        self.generation = generation

        self.state = AnimationState.IDLE
        self.start_time: Optional[float] = None
        self.progress = 0.0          # last sampled normalized time
        self.tick_count = 0
        self._wall_start: Optional[float] = None

    @property
    def property_name(self) -> str:
        return self.task.property_name

    @property
    def is_running(self) -> bool:
        return self.state == AnimationState.RUNNING

    def start(self) -> None:
        """Capture the start time and request the first tick."""
        if self.state != AnimationState.IDLE:
            logger.warning("%s Animator for %s already started (state=%s)",
                           TAG_ANIM, self.property_name, self.state.value)
            return

        if not self.task.duration_ms > 0:
            logger.debug("%s Non-positive duration %r for %s; completing on first tick",
                         TAG_ANIM, self.task.duration_ms, self.property_name)

        self.start_time = self.tick_source.now()
        self._wall_start = time.perf_counter()
        self.state = AnimationState.RUNNING
        self.tick_source.request_tick(self._on_tick)
        logger.debug("%s Animation started: %s gen=%d %s -> %s (duration=%sms)",
                     TAG_ANIM, self.property_name, self.generation,
                     self.task.start, self.task.end, self.task.duration_ms)

    def normalized_time(self, now: float) -> float:
        """Elapsed fraction of the duration at ``now``, clamped to [0, 1]."""
        if not self.task.duration_ms > 0:
            return 1.0
        t = (now - self.start_time) / self.task.duration_ms
        return max(0.0, min(1.0, t))

    def _on_tick(self, now: float) -> None:
        if self.state != AnimationState.RUNNING:
            return

        if self.entity.generation(self.property_name) != self.generation:
            self.state = AnimationState.SUPERSEDED
            logger.debug("%s Animation superseded: %s gen=%d",
                         TAG_ANIM, self.property_name, self.generation)
            return

        self.tick_count += 1
        try:
            t = self.normalized_time(now)
            value = self.task.end if t >= 1.0 else self.task.sample(self.task.easing(t))
            self.entity._write_property(self.property_name, value)
        except Exception as e:
            logger.error("%s Error sampling %s; snapping to end value: %s",
                         TAG_ANIM, self.property_name, e, exc_info=True)
            t = 1.0
            self._snap_to_end()

        self.progress = t
        if t < 1.0:
            self.tick_source.request_tick(self._on_tick)
            return

        self.state = AnimationState.COMPLETE
        logger.debug("%s Animation completed: %s gen=%d (%d ticks, %.1fms wall)",
                     TAG_ANIM, self.property_name, self.generation, self.tick_count,
                     (time.perf_counter() - self._wall_start) * 1000.0)
        self.entity.events.trigger(completion_event(self.property_name))

    def _snap_to_end(self) -> None:
        try:
            self.entity._write_property(self.property_name, self.task.end)
        except Exception as e:
            logger.error("%s Could not write end value of %s: %s",
                         TAG_ANIM, self.property_name, e, exc_info=True)

    @property
    def end_value(self) -> Vector3:
        return self.task.end
