"""
Base class for objects that own animated vector properties.
"""
import numbers
from typing import Any, Callable, Dict, Optional, Union

from core.animation.animator import PropertyAnimator
from core.animation.easing import resolve_easing
from core.animation.tick_source import TickSource
from core.animation.types import AnimationDefaults, AnimationTask, EasingFunction, Vector3
from core.events.event_hub import EventHub
from core.events.event_types import Subscription
from core.logging.logger import get_logger
from core.logging.tags import TAG_TICK

logger = get_logger(__name__)


class AnimatedEntity:
    """
    Owner of one or more Vector3 attributes animated by PropertyAnimators.

    The animated attributes are plain fields that renderers may read at any
    time. Only the newest animator of a property writes it; each write
    replaces the whole Vector3 so a reader never sees a half-updated value.
    """

    def __init__(self, tick_source: TickSource, debug: bool = False,
                 defaults: Optional[AnimationDefaults] = None):
        self.tick_source = tick_source
        self.debug = debug
        self.defaults = defaults or AnimationDefaults()
        self.events = EventHub(self)
        self._generations: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, event_name: str, listener: Callable[[Any], None]) -> Subscription:
        """Register ``listener(entity)`` for every firing of ``event_name``."""
        return self.events.on(event_name, listener)

    def once(self, event_name: str, listener: Callable[[Any], None]) -> Subscription:
        """Register ``listener(entity)`` for the next firing of ``event_name`` only."""
        return self.events.once(event_name, listener)

    def off(self, subscription: Union[Subscription, str]) -> bool:
        return self.events.off(subscription)

    # ------------------------------------------------------------------
    # Animation
    # ------------------------------------------------------------------

    def generation(self, property_name: str) -> int:
        """Current generation of ``property_name`` (0 if never animated)."""
        return self._generations.get(property_name, 0)

    def animate_property(self, property_name: str, start: Vector3, delta: Vector3,
                         duration_ms: float, easing: EasingFunction) -> PropertyAnimator:
        """
        Start interpolating ``property_name`` from ``start`` by ``delta``.

        Any animator already running on the same property is superseded.
        Invalid arguments raise before that happens, leaving it running.

        Returns:
            The started PropertyAnimator
        """
        if not hasattr(self, property_name):
            raise AttributeError(f"{type(self).__name__} has no property {property_name!r}")

        if isinstance(duration_ms, bool) or not isinstance(duration_ms, numbers.Real):
            raise TypeError(f"duration_ms must be a number, got {duration_ms!r}")

        # Validate everything before superseding the running animator
        task = AnimationTask(
            property_name=property_name,
            start=Vector3.from_any(start),
            delta=Vector3.from_any(delta),
            duration_ms=duration_ms,
            easing=resolve_easing(easing),
        )

        generation = self.generation(property_name) + 1
        self._generations[property_name] = generation
        animator = PropertyAnimator(self, task, self.tick_source, generation)
        animator.start()
        return animator

    def animate_to(self, property_name: str, new_value: Any,
                   duration_ms: Optional[float] = None,
                   easing: Union[EasingFunction, str, None] = None) -> PropertyAnimator:
        """Animate ``property_name`` from its current value to ``new_value``."""
        start = getattr(self, property_name)
        end = Vector3.from_any(new_value)
        if duration_ms is None:
            duration_ms = self.defaults.duration_ms
        easing_fn = self.defaults.easing if easing is None else resolve_easing(easing)
        return self.animate_property(property_name, start, end - start, duration_ms, easing_fn)

    def _write_property(self, property_name: str, value: Vector3) -> None:
        setattr(self, property_name, value)
        if self.debug:
            logger.debug("%s %s: %s", TAG_TICK, property_name, value)
