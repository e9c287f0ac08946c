"""
Animated camera: a position and a look-at target.
"""
from typing import Any, Dict, Optional, Union

from core.animation.animator import PropertyAnimator
from core.animation.entity import AnimatedEntity
from core.animation.tick_source import TickSource
from core.animation.types import AnimationDefaults, EasingCurve, EasingFunction, Vector3
from core.logging.logger import get_logger

logger = get_logger(__name__)

EasingLike = Union[EasingFunction, EasingCurve, str, None]


class Camera(AnimatedEntity):
    """
    Camera whose ``position`` and ``target`` glide to new values.

    Completion events: ``positionComplete`` and ``targetComplete``; listeners
    receive the camera.
    """

    def __init__(self, tick_source: TickSource, position: Any = None, target: Any = None,
                 debug: bool = False, defaults: Optional[AnimationDefaults] = None):
        """
        Args:
            tick_source: Frame/time source driving the animations
            position: Initial position (Vector3, {x, y, z} mapping or 3-sequence)
            target: Initial look-at target, same forms as position
            debug: Log every property write
            defaults: Duration/easing used when move_to/look_at omit them
        """
        super().__init__(tick_source, debug=debug, defaults=defaults)
        self.position = Vector3() if position is None else Vector3.from_any(position)
        self.target = Vector3() if target is None else Vector3.from_any(target)
        logger.debug("Camera created at %s looking at %s", self.position, self.target)

    def move_to(self, new_position: Any, duration_ms: Optional[float] = None,
                easing: EasingLike = None) -> PropertyAnimator:
        """Glide ``position`` from where it is now to ``new_position``."""
        return self.animate_to('position', new_position, duration_ms, easing)

    def look_at(self, new_target: Any, duration_ms: Optional[float] = None,
                easing: EasingLike = None) -> PropertyAnimator:
        """Glide the look-at ``target`` from where it is now to ``new_target``."""
        return self.animate_to('target', new_target, duration_ms, easing)

    def snapshot(self) -> Dict[str, Vector3]:
        return {'position': self.position, 'target': self.target}

    def __repr__(self) -> str:
        return f"Camera(position={self.position}, target={self.target})"
