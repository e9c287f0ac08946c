"""Time-driven property animation framework."""

from .types import (
    AnimationDefaults,
    AnimationState,
    AnimationTask,
    EasingCurve,
    QueuedStep,
    Vector3,
)
from .easing import ease, get_easing_function, resolve_easing, EASING_FUNCTIONS, DEFAULT_EASING
from .tick_source import TickSource, ManualTickSource, QtTickSource
from .animator import PropertyAnimator
from .entity import AnimatedEntity
from .manager import AnimationManager

__all__ = [
    # Types
    'AnimationDefaults',
    'AnimationState',
    'AnimationTask',
    'EasingCurve',
    'QueuedStep',
    'Vector3',

    # Easing
    'ease',
    'get_easing_function',
    'resolve_easing',
    'EASING_FUNCTIONS',
    'DEFAULT_EASING',

    # Tick sources
    'TickSource',
    'ManualTickSource',
    'QtTickSource',

    # Animators
    'PropertyAnimator',
    'AnimatedEntity',
    'AnimationManager',
]
