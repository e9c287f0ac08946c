"""
Animation types, enums, and dataclasses.

Defines the value types shared by the easing library, the property
animator and the serial animation queue.
"""
import math
import numbers
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Tuple


EasingFunction = Callable[[float], float]
TickCallback = Callable[[float], None]           # timestamp in ms
StepCompleteCallback = Callable[[], None]
StepAction = Callable[[float, EasingFunction, StepCompleteCallback], None]
EventListener = Callable[[Any], None]             # receives the owning entity


class AnimationState(Enum):
    """State of a property animation."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    SUPERSEDED = "superseded"


class EasingCurve(Enum):
    """
    Easing curve types for animations.

    Easing functions control the rate of change of the animated value over time.
    """
    # Basic
    LINEAR = "linear"

    # Quadratic
    QUAD_IN = "quad_in"
    QUAD_OUT = "quad_out"
    QUAD_IN_OUT = "quad_in_out"

    # Cubic
    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"

    # Quartic
    QUART_IN = "quart_in"
    QUART_OUT = "quart_out"
    QUART_IN_OUT = "quart_in_out"

    # Quintic
    QUINT_IN = "quint_in"
    QUINT_OUT = "quint_out"
    QUINT_IN_OUT = "quint_in_out"

    # Sine
    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"

    # Exponential
    EXPO_IN = "expo_in"
    EXPO_OUT = "expo_out"
    EXPO_IN_OUT = "expo_in_out"

    # Circular
    CIRC_IN = "circ_in"
    CIRC_OUT = "circ_out"
    CIRC_IN_OUT = "circ_in_out"

    # Elastic
    ELASTIC_IN = "elastic_in"
    ELASTIC_OUT = "elastic_out"
    ELASTIC_IN_OUT = "elastic_in_out"

    # Back
    BACK_IN = "back_in"
    BACK_OUT = "back_out"
    BACK_IN_OUT = "back_in_out"

    # Bounce
    BOUNCE_IN = "bounce_in"
    BOUNCE_OUT = "bounce_out"
    BOUNCE_IN_OUT = "bounce_in_out"


@dataclass(frozen=True)
class Vector3:
    """Immutable 3-component vector."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self):
        for axis in (self.x, self.y, self.z):
            if isinstance(axis, bool) or not isinstance(axis, numbers.Real):
                raise ValueError(f"Vector3 components must be numbers, got {axis!r}")
            if not math.isfinite(axis):
                raise ValueError(f"Vector3 components must be finite, got {axis!r}")

    @classmethod
    def from_any(cls, value: Any) -> "Vector3":
        """
        Coerce a Vector3, an ``{x, y, z}`` mapping or a 3-sequence.

        Raises:
            ValueError: If the value cannot be interpreted as a vector
        """
        if isinstance(value, Vector3):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(value['x'], value['y'], value['z'])
            except KeyError as e:
                raise ValueError(f"Vector mapping is missing component {e}") from e
        if isinstance(value, Sequence) and not isinstance(value, str):
            if len(value) != 3:
                raise ValueError(f"Vector sequence needs 3 components, got {len(value)}")
            return cls(value[0], value[1], value[2])
        raise ValueError(f"Cannot interpret {value!r} as a Vector3")

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> "Vector3":
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass
class AnimationTask:
    """One requested interpolation of a single vector property."""
    property_name: str
    start: Vector3
    delta: Vector3
    duration_ms: float
    easing: EasingFunction

    @property
    def end(self) -> Vector3:
        """Exact final value, ``start + delta`` component-wise."""
        return self.start + self.delta

    def sample(self, progress: float) -> Vector3:
        """Interpolated value for an eased progress value."""
        return Vector3(
            self.start.x + self.delta.x * progress,
            self.start.y + self.delta.y * progress,
            self.start.z + self.delta.z * progress,
        )


@dataclass
class QueuedStep:
    """One unit of serialized work owned by the AnimationManager."""
    action: StepAction
    duration_ms: float
    easing: EasingFunction
    step_id: int = 0
    completed: bool = field(default=False, compare=False)


@dataclass
class AnimationDefaults:
    """Default duration/easing/tick interval applied when callers omit them."""
    duration_ms: float = 1000.0
    easing: Optional[EasingFunction] = None    # resolved to quad_in_out in __post_init__
    tick_interval_ms: int = 16

    def __post_init__(self):
        if self.easing is None:
            from core.animation.easing import quad_in_out
            self.easing = quad_in_out
