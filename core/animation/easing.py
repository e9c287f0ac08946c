"""
Easing functions for camera animations.

Every function maps normalized time t in [0.0, 1.0] to an animation progress
value. Interior values may overshoot (back, elastic) but each function
returns exactly 0 at t=0 and exactly 1 at t=1, because the animator chains
steps from the value written on the final tick.

Based on standard easing equations:
- Robert Penner's Easing Functions
- https://easings.net/
"""
import math
from typing import Callable, Union
from core.animation.types import EasingCurve, EasingFunction


def _endpoint(t: float) -> bool:
    return t == 0 or t == 1


# Linear (no easing)
def linear(t: float) -> float:
    """Linear interpolation - no easing."""
    return t


# Quadratic easing
def quad_in(t: float) -> float:
    """Quadratic ease-in - accelerating from zero velocity."""
    return t * t


def quad_out(t: float) -> float:
    """Quadratic ease-out - decelerating to zero velocity."""
    return t * (2 - t)


def quad_in_out(t: float) -> float:
    """Quadratic ease-in-out - accelerating until halfway, then decelerating.

    Equivalent to ``1 - (-2t + 2)**2 / 2`` on the second half.
    """
    if t < 0.5:
        return 2 * t * t
    return -1 + (4 - 2 * t) * t


# Cubic easing
def cubic_in(t: float) -> float:
    return t * t * t


def cubic_out(t: float) -> float:
    t -= 1
    return t * t * t + 1


def cubic_in_out(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    t -= 1
    return 1 + 4 * t * t * t


# Quartic easing
def quart_in(t: float) -> float:
    return t * t * t * t


def quart_out(t: float) -> float:
    t -= 1
    return 1 - t * t * t * t


def quart_in_out(t: float) -> float:
    if t < 0.5:
        return 8 * t * t * t * t
    t -= 1
    return 1 - 8 * t * t * t * t


# Quintic easing
def quint_in(t: float) -> float:
    return t * t * t * t * t


def quint_out(t: float) -> float:
    t -= 1
    return 1 + t * t * t * t * t


def quint_in_out(t: float) -> float:
    if t < 0.5:
        return 16 * t * t * t * t * t
    t -= 1
    return 1 + 16 * t * t * t * t * t


# Sine easing
def sine_in(t: float) -> float:
    """Sine ease-in. cos(pi/2) is not exactly 0 in floats, so pin t=1."""
    if _endpoint(t):
        return t
    return 1 - math.cos(t * math.pi / 2)


def sine_out(t: float) -> float:
    return math.sin(t * math.pi / 2)


def sine_in_out(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


# Exponential easing
def expo_in(t: float) -> float:
    if t == 0:
        return 0
    return math.pow(2, 10 * (t - 1))


def expo_out(t: float) -> float:
    if t == 1:
        return 1
    return 1 - math.pow(2, -10 * t)


def expo_in_out(t: float) -> float:
    if _endpoint(t):
        return t
    if t < 0.5:
        return math.pow(2, 20 * t - 10) / 2
    return (2 - math.pow(2, -20 * t + 10)) / 2


# Circular easing
def circ_in(t: float) -> float:
    return 1 - math.sqrt(1 - t * t)


def circ_out(t: float) -> float:
    t -= 1
    return math.sqrt(1 - t * t)


def circ_in_out(t: float) -> float:
    if t < 0.5:
        return (1 - math.sqrt(1 - 4 * t * t)) / 2
    t = t * 2 - 2
    return (math.sqrt(1 - t * t) + 1) / 2


# Elastic easing
def elastic_in(t: float) -> float:
    """Elastic ease-in - spring-like wind-up."""
    if _endpoint(t):
        return t
    return -math.pow(2, 10 * (t - 1)) * math.sin((t - 1.1) * 5 * math.pi)


def elastic_out(t: float) -> float:
    """Elastic ease-out - spring-like settle."""
    if _endpoint(t):
        return t
    return math.pow(2, -10 * t) * math.sin((t - 0.1) * 5 * math.pi) + 1


def elastic_in_out(t: float) -> float:
    if _endpoint(t):
        return t
    t = t * 2 - 1
    if t < 0:
        return -0.5 * math.pow(2, 10 * t) * math.sin((t - 0.1) * 5 * math.pi)
    return 0.5 * math.pow(2, -10 * t) * math.sin((t - 0.1) * 5 * math.pi) + 1


# Back easing (overshoots)
_BACK = 1.70158


def back_in(t: float) -> float:
    """Back ease-in - pulls back slightly before accelerating."""
    if _endpoint(t):
        return t
    return t * t * ((_BACK + 1) * t - _BACK)


def back_out(t: float) -> float:
    """Back ease-out - overshoots slightly before settling."""
    if _endpoint(t):
        return t
    t -= 1
    return t * t * ((_BACK + 1) * t + _BACK) + 1


def back_in_out(t: float) -> float:
    if _endpoint(t):
        return t
    c = _BACK * 1.525
    if t < 0.5:
        return (2 * t) * (2 * t) * ((c + 1) * 2 * t - c) / 2
    t = t * 2 - 2
    return (t * t * ((c + 1) * t + c) + 2) / 2


# Bounce easing
def bounce_out(t: float) -> float:
    """Bounce ease-out - decaying bounces into the target."""
    if _endpoint(t):
        return t
    n1 = 7.5625
    d1 = 2.75

    if t < 1 / d1:
        return n1 * t * t
    elif t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    elif t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    else:
        t -= 2.625 / d1
        return n1 * t * t + 0.984375


def bounce_in(t: float) -> float:
    return 1 - bounce_out(1 - t)


def bounce_in_out(t: float) -> float:
    if t < 0.5:
        return (1 - bounce_out(1 - 2 * t)) / 2
    return (1 + bounce_out(2 * t - 1)) / 2


# Easing function lookup table
EASING_FUNCTIONS: dict[EasingCurve, EasingFunction] = {
    EasingCurve.LINEAR: linear,

    EasingCurve.QUAD_IN: quad_in,
    EasingCurve.QUAD_OUT: quad_out,
    EasingCurve.QUAD_IN_OUT: quad_in_out,

    EasingCurve.CUBIC_IN: cubic_in,
    EasingCurve.CUBIC_OUT: cubic_out,
    EasingCurve.CUBIC_IN_OUT: cubic_in_out,

    EasingCurve.QUART_IN: quart_in,
    EasingCurve.QUART_OUT: quart_out,
    EasingCurve.QUART_IN_OUT: quart_in_out,

    EasingCurve.QUINT_IN: quint_in,
    EasingCurve.QUINT_OUT: quint_out,
    EasingCurve.QUINT_IN_OUT: quint_in_out,

    EasingCurve.SINE_IN: sine_in,
    EasingCurve.SINE_OUT: sine_out,
    EasingCurve.SINE_IN_OUT: sine_in_out,

    EasingCurve.EXPO_IN: expo_in,
    EasingCurve.EXPO_OUT: expo_out,
    EasingCurve.EXPO_IN_OUT: expo_in_out,

    EasingCurve.CIRC_IN: circ_in,
    EasingCurve.CIRC_OUT: circ_out,
    EasingCurve.CIRC_IN_OUT: circ_in_out,

    EasingCurve.ELASTIC_IN: elastic_in,
    EasingCurve.ELASTIC_OUT: elastic_out,
    EasingCurve.ELASTIC_IN_OUT: elastic_in_out,

    EasingCurve.BACK_IN: back_in,
    EasingCurve.BACK_OUT: back_out,
    EasingCurve.BACK_IN_OUT: back_in_out,

    EasingCurve.BOUNCE_IN: bounce_in,
    EasingCurve.BOUNCE_OUT: bounce_out,
    EasingCurve.BOUNCE_IN_OUT: bounce_in_out,
}

DEFAULT_EASING: EasingFunction = quad_in_out


def get_easing_function(curve: EasingCurve) -> EasingFunction:
    """
    Get the easing function for a given curve.

    Raises:
        ValueError: If curve is not found
    """
    if curve not in EASING_FUNCTIONS:
        raise ValueError(f"Unknown easing curve: {curve}")

    return EASING_FUNCTIONS[curve]


def resolve_easing(value: Union[EasingFunction, EasingCurve, str, None]) -> EasingFunction:
    """
    Turn a callable, an EasingCurve or its string value into an easing function.

    ``None`` resolves to the default (quad_in_out). Strings come from
    configuration, e.g. ``"quad_in_out"`` or ``"bounce_out"``.

    Raises:
        ValueError: If a string or curve does not name a known easing
    """
    if value is None:
        return DEFAULT_EASING
    if isinstance(value, EasingCurve):
        return get_easing_function(value)
    if isinstance(value, str):
        try:
            curve = EasingCurve(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown easing curve: {value!r}") from None
        return get_easing_function(curve)
    if callable(value):
        return value
    raise ValueError(f"Cannot use {value!r} as an easing function")


def ease(t: float, curve: Union[EasingCurve, EasingFunction] = EasingCurve.QUAD_IN_OUT) -> float:
    """
    Apply an easing curve to a time value clamped to [0.0, 1.0].
    """
    t = max(0.0, min(1.0, t))
    return resolve_easing(curve)(t)
