from __future__ import annotations

import logging
from math import cos, pi, sin, sqrt
from types import MappingProxyType
from typing import Callable, List, Mapping, Tuple

log = logging.getLogger(__name__)

EasingFunction = Callable[[float], float]
ControlPoints = Tuple[float, float, float, float]  # x1, y1, x2, y2

DEFAULT_CURVE = "Quad - EaseIn"

_BACK_C1 = 1.70158
_BACK_C2 = _BACK_C1 * 1.525
_BACK_C3 = _BACK_C1 + 1


# -----------------------------------------------------------------------------
# Named curves
# -----------------------------------------------------------------------------


def linear(t: float) -> float:
    return t


def quad_ease_in(t: float) -> float:
    return t * t


def quad_ease_out(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


def quad_ease_in_out(t: float) -> float:
    return 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2


def cubic_ease_in(t: float) -> float:
    return t * t * t


def cubic_ease_out(t: float) -> float:
    return 1 - (1 - t) ** 3


def cubic_ease_in_out(t: float) -> float:
    return 4 * t * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2


def quart_ease_in(t: float) -> float:
    return t * t * t * t


def quart_ease_out(t: float) -> float:
    return 1 - (1 - t) ** 4


def quart_ease_in_out(t: float) -> float:
    return 8 * t**4 if t < 0.5 else 1 - (-2 * t + 2) ** 4 / 2


def quint_ease_in(t: float) -> float:
    return t**5


def quint_ease_out(t: float) -> float:
    return 1 - (1 - t) ** 5


def quint_ease_in_out(t: float) -> float:
    return 16 * t**5 if t < 0.5 else 1 - (-2 * t + 2) ** 5 / 2


def sine_ease_in(t: float) -> float:
    # cos(pi/2) is 6e-17, not 0
    return 1.0 if t == 1 else 1 - cos(t * pi / 2)


def sine_ease_out(t: float) -> float:
    return sin(t * pi / 2)


def sine_ease_in_out(t: float) -> float:
    return -(cos(pi * t) - 1) / 2


def expo_ease_in(t: float) -> float:
    return 0.0 if t == 0 else 2 ** (10 * (t - 1))


def expo_ease_out(t: float) -> float:
    return 1.0 if t == 1 else 1 - 2 ** (-10 * t)


def expo_ease_in_out(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    if t < 0.5:
        return 2 ** (20 * t - 10) / 2
    return (2 - 2 ** (-20 * t + 10)) / 2


def circ_ease_in(t: float) -> float:
    return 1 - sqrt(1 - t * t)


def circ_ease_out(t: float) -> float:
    return sqrt(1 - (t - 1) ** 2)


def circ_ease_in_out(t: float) -> float:
    if t < 0.5:
        return (1 - sqrt(1 - (2 * t) ** 2)) / 2
    return (sqrt(1 - (-2 * t + 2) ** 2) + 1) / 2


def back_ease_in(t: float) -> float:
    return 1.0 if t == 1 else _BACK_C3 * t**3 - _BACK_C1 * t * t


def back_ease_out(t: float) -> float:
    return 0.0 if t == 0 else 1 + _BACK_C3 * (t - 1) ** 3 + _BACK_C1 * (t - 1) ** 2


def back_ease_in_out(t: float) -> float:
    if t < 0.5:
        return ((2 * t) ** 2 * ((_BACK_C2 + 1) * 2 * t - _BACK_C2)) / 2
    return ((2 * t - 2) ** 2 * ((_BACK_C2 + 1) * (t * 2 - 2) + _BACK_C2) + 2) / 2


EASING_CURVES: Mapping[str, EasingFunction] = MappingProxyType(
    {
        "Linear": linear,
        "Quad - EaseIn": quad_ease_in,
        "Quad - EaseOut": quad_ease_out,
        "Quad - EaseInOut": quad_ease_in_out,
        "Quart - EaseIn": quart_ease_in,
        "Quart - EaseOut": quart_ease_out,
        "Quart - EaseInOut": quart_ease_in_out,
        "Sine - EaseIn": sine_ease_in,
        "Sine - EaseOut": sine_ease_out,
        "Sine - EaseInOut": sine_ease_in_out,
        "Cubic - EaseIn": cubic_ease_in,
        "Cubic - EaseOut": cubic_ease_out,
        "Cubic - EaseInOut": cubic_ease_in_out,
        "Expo - EaseIn": expo_ease_in,
        "Expo - EaseOut": expo_ease_out,
        "Expo - EaseInOut": expo_ease_in_out,
        "Quint - EaseIn": quint_ease_in,
        "Quint - EaseOut": quint_ease_out,
        "Quint - EaseInOut": quint_ease_in_out,
        "Circ - EaseIn": circ_ease_in,
        "Circ - EaseOut": circ_ease_out,
        "Circ - EaseInOut": circ_ease_in_out,
        "Back - EaseIn": back_ease_in,
        "Back - EaseOut": back_ease_out,
        "Back - EaseInOut": back_ease_in_out,
    }
)


def get_easing_function(name: str) -> EasingFunction:
    fn = EASING_CURVES.get(name)
    if fn is None:
        log.debug("unknown curve %r, falling back to %r", name, DEFAULT_CURVE)
        return EASING_CURVES[DEFAULT_CURVE]
    return fn


def curve_names() -> List[str]:
    return list(EASING_CURVES)


# -----------------------------------------------------------------------------
# cubic-bezier(x1, y1, x2, y2)
# -----------------------------------------------------------------------------
_NEWTON_ITERATIONS = 8
_EPSILON = 1e-6
_BISECTION_LIMIT = 64


def get_cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunction:
    """
    CSS ``cubic-bezier()`` timing function with anchors (0,0) and (1,1).

    X(t) = x is solved with Newton–Raphson seeded at t = x; if the slope
    vanishes or 8 steps are not enough, bisection on [0, 1] takes over.
    The y control points are free, so "back" style overshoot works.
    """
    cx = 3.0 * x1
    bx = 3.0 * (x2 - x1) - cx
    ax = 1.0 - cx - bx

    cy = 3.0 * y1
    by = 3.0 * (y2 - y1) - cy
    ay = 1.0 - cy - by

    def sample_x(t: float) -> float:
        return ((ax * t + bx) * t + cx) * t

    def sample_y(t: float) -> float:
        return ((ay * t + by) * t + cy) * t

    def slope_x(t: float) -> float:
        return (3.0 * ax * t + 2.0 * bx) * t + cx

    def solve_x(x: float) -> float:
        t2 = x
        for _ in range(_NEWTON_ITERATIONS):
            err = sample_x(t2) - x
            if abs(err) < _EPSILON:
                return t2
            d = slope_x(t2)
            if abs(d) < _EPSILON:
                break
            t2 -= err / d

        t0, t1 = 0.0, 1.0
        t2 = x
        for _ in range(_BISECTION_LIMIT):
            if t0 >= t1:
                break
            x2 = sample_x(t2)
            if abs(x2 - x) < _EPSILON:
                return t2
            if x > x2:
                t0 = t2
            else:
                t1 = t2
            t2 = (t1 - t0) * 0.5 + t0
        return t2

    def cubic_bezier_at(x: float) -> float:
        if x <= 0:
            return sample_y(0.0)
        if x >= 1:
            return sample_y(1.0)
        return sample_y(solve_x(x))

    return cubic_bezier_at


# Control points approximating the named curves (easings.net)
CURVE_PRESETS: Mapping[str, ControlPoints] = MappingProxyType(
    {
        "Linear": (0.25, 0.25, 0.75, 0.75),
        "Sine - EaseIn": (0.12, 0.0, 0.39, 0.0),
        "Sine - EaseOut": (0.61, 1.0, 0.88, 1.0),
        "Sine - EaseInOut": (0.37, 0.0, 0.63, 1.0),
        "Quad - EaseIn": (0.11, 0.0, 0.5, 0.0),
        "Quad - EaseOut": (0.5, 1.0, 0.89, 1.0),
        "Quad - EaseInOut": (0.45, 0.0, 0.55, 1.0),
        "Cubic - EaseIn": (0.32, 0.0, 0.67, 0.0),
        "Cubic - EaseOut": (0.33, 1.0, 0.68, 1.0),
        "Cubic - EaseInOut": (0.65, 0.0, 0.35, 1.0),
        "Quart - EaseIn": (0.5, 0.0, 0.75, 0.0),
        "Quart - EaseOut": (0.25, 1.0, 0.5, 1.0),
        "Quart - EaseInOut": (0.76, 0.0, 0.24, 1.0),
        "Quint - EaseIn": (0.64, 0.0, 0.78, 0.0),
        "Quint - EaseOut": (0.22, 1.0, 0.36, 1.0),
        "Quint - EaseInOut": (0.83, 0.0, 0.17, 1.0),
        "Expo - EaseIn": (0.7, 0.0, 0.84, 0.0),
        "Expo - EaseOut": (0.16, 1.0, 0.3, 1.0),
        "Expo - EaseInOut": (0.87, 0.0, 0.13, 1.0),
        "Circ - EaseIn": (0.55, 0.0, 1.0, 0.45),
        "Circ - EaseOut": (0.0, 0.55, 0.45, 1.0),
        "Circ - EaseInOut": (0.85, 0.0, 0.15, 1.0),
        "Back - EaseIn": (0.36, 0.0, 0.66, -0.56),
        "Back - EaseOut": (0.34, 1.56, 0.64, 1.0),
        "Back - EaseInOut": (0.68, -0.6, 0.32, 1.6),
    }
)


__all__ = [
    "EasingFunction",
    "ControlPoints",
    "DEFAULT_CURVE",
    "EASING_CURVES",
    "CURVE_PRESETS",
    "get_easing_function",
    "get_cubic_bezier",
    "curve_names",
]
