"""
Ease-in-out curves used to interpolate transform components.

Every curve maps progress in [0, 1] to [0, 1], is monotonic, and is symmetric
about (0.5, 0.5). Linear interpolation is intentionally not offered.
"""

from __future__ import annotations

import math
from typing import Callable, Dict

EasingFn = Callable[[float], float]


def _clamp(k: float) -> float:
    return max(0.0, min(1.0, float(k)))


def quadratic_in_out(k: float) -> float:
    """Quadratic ease-in-out: slow start, fast middle, slow end."""
    k = _clamp(k) * 2.0
    if k < 1.0:
        return 0.5 * k * k
    k -= 1.0
    return -0.5 * (k * (k - 2.0) - 1.0)


def cubic_in_out(k: float) -> float:
    k = _clamp(k) * 2.0
    if k < 1.0:
        return 0.5 * k * k * k
    k -= 2.0
    return 0.5 * (k * k * k + 2.0)


def sinusoidal_in_out(k: float) -> float:
    return 0.5 * (1.0 - math.cos(math.pi * _clamp(k)))


EASINGS: Dict[str, EasingFn] = {
    "quadratic_in_out": quadratic_in_out,
    "cubic_in_out": cubic_in_out,
    "sinusoidal_in_out": sinusoidal_in_out,
}


def get_easing(name: str) -> EasingFn:
    """Return the easing function registered under `name`."""
    try:
        return EASINGS[name]
    except KeyError:
        raise ValueError(f"Unknown easing '{name}' (expected one of: {', '.join(sorted(EASINGS))})") from None
