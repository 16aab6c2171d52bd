"""Numeric helpers for mapping values between ranges and tuning controls."""

from __future__ import annotations

import math
import numbers

__all__ = ["map_to_range", "drag_speed_from_range", "is_float", "decimals_for"]

_MIN_SPEED = 1e-10
_MAX_SPEED = 100.0
_FLOAT_DECIMALS = 1


def map_to_range(
    value: float,
    value_min: float,
    value_max: float,
    target_min: float,
    target_max: float,
) -> float:
    """Linearly map ``value`` from ``[value_min, value_max]`` onto the target range."""
    value_min = float(value_min)
    value_max = float(value_max)
    if value_max == value_min:
        raise ValueError("source range is empty")
    target_min = float(target_min)
    target_max = float(target_max)
    return target_min + ((target_max - target_min) * (float(value) - value_min)) / (
        value_max - value_min
    )


def drag_speed_from_range(start: float, end: float, steps: int = 150) -> float:
    """Return a drag speed that crosses ``start..end`` in about ``steps`` steps.

    The speed stays usable on tiny ranges and is kept within ``1e-10..100``.
    """
    if steps <= 0:
        raise ValueError("steps must be positive")
    span = abs(float(end) - float(start))
    base_speed = span / steps

    if span > 0.0:
        minimum_speed = max(base_speed, 10.0 ** (math.floor(math.log10(span)) - 4.0))
    else:
        minimum_speed = base_speed

    return min(max(max(base_speed, minimum_speed), _MIN_SPEED), _MAX_SPEED)


def is_float(value: object) -> bool:
    """Tell whether ``value`` is a floating point number."""
    return isinstance(value, float)


def decimals_for(value: object) -> int | None:
    """Fixed decimal places used to show ``value``: one for floats, none otherwise.

    Raises ``TypeError`` when ``value`` is not a real number.
    """
    if not isinstance(value, numbers.Real):
        raise TypeError(f"expected a real number, got {type(value).__name__}")
    if is_float(value):
        return _FLOAT_DECIMALS
    return None