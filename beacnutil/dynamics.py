"""Conversions between the device's dynamics values and the simple UI controls.

The compressor and expander have a "simple" mode that shows one amount
control in place of a ratio. The noise suppressor shows its sensitivity as
a percentage of the device's -120..-60 dB range.
"""

from __future__ import annotations

import math

from beacnutil.ranges import map_to_range

__all__ = [
    "compressor_ratio_to_amount",
    "compressor_amount_to_ratio",
    "expander_ratio_to_amount",
    "expander_amount_to_ratio",
    "sensitivity_to_percent",
    "percent_to_sensitivity",
]

_BYTE_MAX = 255

_COMPRESSOR_AMOUNT_MAX = 10
_EXPANDER_AMOUNT_MAX = 100
_PERCENT_MAX = 100

_SENSITIVITY_MIN = -120.0
_SENSITIVITY_SPAN = 60.0


def _round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def _round_two_places(value: float) -> float:
    return _round_half_away(value * 100.0) / 100.0


def _to_byte(value: float) -> int:
    """Convert to an integer in 0..255, truncating and saturating; NaN gives 0."""
    if math.isnan(value):
        return 0
    if value <= 0:
        return 0
    if value >= _BYTE_MAX:
        return _BYTE_MAX
    return int(value)


def _check_amount(amount: float, maximum: int, what: str) -> float:
    if not 0 <= amount <= maximum:
        raise ValueError(f"{what} must be between 0 and {maximum}, got {amount}")
    return float(amount)


def compressor_ratio_to_amount(ratio: float) -> int:
    """Map a compressor ratio (1..10) to the simple-mode amount (0..10)."""
    return _to_byte(_round_half_away(map_to_range(ratio, 1.0, 10.0, 0.0, 10.0)))


def compressor_amount_to_ratio(amount: int) -> float:
    """Map a simple-mode compressor amount (0..10) to a ratio rounded to 2 places."""
    value = _check_amount(amount, _COMPRESSOR_AMOUNT_MAX, "compressor amount")
    return _round_two_places(map_to_range(value, 0.0, 10.0, 1.0, 10.0))


def expander_ratio_to_amount(ratio: float) -> int:
    """Map an expander ratio to the simple-mode amount (0..100).

    Ratios 1..3 cover amounts 0..50 and ratios 3.1..10 cover 50.1..100.
    """
    if ratio <= 3.0:
        amount = map_to_range(ratio, 1.0, 3.0, 0.0, 50.0)
    else:
        amount = map_to_range(ratio, 3.1, 10.0, 50.1, 100.0)
    return _to_byte(_round_half_away(amount))


def expander_amount_to_ratio(amount: int) -> float:
    """Map a simple-mode expander amount (0..100) to a ratio rounded to 2 places."""
    value = _check_amount(amount, _EXPANDER_AMOUNT_MAX, "expander amount")
    if value <= 50:
        ratio = map_to_range(value, 0.0, 50.0, 1.0, 3.0)
    else:
        ratio = map_to_range(value, 51.0, 100.0, 3.1, 10.0)
    return _round_two_places(ratio)


def sensitivity_to_percent(sensitivity: float) -> int:
    """Express a suppressor sensitivity in dB (-120..-60) as a whole percentage."""
    percent = ((sensitivity - _SENSITIVITY_MIN) / _SENSITIVITY_SPAN) * 100.0
    return _to_byte(percent)


def percent_to_sensitivity(percent: int) -> float:
    """Turn a sensitivity percentage (0..100) back into dB."""
    value = _check_amount(percent, _PERCENT_MAX, "sensitivity percent")
    return _SENSITIVITY_MIN + _SENSITIVITY_SPAN * (value / 100.0)