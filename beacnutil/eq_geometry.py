"""Geometry and filter helpers for drawing a parametric equaliser.

Frequencies are laid out on a logarithmic axis from 20 Hz to 20 kHz, gains
on a linear axis from -12 dB to +12 dB.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from beacnutil.biquad import (
    BiquadCoefficient,
    bell_coefficient,
    freq_response_many,
    high_pass_coefficient,
    high_shelf_coefficient,
    low_pass_coefficient,
    low_shelf_coefficient,
    notch_coefficient,
)

__all__ = [
    "MIN_FREQUENCY",
    "MAX_FREQUENCY",
    "MIN_GAIN",
    "MAX_GAIN",
    "EQ_MARGIN",
    "BandType",
    "EqualiserBand",
    "Rect",
    "plot_rect_for",
    "freq_to_x",
    "x_to_freq",
    "db_to_y",
    "y_to_db",
    "band_type_has_gain",
    "coefficient_for",
    "band_gains",
    "prune_flat_points",
    "adaptive_smooth_points",
]

MIN_FREQUENCY = 20
MAX_FREQUENCY = 20000

MIN_GAIN = -12.0
MAX_GAIN = 12.0

# Space left around the plot for the axis labels (x, y).
EQ_MARGIN = (25.0, 20.0)

_SMOOTHING_CUTOFF_HZ = 100


class BandType(Enum):
    """The filter shape of an equaliser band."""

    LOW_PASS_FILTER = "low_pass_filter"
    HIGH_PASS_FILTER = "high_pass_filter"
    NOTCH_FILTER = "notch_filter"
    BELL_BAND = "bell_band"
    LOW_SHELF = "low_shelf"
    HIGH_SHELF = "high_shelf"
    NOT_SET = "not_set"


@dataclass
class EqualiserBand:
    """One band of the equaliser as configured on the device."""

    enabled: bool = False
    band_type: BandType = BandType.NOT_SET
    frequency: int = 0
    gain: float = 0.0
    q: float = 0.0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in screen coordinates (y grows downwards)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def plot_rect_for(rect: Rect) -> Rect:
    """Return the plotting area inside ``rect``, leaving room for axis labels."""
    margin_x, margin_y = EQ_MARGIN
    return Rect(rect.min_x + margin_x, rect.min_y + margin_y, rect.max_x, rect.max_y)


_LOG_MIN = math.log10(MIN_FREQUENCY)
_LOG_MAX = math.log10(MAX_FREQUENCY)


def freq_to_x(freq: float, plot_rect: Rect) -> float:
    """Convert a frequency in Hz to an x coordinate in ``plot_rect``."""
    normalised = (math.log10(freq) - _LOG_MIN) / (_LOG_MAX - _LOG_MIN)
    return plot_rect.min_x + normalised * plot_rect.width


def x_to_freq(x: float, plot_rect: Rect) -> float:
    """Convert an x coordinate in ``plot_rect`` to a frequency in Hz."""
    normalised = (x - plot_rect.min_x) / plot_rect.width
    return 10.0 ** (_LOG_MIN + normalised * (_LOG_MAX - _LOG_MIN))


def db_to_y(db: float, plot_rect: Rect) -> float:
    """Convert a gain in dB to a y coordinate in ``plot_rect``."""
    normalised = (MAX_GAIN - db) / (MAX_GAIN - MIN_GAIN)
    return plot_rect.min_y + normalised * plot_rect.height


def y_to_db(y: float, plot_rect: Rect) -> float:
    """Convert a y coordinate in ``plot_rect`` to a gain in dB."""
    normalised = (y - plot_rect.min_y) / plot_rect.height
    return MAX_GAIN - normalised * (MAX_GAIN - MIN_GAIN)


def band_type_has_gain(band_type: BandType) -> bool:
    """Tell whether a band of this type uses its gain setting."""
    return band_type not in (
        BandType.HIGH_PASS_FILTER,
        BandType.LOW_PASS_FILTER,
        BandType.NOTCH_FILTER,
    )


def coefficient_for(band: EqualiserBand) -> BiquadCoefficient:
    """Return the biquad coefficients for ``band``.

    Raises ``ValueError`` if the band has no type set.
    """
    freq = float(band.frequency)
    match band.band_type:
        case BandType.LOW_SHELF:
            return low_shelf_coefficient(freq, band.gain, band.q)
        case BandType.HIGH_SHELF:
            return high_shelf_coefficient(freq, band.gain, band.q)
        case BandType.BELL_BAND:
            return bell_coefficient(freq, band.gain, band.q)
        case BandType.NOTCH_FILTER:
            return notch_coefficient(freq, band.q)
        case BandType.HIGH_PASS_FILTER:
            return high_pass_coefficient(freq, band.q)
        case BandType.LOW_PASS_FILTER:
            return low_pass_coefficient(freq, band.q)
    raise ValueError("equaliser band has no type set")


def band_gains(frequencies: Iterable[float], band: EqualiserBand) -> list[float]:
    """Return the gain in dB that ``band`` applies at each frequency."""
    return freq_response_many(frequencies, coefficient_for(band))


def prune_flat_points(
    points: Sequence[tuple[float, float]], threshold: float
) -> list[tuple[float, float]]:
    """Drop points whose y moved less than ``threshold`` from the last kept point.

    The first and last points are always kept.
    """
    if not points:
        return []

    first = points[0]
    result = [first]
    last_y = first[1]
    for point in points[1:]:
        if abs(point[1] - last_y) >= threshold:
            result.append(point)
            last_y = point[1]

    if result[-1] != points[-1]:
        result.append(points[-1])
    return result


def adaptive_smooth_points(
    points: Sequence[tuple[float, float]], rect: Rect, window: int
) -> list[tuple[float, float]]:
    """Smooth the y values of points lying below 100 Hz.

    Each such point becomes a weighted average of its neighbours within
    ``window`` places, nearer neighbours weighing more.
    """
    cutoff_x = freq_to_x(_SMOOTHING_CUTOFF_HZ, rect)
    last = len(points) - 1
    smoothed: list[tuple[float, float]] = []

    for i, (x, y) in enumerate(points):
        if x > cutoff_x:
            smoothed.append((x, y))
            continue

        start = max(i - window, 0)
        end = min(i + window, last)
        sum_y = 0.0
        weight_sum = 0.0
        for j, (_, other_y) in enumerate(points[start : end + 1], start):
            weight = 1.0 / (1.0 + abs(i - j))
            sum_y += other_y * weight
            weight_sum += weight

        smoothed.append((x, sum_y / weight_sum if weight_sum > 0.0 else y))

    return smoothed