"""Interactive state of a parametric equaliser plot.

Keeps the active band, the band being dragged and cached frequency
responses. Turns pointer clicks, drags and scrolls into band changes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from beacnutil.eq_geometry import (
    MAX_FREQUENCY,
    MAX_GAIN,
    MIN_FREQUENCY,
    MIN_GAIN,
    EqualiserBand,
    Rect,
    adaptive_smooth_points,
    band_gains,
    band_type_has_gain,
    db_to_y,
    freq_to_x,
    plot_rect_for,
    x_to_freq,
    y_to_db,
)

__all__ = ["EQ_GRAB_THRESHOLD", "ParametricEq"]

# How far from a band's point the pointer may be and still grab it.
EQ_GRAB_THRESHOLD = 20.0

_SMOOTHING_WINDOW = 8
_Q_STEP = 0.2
_MIN_Q = 0.1
_MAX_Q = 10.0

Point = tuple[float, float]


def _round_tenth(value: float) -> float:
    """Round to one decimal place, halves away from zero."""
    scaled = value * 10.0
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / 10.0


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


class ParametricEq:
    """Interaction state and render caches for a parametric equaliser.

    ``advanced`` mirrors the device's equaliser mode: in simple mode only a
    band's gain can be dragged and its Q cannot be changed.
    """

    def __init__(self, advanced: bool = False) -> None:
        self._advanced = advanced
        self.active_band = 0
        self.active_band_drag: int | None = None
        self._responses: dict[int, list[float]] = {}
        self._curve: list[Point] = []
        self._rect: Rect | None = None

    @property
    def advanced(self) -> bool:
        return self._advanced

    @advanced.setter
    def advanced(self, value: bool) -> None:
        if value != self._advanced:
            self._advanced = value
            self._clear_caches()

    def _clear_caches(self) -> None:
        self._responses.clear()
        self._curve = []

    def _ensure_rect(self, rect: Rect) -> None:
        if self._rect != rect:
            self._clear_caches()
            self._rect = rect

    def frequency_response(
        self, rect: Rect, band_index: int, bands: Sequence[EqualiserBand]
    ) -> list[float]:
        """Gain in dB of one band at every whole pixel column of ``rect``.

        The result is cached until the band is invalidated or ``rect`` changes.
        """
        self._ensure_rect(rect)
        cached = self._responses.get(band_index)
        if cached is not None:
            return list(cached)

        steps = int(rect.width)
        freqs = [x_to_freq(i + rect.min_x, rect) for i in range(steps + 1)]
        gains = band_gains(freqs, bands[band_index])
        self._responses[band_index] = gains
        return list(gains)

    def band_curve_points(
        self, rect: Rect, band_index: int, bands: Sequence[EqualiserBand]
    ) -> list[Point]:
        """The smoothed response curve of one band as screen points."""
        gains = self.frequency_response(rect, band_index, bands)
        steps = int(rect.width)
        points = [
            (rect.min_x + i, db_to_y(gain, rect))
            for i, gain in zip(range(steps + 1), gains)
        ]
        return adaptive_smooth_points(points, rect, _SMOOTHING_WINDOW)

    def curve_points(
        self, plot_rect: Rect, bands: Sequence[EqualiserBand]
    ) -> list[Point]:
        """The combined response of all enabled bands, clamped to ``plot_rect``.

        Raises ``ValueError`` if no band is enabled.
        """
        self._ensure_rect(plot_rect)
        if self._curve:
            return list(self._curve)

        responses = [
            self.frequency_response(plot_rect, index, bands)
            for index, band in enumerate(bands)
            if band.enabled
        ]
        if not responses:
            raise ValueError("no equaliser band is enabled")

        length = len(responses[0])
        if any(len(response) != length for response in responses):
            raise ValueError("band responses differ in length")
        totals = [sum(values) for values in zip(*responses)]

        steps = int(plot_rect.width)
        points = [
            (plot_rect.min_x + i, db_to_y(total, plot_rect))
            for i, total in enumerate(totals[: steps + 1])
        ]
        smoothed = adaptive_smooth_points(points, plot_rect, _SMOOTHING_WINDOW)

        min_y = plot_rect.min_y
        max_y = plot_rect.min_y + plot_rect.height
        self._curve = [(x, _clamp(y, min_y, max_y)) for x, y in smoothed]
        return list(self._curve)

    def point_near_cursor(
        self, rect: Rect, pointer: Point, bands: Sequence[EqualiserBand]
    ) -> int | None:
        """Index of the enabled band whose point is closest to ``pointer``.

        Only points within the grab threshold count; ``None`` if there is none.
        """
        plot_rect = plot_rect_for(rect)
        closest_dist = math.inf
        closest_band = None

        for index, band in enumerate(bands):
            if not band.enabled:
                continue
            x = freq_to_x(band.frequency, plot_rect)
            gain = band.gain if band_type_has_gain(band.band_type) else 0.0
            y = db_to_y(gain, plot_rect)
            dist = math.hypot(x - pointer[0], y - pointer[1])
            if dist < closest_dist and dist < EQ_GRAB_THRESHOLD:
                closest_dist = dist
                closest_band = index
        return closest_band

    def handle_click(
        self, rect: Rect, pointer: Point, bands: Sequence[EqualiserBand]
    ) -> None:
        """Make the band under the pointer the active one, if any."""
        index = self.point_near_cursor(rect, pointer, bands)
        if index is not None:
            self.active_band = index

    def handle_drag_start(
        self, rect: Rect, pointer: Point, bands: Sequence[EqualiserBand]
    ) -> None:
        """Start dragging the band under the pointer, if any."""
        index = self.point_near_cursor(rect, pointer, bands)
        if index is not None:
            self.active_band = index
        self.active_band_drag = index

    def handle_drag(
        self, rect: Rect, pointer: Point, bands: Sequence[EqualiserBand]
    ) -> dict[str, float]:
        """Move the dragged band to follow the pointer.

        Updates the band in place and returns the settings that were changed,
        keyed ``"frequency"`` and ``"gain"``; empty when nothing is dragged.
        """
        index = self.active_band_drag
        if index is None:
            return {}

        plot_rect = plot_rect_for(rect)
        band = bands[index]
        changes: dict[str, float] = {}

        if self._advanced:
            frequency = _clamp(
                x_to_freq(pointer[0], plot_rect),
                float(MIN_FREQUENCY),
                float(MAX_FREQUENCY),
            )
            band.frequency = int(frequency)
            changes["frequency"] = float(band.frequency)

        if band_type_has_gain(band.band_type):
            gain = _clamp(y_to_db(pointer[1], plot_rect), MIN_GAIN, MAX_GAIN)
            band.gain = _round_tenth(gain)
            changes["gain"] = band.gain

        self.invalidate_band(index)
        return changes

    def handle_drag_stop(self) -> None:
        """Stop dragging."""
        self.active_band_drag = None

    def handle_scroll(
        self,
        rect: Rect,
        pointer: Point,
        scroll_up: bool,
        bands: Sequence[EqualiserBand],
    ) -> float | None:
        """Raise or lower the Q of the band under the pointer by one step.

        Only works in advanced mode. Returns the new Q, or ``None`` if
        nothing changed.
        """
        if not self._advanced:
            return None

        index = self.point_near_cursor(rect, pointer, bands)
        if index is None:
            return None

        self.active_band = index
        band = bands[index]
        step = _Q_STEP if scroll_up else -_Q_STEP
        band.q = _round_tenth(_clamp(band.q + step, _MIN_Q, _MAX_Q))
        self.invalidate_band(index)
        return band.q

    def invalidate_band(self, band_index: int) -> None:
        """Forget the cached response of a band and the combined curve."""
        self._responses.pop(band_index, None)
        self._curve = []