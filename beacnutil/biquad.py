"""Biquad filter coefficients and their frequency response.

Formulas follow the well-known audio EQ cookbook, evaluated at a fixed
sample rate of 48 kHz.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

SAMPLE_RATE = 48000.0

__all__ = [
    "SAMPLE_RATE",
    "BiquadCoefficient",
    "freq_response",
    "freq_response_many",
    "low_shelf_coefficient",
    "high_shelf_coefficient",
    "bell_coefficient",
    "notch_coefficient",
    "high_pass_coefficient",
    "low_pass_coefficient",
]


@dataclass(frozen=True)
class BiquadCoefficient:
    """Coefficients of a biquad filter.

    After normalisation ``b0``, ``b1``, ``b2``, ``a1`` and ``a2`` are divided
    by ``a0``; ``a0`` itself keeps its original value.
    """

    a0: float
    a1: float
    a2: float
    b0: float
    b1: float
    b2: float

    def normalised(self) -> BiquadCoefficient:
        """Return a copy with every coefficient but ``a0`` divided by ``a0``."""
        a0 = self.a0
        return BiquadCoefficient(
            a0=a0,
            a1=self.a1 / a0,
            a2=self.a2 / a0,
            b0=self.b0 / a0,
            b1=self.b1 / a0,
            b2=self.b2 / a0,
        )


def freq_response(freq: float, coefficients: BiquadCoefficient) -> float:
    """Return the magnitude response in dB of the filter at ``freq`` Hz."""
    c = coefficients
    w = 2.0 * math.pi * freq / SAMPLE_RATE
    cos_w = math.cos(w)
    cos_2w = math.cos(2.0 * w)
    sin_w = math.sin(w)
    sin_2w = math.sin(2.0 * w)

    num_real = c.b0 + c.b1 * cos_w + c.b2 * cos_2w
    num_imag = -(c.b1 * sin_w + c.b2 * sin_2w)

    den_real = 1.0 + c.a1 * cos_w + c.a2 * cos_2w
    den_imag = -(c.a1 * sin_w + c.a2 * sin_2w)

    denom_mag_sq = den_real * den_real + den_imag * den_imag

    real = (num_real * den_real + num_imag * den_imag) / denom_mag_sq
    imag = (num_imag * den_real - num_real * den_imag) / denom_mag_sq

    mag = math.hypot(real, imag)
    if mag == 0.0:
        return -math.inf
    return 20.0 * math.log10(mag)


def freq_response_many(
    freqs: Iterable[float], coefficients: BiquadCoefficient
) -> list[float]:
    """Return the magnitude response in dB for each frequency in ``freqs``."""
    return [freq_response(freq, coefficients) for freq in freqs]


def _angle(freq: float, q: float) -> tuple[float, float, float]:
    w0 = 2.0 * math.pi * freq / SAMPLE_RATE
    cos_w0 = math.cos(w0)
    sin_w0 = math.sin(w0)
    alpha = sin_w0 / (2.0 * q)
    return cos_w0, sin_w0, alpha


def low_shelf_coefficient(freq: float, gain: float, q: float) -> BiquadCoefficient:
    """Low shelf filter boosting or cutting below ``freq`` by ``gain`` dB."""
    a = 10.0 ** (gain / 40.0)
    cos_w0, _, alpha = _angle(freq, q)
    sqrt_a = math.sqrt(a)

    return BiquadCoefficient(
        b0=a * (a + 1.0 - (a - 1.0) * cos_w0 + 2.0 * sqrt_a * alpha),
        b1=2.0 * a * (a - 1.0 - (a + 1.0) * cos_w0),
        b2=a * (a + 1.0 - (a - 1.0) * cos_w0 - 2.0 * sqrt_a * alpha),
        a0=a + 1.0 + (a - 1.0) * cos_w0 + 2.0 * sqrt_a * alpha,
        a1=-2.0 * (a - 1.0 + (a + 1.0) * cos_w0),
        a2=a + 1.0 + (a - 1.0) * cos_w0 - 2.0 * sqrt_a * alpha,
    ).normalised()


def high_shelf_coefficient(freq: float, gain: float, q: float) -> BiquadCoefficient:
    """High shelf filter boosting or cutting above ``freq`` by ``gain`` dB."""
    a = 10.0 ** (gain / 40.0)
    sqrt_a = math.sqrt(a)
    cos_w0, _, alpha = _angle(freq, q)

    return BiquadCoefficient(
        b0=a * (a + 1.0 + (a - 1.0) * cos_w0 + 2.0 * sqrt_a * alpha),
        b1=-2.0 * a * (a - 1.0 + (a + 1.0) * cos_w0),
        b2=a * (a + 1.0 + (a - 1.0) * cos_w0 - 2.0 * sqrt_a * alpha),
        a0=a + 1.0 - (a - 1.0) * cos_w0 + 2.0 * sqrt_a * alpha,
        a1=2.0 * (a - 1.0 - (a + 1.0) * cos_w0),
        a2=a + 1.0 - (a - 1.0) * cos_w0 - 2.0 * sqrt_a * alpha,
    ).normalised()


def bell_coefficient(freq: float, gain: float, q: float) -> BiquadCoefficient:
    """Peaking (bell) filter centred on ``freq`` with ``gain`` dB."""
    a = 10.0 ** (gain / 40.0)
    cos_w0, _, alpha = _angle(freq, q)

    return BiquadCoefficient(
        b0=1.0 + alpha * a,
        b1=-2.0 * cos_w0,
        b2=1.0 - alpha * a,
        a0=1.0 + alpha / a,
        a1=-2.0 * cos_w0,
        a2=1.0 - alpha / a,
    ).normalised()


def notch_coefficient(freq: float, q: float) -> BiquadCoefficient:
    """Notch filter at ``freq``; ``q`` sets the bandwidth."""
    cos_w0, _, alpha = _angle(freq, q)

    return BiquadCoefficient(
        b0=1.0,
        b1=-2.0 * cos_w0,
        b2=1.0,
        a0=1.0 + alpha,
        a1=-2.0 * cos_w0,
        a2=1.0 - alpha,
    ).normalised()


def high_pass_coefficient(freq: float, q: float) -> BiquadCoefficient:
    """High pass filter with cutoff ``freq``."""
    cos_w0, _, alpha = _angle(freq, q)

    return BiquadCoefficient(
        b0=(1.0 + cos_w0) / 2.0,
        b1=-(1.0 + cos_w0),
        b2=(1.0 + cos_w0) / 2.0,
        a0=1.0 + alpha,
        a1=-2.0 * cos_w0,
        a2=1.0 - alpha,
    ).normalised()


def low_pass_coefficient(freq: float, q: float) -> BiquadCoefficient:
    """Low pass filter with cutoff ``freq``."""
    cos_w0, _, alpha = _angle(freq, q)

    return BiquadCoefficient(
        b0=(1.0 - cos_w0) / 2.0,
        b1=1.0 - cos_w0,
        b2=(1.0 - cos_w0) / 2.0,
        a0=1.0 + alpha,
        a1=-2.0 * cos_w0,
        a2=1.0 - alpha,
    ).normalised()