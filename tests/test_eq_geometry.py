import math

import pytest

from beacnutil.eq_geometry import (
    EQ_MARGIN,
    MAX_FREQUENCY,
    MAX_GAIN,
    MIN_FREQUENCY,
    MIN_GAIN,
    BandType,
    EqualiserBand,
    Rect,
    adaptive_smooth_points,
    band_gains,
    band_type_has_gain,
    coefficient_for,
    db_to_y,
    freq_to_x,
    plot_rect_for,
    prune_flat_points,
    x_to_freq,
    y_to_db,
)


@pytest.fixture
def rect():
    return Rect(10.0, 30.0, 510.0, 330.0)


def test_rect_dimensions(rect):
    assert rect.width == 500.0
    assert rect.height == 300.0


def test_plot_rect_applies_margin(rect):
    plot = plot_rect_for(rect)
    assert plot.min_x == rect.min_x + EQ_MARGIN[0]
    assert plot.min_y == rect.min_y + EQ_MARGIN[1]
    assert (plot.max_x, plot.max_y) == (rect.max_x, rect.max_y)


def test_freq_axis_ends(rect):
    assert freq_to_x(MIN_FREQUENCY, rect) == pytest.approx(rect.min_x)
    assert freq_to_x(MAX_FREQUENCY, rect) == pytest.approx(rect.max_x)


@pytest.mark.parametrize("freq", [20, 36, 100, 500, 2000, 16000, 20000])
def test_freq_round_trip(rect, freq):
    assert x_to_freq(freq_to_x(freq, rect), rect) == pytest.approx(freq)


def test_freq_axis_is_increasing(rect):
    xs = [freq_to_x(f, rect) for f in (30, 50, 100, 250, 500, 1000)]
    assert xs == sorted(xs)


def test_gain_axis_ends(rect):
    assert db_to_y(MAX_GAIN, rect) == pytest.approx(rect.min_y)
    assert db_to_y(MIN_GAIN, rect) == pytest.approx(rect.max_y)
    assert db_to_y(0.0, rect) == pytest.approx((rect.min_y + rect.max_y) / 2)


@pytest.mark.parametrize("db", [-12.0, -3.5, 0.0, 4.2, 12.0])
def test_gain_round_trip(rect, db):
    assert y_to_db(db_to_y(db, rect), rect) == pytest.approx(db)


@pytest.mark.parametrize(
    "band_type, expected",
    [
        (BandType.HIGH_PASS_FILTER, False),
        (BandType.LOW_PASS_FILTER, False),
        (BandType.NOTCH_FILTER, False),
        (BandType.BELL_BAND, True),
        (BandType.LOW_SHELF, True),
        (BandType.HIGH_SHELF, True),
    ],
)
def test_band_type_has_gain(band_type, expected):
    assert band_type_has_gain(band_type) is expected


def test_coefficient_for_unset_band_raises():
    with pytest.raises(ValueError):
        coefficient_for(EqualiserBand(enabled=True, frequency=500, q=0.7))


def test_default_band_is_unset_and_disabled():
    band = EqualiserBand()
    assert band.band_type is BandType.NOT_SET
    assert band.enabled is False


def test_flat_bell_has_no_gain():
    band = EqualiserBand(True, BandType.BELL_BAND, 500, 0.0, 0.7)
    for gain in band_gains([50.0, 500.0, 5000.0], band):
        assert gain == pytest.approx(0.0, abs=1e-9)


def test_bell_reaches_its_gain_at_centre():
    band = EqualiserBand(True, BandType.BELL_BAND, 1000, 6.0, 1.0)
    (centre,) = band_gains([1000.0], band)
    assert centre == pytest.approx(6.0, abs=1e-6)


def test_high_pass_attenuates_low_frequencies():
    band = EqualiserBand(True, BandType.HIGH_PASS_FILTER, 1000, 0.0, 0.7)
    low, high = band_gains([50.0, 15000.0], band)
    assert low < -20.0
    assert abs(high) < 1.0


def test_low_shelf_cut_below_frequency():
    band = EqualiserBand(True, BandType.LOW_SHELF, 200, -6.0, 0.7)
    low, high = band_gains([20.0, 15000.0], band)
    assert low == pytest.approx(-6.0, abs=0.2)
    assert abs(high) < 0.2


def test_band_gains_length_matches():
    band = EqualiserBand(True, BandType.NOTCH_FILTER, 1000, 0.0, 2.0)
    freqs = [x_to_freq(float(i), Rect(0.0, 0.0, 99.0, 10.0)) for i in range(100)]
    gains = band_gains(freqs, band)
    assert len(gains) == len(freqs)
    assert all(g <= 1e-9 for g in gains if not math.isinf(g))


def test_prune_empty():
    assert prune_flat_points([], 1.0) == []


def test_prune_flat_keeps_ends():
    points = [(float(i), 5.0) for i in range(10)]
    assert prune_flat_points(points, 1.0) == [points[0], points[-1]]


def test_prune_keeps_changes():
    points = [(0.0, 0.0), (1.0, 0.2), (2.0, 2.0), (3.0, 2.1), (4.0, 5.0)]
    assert prune_flat_points(points, 1.0) == [
        (0.0, 0.0),
        (2.0, 2.0),
        (4.0, 5.0),
    ]


def test_prune_single_point():
    assert prune_flat_points([(1.0, 2.0)], 1.0) == [(1.0, 2.0)]


def test_smoothing_ignores_points_above_cutoff(rect):
    cutoff = freq_to_x(100, rect)
    points = [(rect.min_x + i, float(i % 2) * 10) for i in range(int(rect.width) + 1)]
    smoothed = adaptive_smooth_points(points, rect, 8)
    assert len(smoothed) == len(points)
    for before, after in zip(points, smoothed):
        assert after[0] == before[0]
        if before[0] > cutoff:
            assert after == before


def test_smoothing_reduces_spikes_below_cutoff(rect):
    points = [(rect.min_x + i, 0.0) for i in range(40)]
    points[10] = (points[10][0], 100.0)
    smoothed = adaptive_smooth_points(points, rect, 8)
    assert 0.0 < smoothed[10][1] < 100.0
    assert smoothed[11][1] > 0.0


def test_smoothing_window_zero_is_identity(rect):
    points = [(rect.min_x + i, float(i * i)) for i in range(30)]
    assert adaptive_smooth_points(points, rect, 0) == points