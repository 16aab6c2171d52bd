import math

import pytest

from beacnutil.dynamics import (
    compressor_amount_to_ratio,
    compressor_ratio_to_amount,
    expander_amount_to_ratio,
    expander_ratio_to_amount,
    percent_to_sensitivity,
    sensitivity_to_percent,
)


def test_compressor_amount_ends_map_to_ratio_ends():
    assert compressor_amount_to_ratio(0) == pytest.approx(1.0)
    assert compressor_amount_to_ratio(10) == pytest.approx(10.0)


def test_compressor_ratio_ends_map_to_amount_ends():
    assert compressor_ratio_to_amount(1.0) == 0
    assert compressor_ratio_to_amount(10.0) == 10


@pytest.mark.parametrize("amount", range(0, 11))
def test_compressor_round_trip(amount):
    assert compressor_ratio_to_amount(compressor_amount_to_ratio(amount)) == amount


def test_compressor_ratio_is_rounded_to_two_places():
    for amount in range(0, 11):
        ratio = compressor_amount_to_ratio(amount)
        assert round(ratio, 2) == pytest.approx(ratio)


@pytest.mark.parametrize("amount", [-1, 11])
def test_compressor_amount_out_of_range(amount):
    with pytest.raises(ValueError):
        compressor_amount_to_ratio(amount)


def test_expander_amount_pins():
    assert expander_amount_to_ratio(0) == pytest.approx(1.0)
    assert expander_amount_to_ratio(50) == pytest.approx(3.0)
    assert expander_amount_to_ratio(51) == pytest.approx(3.1)
    assert expander_amount_to_ratio(100) == pytest.approx(10.0)


def test_expander_ratio_ends():
    assert expander_ratio_to_amount(1.0) == 0
    assert expander_ratio_to_amount(3.0) == 50
    assert expander_ratio_to_amount(10.0) == 100


@pytest.mark.parametrize("amount", range(0, 51))
def test_expander_round_trip_lower_half(amount):
    assert expander_ratio_to_amount(expander_amount_to_ratio(amount)) == amount


def test_expander_ratio_is_monotonic():
    ratios = [expander_amount_to_ratio(a) for a in range(0, 101)]
    assert ratios == sorted(ratios)


def test_expander_amount_stays_in_range():
    for amount in range(0, 101):
        back = expander_ratio_to_amount(expander_amount_to_ratio(amount))
        assert 0 <= back <= 100


@pytest.mark.parametrize("amount", [-5, 101])
def test_expander_amount_out_of_range(amount):
    with pytest.raises(ValueError):
        expander_amount_to_ratio(amount)


def test_sensitivity_ends():
    assert sensitivity_to_percent(-120.0) == 0
    assert sensitivity_to_percent(-60.0) == 100
    assert percent_to_sensitivity(0) == pytest.approx(-120.0)
    assert percent_to_sensitivity(100) == pytest.approx(-60.0)


@pytest.mark.parametrize("percent", range(0, 101))
def test_sensitivity_round_trip_within_truncation(percent):
    back = sensitivity_to_percent(percent_to_sensitivity(percent))
    assert back in (percent - 1, percent)


def test_sensitivity_below_range_saturates():
    assert sensitivity_to_percent(-200.0) == 0


@pytest.mark.parametrize("percent", [-1, 150])
def test_percent_out_of_range(percent):
    with pytest.raises(ValueError):
        percent_to_sensitivity(percent)