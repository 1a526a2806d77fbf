import math

import pytest

from lxstd.numeric import (
    INF,
    absolute,
    ceil,
    floor,
    maximum,
    minimum,
    power,
    round_half_away,
    sqrt,
)

SAMPLES = [-3.7, -1.2, -0.5, 0.0, 0.3, 1.2, 2.999, 7, -7]


def test_absolute_kinds():
    assert absolute(-5) == 5
    assert isinstance(absolute(-5), int)
    assert absolute(-2.5) == 2.5


@pytest.mark.parametrize("bad", ["x", True, None])
def test_absolute_rejects_non_numbers(bad):
    with pytest.raises(TypeError):
        absolute(bad)


@pytest.mark.parametrize("x", SAMPLES)
def test_ceil_floor_bounds(x):
    c, f = ceil(x), floor(x)
    assert isinstance(c, int) and isinstance(f, int)
    assert c - 1 < x <= c
    assert f <= x < f + 1


@pytest.mark.parametrize("x", SAMPLES)
def test_round_close_and_symmetric(x):
    r = round_half_away(x)
    assert abs(r - x) <= 0.5
    assert round_half_away(-x) == -r


def test_round_half_away_from_zero():
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3


def test_round_just_below_half():
    assert round_half_away(0.49999999999999994) == floor(0.49999999999999994)


def test_saturation_on_infinity():
    assert ceil(math.inf) == 2**63 - 1
    assert floor(-math.inf) == -(2**63)


def test_nan_rounds_consistently():
    nan = float("nan")
    assert ceil(nan) == floor(nan) == round_half_away(nan)


def test_huge_int_cannot_become_float():
    with pytest.raises(OverflowError):
        ceil(10**400)


@pytest.mark.parametrize("base", [2, -3, 10**30])
def test_int_power_invariants(base):
    assert power(base, 1) == base
    assert power(base, 2) == power(base, 1) * base
    assert isinstance(power(base, 3), int)


def test_negative_exponent_rejected():
    with pytest.raises(ValueError, match="exponent"):
        power(2, -1)


def test_float_power_matches_sqrt():
    assert math.isclose(power(2.0, 0.5), sqrt(2.0))


def test_float_power_domain_edges():
    assert math.isnan(power(-8.0, 1 / 3))
    assert power(0.0, -1.0) == INF


@pytest.mark.parametrize("x", [0.0, 2.0, 16, 1e10])
def test_sqrt_squares_back(x):
    assert math.isclose(sqrt(x) ** 2, x)


def test_sqrt_negative_is_nan():
    result = sqrt(-1.0)
    assert str(result) == "nan"


def test_min_max_ints():
    assert minimum(3, 7) == 3
    assert maximum(3, 7) == 7
    assert maximum(2**70, 1) == 2**70


def test_min_mixed_returns_float():
    result = minimum(3, 7.5)
    assert result == 3.0
    assert isinstance(result, float)


def test_min_max_ignore_nan():
    assert minimum(math.nan, 1.0) == 1.0
    assert maximum(2.0, math.nan) == 2.0


def test_min_rejects_strings():
    with pytest.raises(TypeError):
        minimum("a", 1)