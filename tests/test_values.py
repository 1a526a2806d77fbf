import math

import pytest

from lxstd.values import EncodeError, Err, Tagged, from_json, to_json, type_name


def test_round_trip_nested():
    data = {"name": "lx", "items": [1, 2.5, True, None], "nested": {"k": "v"}}
    assert to_json(from_json(data)) == data


def test_err_becomes_error_object():
    assert to_json(Err("boom")) == {"error": "boom"}


def test_tagged_encoding():
    assert to_json(Tagged("Point", [1, 2])) == {"tag": "Point", "values": [1, 2]}


def test_tagged_values_stored_as_tuple():
    assert Tagged("T", [1]).values == (1,)


def test_tuple_becomes_list():
    assert to_json(("a", 1)) == ["a", 1]


def test_non_string_keys_are_stringified():
    assert to_json({1: "x", 2.5: "y"}) == {"1": "x", "2.5": "y"}


def test_int_bounds():
    assert to_json(2**63 - 1) == 2**63 - 1
    assert to_json(-(2**63)) == -(2**63)
    with pytest.raises(EncodeError, match="too large"):
        to_json(2**63)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_float_rejected(bad):
    with pytest.raises(EncodeError, match="NaN/Infinity"):
        to_json([bad])


def test_unsupported_value_rejected():
    with pytest.raises(EncodeError, match="cannot encode"):
        to_json(object())


def test_huge_json_int_becomes_float():
    result = from_json(2**64)
    assert isinstance(result, float)
    assert result == float(2**64)


def test_i64_min_stays_int():
    result = from_json(-(2**63))
    assert isinstance(result, int)
    assert result == -(2**63)


def test_from_json_rejects_non_json():
    with pytest.raises(TypeError):
        from_json({1, 2})


@pytest.mark.parametrize(
    "value, name",
    [(3, "Int"), ("s", "Str"), ({"a": 1}, "Record"), ([1], "List")],
)
def test_type_name(value, name):
    assert type_name(value) == name