"""Numeric helpers over integers and floats."""

from __future__ import annotations

import math
from typing import Union

from .values import I64_MAX, I64_MIN, type_name

Number = Union[int, float]

PI = math.pi
E = math.e
INF = math.inf


def _is_int(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _to_float(x: object) -> float:
    if isinstance(x, float):
        return x
    if _is_int(x):
        try:
            return float(x)
        except OverflowError as exc:
            raise OverflowError("math: Int too large for float") from exc
    raise TypeError(f"math: expected number, got {type_name(x)}")


def _integral(x: Number, op) -> int:
    f = _to_float(x)
    if math.isnan(f):
        return 0
    if math.isinf(f):
        return I64_MAX if f > 0 else I64_MIN
    return max(I64_MIN, min(I64_MAX, op(f)))


def _half_away(f: float) -> int:
    whole = math.trunc(f)
    if abs(f - whole) >= 0.5:
        whole += 1 if f > 0 else -1
    return whole


def _is_odd_integer(f: float) -> bool:
    return math.isfinite(f) and f.is_integer() and int(f) % 2 == 1


def _float_pow(base: float, exp: float) -> float:
    try:
        return math.pow(base, exp)
    except OverflowError:
        return -math.inf if base < 0 and _is_odd_integer(exp) else math.inf
    except ValueError:
        if base == 0:
            return math.copysign(math.inf, base) if _is_odd_integer(exp) else math.inf
        return math.nan


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def absolute(x: Number) -> Number:
    """Absolute value, keeping the numeric kind."""
    if _is_int(x) or isinstance(x, float):
        return abs(x)
    raise TypeError(f"math.abs expects number, got {type_name(x)}")


def ceil(x: Number) -> int:
    """Smallest integer not below x, saturated to the 64-bit range."""
    return _integral(x, math.ceil)


def floor(x: Number) -> int:
    """Largest integer not above x, saturated to the 64-bit range."""
    return _integral(x, math.floor)


def round_half_away(x: Number) -> int:
    """Nearest integer, halves rounded away from zero."""
    return _integral(x, _half_away)


def power(base: Number, exp: Number) -> Number:
    """Exact integer power for two ints, floating power otherwise."""
    if _is_int(base) and _is_int(exp):
        if not 0 <= exp <= 2**32 - 1:
            raise ValueError("math.pow: exponent too large or negative")
        return base**exp
    return _float_pow(_to_float(base), _to_float(exp))


def sqrt(x: Number) -> float:
    """Square root; NaN for negative input."""
    f = _to_float(x)
    if f < 0:
        return math.nan
    return math.sqrt(f)


def minimum(a: Number, b: Number) -> Number:
    """The smaller of two numbers; mixed kinds compare as floats."""
    if _is_int(a) and _is_int(b):
        return min(a, b)
    return _fmin(_to_float(a), _to_float(b))


def maximum(a: Number, b: Number) -> Number:
    """The larger of two numbers; mixed kinds compare as floats."""
    if _is_int(a) and _is_int(b):
        return max(a, b)
    return _fmax(_to_float(a), _to_float(b))