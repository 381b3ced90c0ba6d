"""Numeric helpers shared by the reverb building blocks."""

from __future__ import annotations

import math
import sys

DEFAULT_SAMPLE_RATE = 48000
"""Sample rate, in Hz, that processors assume until told otherwise."""

LN_2_2 = math.log(2.0) / 2.0
"""Half the natural logarithm of two, used by the bandwidth formulas."""

_SMALLEST_NORMAL = sys.float_info.min


def db_to_ratio(db: float) -> float:
    """Convert a level in decibels to a linear amplitude ratio."""
    return math.pow(10.0, db / 20.0)


def ratio_to_db(real: float) -> float:
    """Convert a linear amplitude ratio to decibels.

    A ratio of zero maps to negative infinity; a negative ratio has no
    level in decibels and raises ValueError.
    """
    if real < 0:
        raise ValueError(f"ratio must not be negative: {real!r}")
    if real == 0:
        return -math.inf
    return 20.0 * math.log10(real)


def ms_to_samples(msec: float, fs: float) -> int:
    """Return the number of whole samples in ``msec`` milliseconds at ``fs`` Hz."""
    return int(msec * fs * 0.001)


def next_pow2(i: int) -> int:
    """Return the smallest power of two that is at least ``i`` and at least 2."""
    p = 2
    while p < i:
        p *= 2
    return p


def is_prime(number: int) -> bool:
    """Trial-division primality test.

    Follows the delay-length convention of the reverbs: 2 and every odd
    number without an odd divisor up to its square root count as prime,
    which includes 1. Zero, even numbers and negative numbers do not.
    """
    if number == 2:
        return True
    if number < 1 or number % 2 == 0:
        return False
    limit = math.isqrt(number) + 1
    return all(number % divisor for divisor in range(3, limit, 2))


def undenormal(value: float) -> float:
    """Return ``value`` unless it is subnormal, infinite or NaN, in which case 0.0."""
    if value == 0.0:
        return value
    if math.isfinite(value) and abs(value) >= _SMALLEST_NORMAL:
        return value
    return 0.0