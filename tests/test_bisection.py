from fractions import Fraction
import random

import pytest

from nnuepack.coding import bisect_bytes, compare_bounds


def _value(seq) -> Fraction:
    """Numeral of ``seq`` with implicit trailing zeros."""

    v = Fraction(0)
    scale = Fraction(1)
    for d in seq:
        scale /= 256
        v += d * scale
    return v


def _upper_value(seq) -> Fraction:
    """Numeral of ``seq`` with implicit trailing 255s."""

    return _value(seq) + Fraction(1, 256 ** len(seq))


def _first_difference(lower, upper) -> tuple[int, int]:
    idx = 0
    while True:
        c1 = lower[idx] if idx < len(lower) else 0
        c2 = upper[idx] if idx < len(upper) else 255
        if c1 != c2:
            return c1, c2
        idx += 1


@pytest.mark.parametrize(
    "lower,upper,expected",
    [
        (b"", b"", [128]),
        (b"\x00", b"\x80", [64]),
        (b"\x0a", b"\x0d", [12]),
        (b"\x01\x02", b"\x01\x02", [1, 2, 128]),
        (b"\x05", b"\x06", [5, 255]),
        (b"\x05\xff", b"\x06", [6, 0]),
        (b"\x05", b"\x06\x00\x00", [5, 255]),
    ],
)
def test_bisect_known_cases(lower, upper, expected):
    assert list(bisect_bytes(lower, upper)) == expected


def test_bisect_does_not_modify_bounds():
    lower = bytearray(b"\x03")
    upper = bytearray(b"\x09")
    bisect_bytes(lower, upper)
    assert lower == bytearray(b"\x03")
    assert upper == bytearray(b"\x09")


def test_compare_bounds_orders_padded_sequences():
    assert compare_bounds(b"\x05", b"\x05") == -1
    assert compare_bounds(b"\x06", b"\x05\xff") == 1
    assert compare_bounds(b"", b"") == -1


@pytest.mark.parametrize("seed", range(5))
def test_bisect_stays_within_bounds(seed):
    rng = random.Random(seed)
    for _ in range(200):
        a = bytes(rng.choice([0, 1, 127, 128, 254, 255, rng.randrange(256)]) for _ in range(rng.randrange(5)))
        b = bytes(rng.choice([0, 1, 127, 128, 254, 255, rng.randrange(256)]) for _ in range(rng.randrange(5)))
        lower, upper = (a, b) if compare_bounds(a, b) < 0 else (b, a)
        mid = bytes(bisect_bytes(lower, upper))

        assert _value(lower) <= _value(mid) <= _upper_value(upper)

        c1, c2 = _first_difference(lower, upper)
        if c2 - c1 > 1:
            assert mid != lower and mid != upper
            assert _value(lower) < _value(mid) < _upper_value(upper)
