"""Bisection over byte sequences read as base-256 fractions.

A lower bound is read with infinite trailing 0 bytes and an upper bound with
infinite trailing 255 bytes, so ``[lower, upper]`` denotes every numeral
that starts between them. Neither bound is ever physically padded here.
"""

from __future__ import annotations

from typing import Sequence

from nnuepack.config import BASE

_LOW_FILL = 0
_HIGH_FILL = BASE - 1


def _digit(seq: Sequence[int], idx: int, fill: int) -> int:
    return seq[idx] if idx < len(seq) else fill


def compare_bounds(lower: Sequence[int], upper: Sequence[int]) -> int:
    """Compare ``lower`` (0-filled) with ``upper`` (255-filled).

    Returns -1, 0 or 1. Equality is only possible when both tails agree,
    which never happens for finite sequences, so 0 is never returned.
    """

    for idx in range(max(len(lower), len(upper)) + 1):
        c1 = _digit(lower, idx, _LOW_FILL)
        c2 = _digit(upper, idx, _HIGH_FILL)
        if c1 != c2:
            return -1 if c1 < c2 else 1
    return 0


def bisect_bytes(lower: Sequence[int], upper: Sequence[int]) -> bytearray:
    """Return a byte sequence between ``lower`` and ``upper``.

    Digits are copied while the bounds agree. At the first differing digit
    the midpoint digit is used when there is room for one; when the digits
    are consecutive the tightest sequence next to the shorter bound is
    produced instead: its digit followed by 255s (for ``lower``) or 0s (for
    ``upper``), extending one digit past the shorter sequence.
    """

    out = bytearray()
    idx = 0
    while True:
        c1 = _digit(lower, idx, _LOW_FILL)
        c2 = _digit(upper, idx, _HIGH_FILL)
        idx += 1
        if c1 == c2:
            out.append(c1)
            continue

        if c2 - c1 > 1:
            # round half up, matching the decoder's integer domain
            out.append((c1 + c2 + 1) // 2)
            return out

        if len(lower) <= len(upper):
            out.append(c1)
            out.append(_HIGH_FILL)
            while len(out) <= len(lower):
                out.append(_HIGH_FILL)
        else:
            out.append(c2)
            out.append(_LOW_FILL)
            while len(out) <= len(upper):
                out.append(_LOW_FILL)
        return out


__all__ = ["bisect_bytes", "compare_bounds"]
