"""Turn quantized weights into the bit/probability pairs the codec consumes.

Each weight is quantized to an integer level and described by its magnitude
class, the bit length of ``|level|``:

- class ``k`` is written in unary: a ``1`` for every class passed and a
  ``0`` to stop, each coded with that class's cutoff probability;
- a non-zero level then adds a sign bit and the ``k - 1`` mantissa bits
  below its leading one (least significant first), each at probability 128.

Cutoffs come from the class histogram: cutoff ``i`` is the probability that a
weight stops at class ``i`` given it reached it.

Example
-------
>>> from nnuepack.binarize import binarize, derive_cutoffs, class_histogram
>>> levels = [0, 0, 1, -3, 0, 2]
>>> cutoffs = derive_cutoffs(class_histogram(levels))
>>> bits, probs = binarize(levels, cutoffs)
>>> len(bits) == len(probs)
True
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from nnuepack.coding.decoder import BitDecoder
from nnuepack.config import BASE, Config, MAX_PROBABILITY, MIN_PROBABILITY, UNIFORM_PROBABILITY


def quantize_weights(values: Sequence[float], quantize: int = Config.DEFAULT_QUANTIZE) -> list[int]:
    """Return ``round(x * quantize)`` for each value, rounding halves up."""

    if quantize <= 0:
        raise ValueError("quantize must be > 0")
    arr = np.asarray(values, dtype=np.float64)
    return [int(v) for v in np.floor(arr * quantize + 0.5)]


def dequantize(levels: Sequence[int], quantize: int = Config.DEFAULT_QUANTIZE) -> list[float]:
    """Map integer levels back to weights (``level / quantize``)."""
    if quantize <= 0:
        raise ValueError("quantize must be > 0")
    return [level / quantize for level in levels]


def magnitude_class(level: int) -> int:
    """Return the bit length of ``|level|``; 0 only for level 0."""
    return abs(int(level)).bit_length()


def class_histogram(levels: Sequence[int], n_classes: int = Config.MAX_MAGNITUDE_CLASSES) -> list[int]:
    """Count how many levels fall into each magnitude class.

    Raises
    ------
    ValueError
        If a level needs more than ``n_classes`` classes.
    """

    counts = [0] * n_classes
    for level in levels:
        k = magnitude_class(level)
        if k >= n_classes:
            raise ValueError(
                f"Level {level} has magnitude class {k}; at most {n_classes - 1} supported"
            )
        counts[k] += 1
    return counts


def derive_cutoffs(counts: Sequence[int]) -> list[int]:
    """Return the stop probability (in 1/256 units) for each magnitude class.

    ``cutoff[i] = floor(256 * counts[i] / remaining)``, where ``remaining``
    is the number of weights with class ``>= i``, clamped to ``[1, 255]``.
    Classes that no weight reaches get 255.
    """

    remaining = int(sum(counts))
    cutoffs: list[int] = []
    for c in counts:
        c = int(c)
        if remaining <= 0:
            cutoffs.append(MAX_PROBABILITY)
            continue
        cutoffs.append(min(MAX_PROBABILITY, max(MIN_PROBABILITY, c * BASE // remaining)))
        remaining -= c
    return cutoffs


def expected_bits_per_weight(counts: Sequence[int]) -> float:
    """Ideal bits/weight: class entropy plus ``k`` sign/mantissa bits for class ``k``."""

    arr = np.asarray(counts, dtype=np.float64)
    total = arr.sum()
    if total <= 0:
        return 0.0
    freq = arr / total
    classes = np.arange(len(arr), dtype=np.float64)
    nz = freq > 0
    return float(np.sum(freq[nz] * (classes[nz] - np.log2(freq[nz]))))


def binarize(levels: Sequence[int], cutoffs: Sequence[int]) -> tuple[list[int], list[int]]:
    """Return the parallel bit and probability sequences for ``levels``."""

    bits: list[int] = []
    probs: list[int] = []
    for level in levels:
        level = int(level)
        k = magnitude_class(level)
        if k >= len(cutoffs):
            raise ValueError(f"No cutoff for magnitude class {k} (level {level})")
        for i in range(k + 1):
            bits.append(1 if i != k else 0)
            probs.append(int(cutoffs[i]))
        if k == 0:
            continue

        bits.append(1 if level < 0 else 0)
        probs.append(UNIFORM_PROBABILITY)
        mag = abs(level)
        for _ in range(k - 1):
            bits.append(mag & 1)
            probs.append(UNIFORM_PROBABILITY)
            mag >>= 1
    return bits, probs


def debinarize(data: bytes, cutoffs: Sequence[int], count: int) -> list[int]:
    """Decode ``count`` levels from ``data`` using ``cutoffs``."""

    decoder = BitDecoder(data)
    levels: list[int] = []
    while len(levels) < count:
        k = 0
        while k < len(cutoffs) and decoder.decode(int(cutoffs[k])):
            k += 1
        if k >= len(cutoffs):
            raise ValueError("Magnitude class exceeds the cutoff table; stream is corrupt")
        if k == 0:
            levels.append(0)
            continue

        negative = decoder.decode(UNIFORM_PROBABILITY)
        mag = 0
        for i in range(k - 1):
            mag |= decoder.decode(UNIFORM_PROBABILITY) << i
        mag |= 1 << (k - 1)
        levels.append(-mag if negative else mag)
    return levels


__all__ = [
    "quantize_weights",
    "dequantize",
    "magnitude_class",
    "class_histogram",
    "derive_cutoffs",
    "expected_bits_per_weight",
    "binarize",
    "debinarize",
]
