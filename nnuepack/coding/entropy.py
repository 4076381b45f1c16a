"""Theoretical codelength for a bit/probability sequence.

Used for diagnostics only: comparing the ideal cost
``sum(-log2 P(bit))`` with what the encoder actually produced.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from nnuepack.coding.decoder import validate_pairing
from nnuepack.config import BASE


def entropy(bits: Sequence[int], probabilities: Sequence[int]) -> float:
    """Return the minimum encoded length of ``bits`` in bits.

    Each probability ``p`` is read as ``P(bit=0) = p / 256``.
    """

    validate_pairing(bits, probabilities)
    if len(bits) == 0:
        return 0.0
    b = np.asarray(bits, dtype=bool)
    p = np.asarray(probabilities, dtype=np.float64) / BASE
    log_p = np.where(b, np.log1p(-p), np.log(p))
    return float(log_p.sum() / np.log(0.5))


def verify_codelength(
    bits: Sequence[int], probabilities: Sequence[int], encoded: bytes
) -> dict[str, float | bool]:
    """Compare the encoded size of ``bits`` against its entropy.

    Returns a dict with:
    - entropy_bits
    - encoded_bits
    - overhead_bits
    - efficiency (entropy / encoded, 1.0 for empty input)
    - within_bound (encoded length does not beat the entropy)
    """

    h_bits = entropy(bits, probabilities)
    encoded_bits = float(len(encoded) * 8)
    efficiency = h_bits / encoded_bits if encoded_bits > 0 else 1.0
    return {
        "entropy_bits": h_bits,
        "encoded_bits": encoded_bits,
        "overhead_bits": encoded_bits - h_bits,
        "efficiency": efficiency,
        "within_bound": encoded_bits >= h_bits,
    }


__all__ = ["entropy", "verify_codelength"]
