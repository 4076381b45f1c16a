"""Binary arithmetic decoder.

The decoder is the single source of truth for the codec: the encoder in
:mod:`nnuepack.coding.encoder` never models the arithmetic itself and only
asks this module what a candidate byte sequence decodes to.

Each step works on an interval of width ``high``. Before comparing, the
interval is renormalized by whole bytes until ``high >= 16384``; bytes past
the end of the input read as 0. The interval is then split at
``high * probability // 256`` and the side containing ``current`` gives the
bit.

Example
-------
>>> from nnuepack.coding import BitDecoder
>>> dec = BitDecoder(b"\\x00\\x00")
>>> dec.decode(128)
0
"""

from __future__ import annotations

from numbers import Integral
from typing import Sequence

from nnuepack.coding.state import CoderState
from nnuepack.config import BASE, MAX_PROBABILITY, MIN_PROBABILITY, RENORM_THRESHOLD
from nnuepack.errors import InvalidBit, InvalidProbability, LengthMismatch


def decode_bit(probability: int, data: Sequence[int], state: CoderState) -> tuple[int, CoderState]:
    """Decode one bit with ``P(0) ~= probability / 256``.

    Returns the bit and the state after the step; ``state`` itself is left
    untouched. ``probability`` must be in ``[1, 255]``; this is not checked.
    """

    high = state.high
    current = state.current
    index = state.index
    size = len(data)
    while high < RENORM_THRESHOLD:
        high *= BASE
        current *= BASE
        if index < size:
            current += data[index]
        index += 1

    threshold = high * probability // BASE
    if current < threshold:
        return 0, CoderState(threshold, current, index)
    return 1, CoderState(high - threshold, current - threshold, index)


class BitDecoder:
    """Stateful reader that replays bits from an encoded byte sequence.

    Parameters
    ----------
    data:
        Encoded bytes. The stream carries no length, so the caller must know
        how many bits to read and with which probabilities.
    """

    def __init__(self, data: Sequence[int]) -> None:
        self.data = data
        self.state = CoderState.initial()

    def decode(self, probability: int) -> int:
        bit, self.state = decode_bit(probability, self.data, self.state)
        return bit

    def decode_many(self, probabilities: Sequence[int]) -> list[int]:
        return [self.decode(p) for p in probabilities]

    @property
    def bytes_consumed(self) -> int:
        return self.state.index


def validate_probabilities(probabilities: Sequence[int]) -> None:
    """Raise :class:`InvalidProbability` unless every entry is in ``[1, 255]``."""

    for pos, p in enumerate(probabilities):
        if isinstance(p, bool) or not isinstance(p, Integral) or not (MIN_PROBABILITY <= p <= MAX_PROBABILITY):
            raise InvalidProbability(pos, p)


def validate_pairing(bits: Sequence[int], probabilities: Sequence[int]) -> None:
    """Check the encoder input contract: equal lengths, 0/1 bits, valid probabilities."""

    if len(bits) != len(probabilities):
        raise LengthMismatch(len(bits), len(probabilities))
    for pos, b in enumerate(bits):
        if b != 0 and b != 1:
            raise InvalidBit(pos, b)
    validate_probabilities(probabilities)


def decode_bits(data: Sequence[int], probabilities: Sequence[int]) -> list[int]:
    """Decode ``len(probabilities)`` bits from ``data`` starting at the initial state."""

    validate_probabilities(probabilities)
    return BitDecoder(data).decode_many(probabilities)


__all__ = [
    "decode_bit",
    "decode_bits",
    "BitDecoder",
    "validate_probabilities",
    "validate_pairing",
]
