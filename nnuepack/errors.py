"""Exception types raised by the codec.

Contract violations (bad probabilities, bits, or mismatched sequence lengths)
derive from ``ValueError``; a broken search invariant is also a
``RuntimeError`` since it means the encoder reached an unreachable state.
"""

from __future__ import annotations


class CodecError(ValueError):
    """Base class for all codec errors."""


class InvalidProbability(CodecError):
    """A probability outside ``[1, 255]`` was supplied."""

    def __init__(self, position: int, value: object) -> None:
        super().__init__(f"Probability at position {position} must be in [1, 255], got {value!r}")
        self.position = position
        self.value = value


class InvalidBit(CodecError):
    """A bit other than 0 or 1 was supplied."""

    def __init__(self, position: int, value: object) -> None:
        super().__init__(f"Bit at position {position} must be 0 or 1, got {value!r}")
        self.position = position
        self.value = value


class LengthMismatch(CodecError):
    """Bit and probability sequences differ in length."""

    def __init__(self, n_bits: int, n_probabilities: int) -> None:
        super().__init__(
            f"Bit sequence has {n_bits} entries but probability sequence has {n_probabilities}"
        )
        self.n_bits = n_bits
        self.n_probabilities = n_probabilities


class SearchInvariantViolated(CodecError, RuntimeError):
    """The encoder's lower bound decoded to a larger bit than its upper bound."""

    def __init__(self, bit_index: int) -> None:
        super().__init__(f"Encoder search reached an invalid state at bit {bit_index}")
        self.bit_index = bit_index


__all__ = [
    "CodecError",
    "InvalidProbability",
    "InvalidBit",
    "LengthMismatch",
    "SearchInvariantViolated",
]
