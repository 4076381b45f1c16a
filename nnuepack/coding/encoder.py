"""Oracle-search encoder.

Rather than mirroring the decoder's truncating arithmetic, the encoder looks
for a byte sequence that :func:`nnuepack.coding.decoder.decode_bit` maps to
the requested bits. It keeps

- a committed prefix of output bytes,
- a lower and an upper bound on the rest of the output (``low`` read with
  trailing 0s, ``high`` with trailing 255s), and
- the decoder state reached after replaying the prefix.

For the next unresolved bit both bounds are decoded. When they agree on the
bit and on the resulting state, every sequence between them behaves the same
way, so the bit is locked in and the consumed bytes move into the prefix.
Otherwise the bounds are bisected and the midpoint is decoded forward until
it either reproduces every remaining bit (and is returned) or disagrees with
one, which tells on which side of the midpoint the answer lies.

Because every candidate is judged by the decoder itself, encode and decode
agree by construction.

Example
-------
>>> from nnuepack.coding import encode_bits, decode_bits
>>> data = encode_bits([1, 0, 1], [128, 200, 30])
>>> decode_bits(data, [128, 200, 30])
[1, 0, 1]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
import logging

from nnuepack.coding.bisection import bisect_bytes
from nnuepack.coding.decoder import decode_bit, validate_pairing
from nnuepack.coding.state import CoderState
from nnuepack.config import BASE, LOOKAHEAD_BYTES
from nnuepack.errors import SearchInvariantViolated


_LOGGER = logging.getLogger(__name__)


@dataclass
class SearchStats:
    """Counters describing the last search run by an :class:`OracleEncoder`."""

    locked_bits: int = 0
    bisections: int = 0
    decode_calls: int = 0


class OracleEncoder:
    """Encoder that searches for the output using the decoder as an oracle.

    Parameters
    ----------
    lookahead:
        Number of bytes kept available past the decoder cursor on every
        candidate, so renormalization never reads past a bound's real
        digits. Must be at least 2 (one decode step consumes at most 2).
    """

    def __init__(self, lookahead: int = LOOKAHEAD_BYTES) -> None:
        if lookahead < 2:
            raise ValueError("lookahead must be >= 2")
        self.lookahead: int = lookahead
        self.stats: SearchStats = SearchStats()

    def encode(self, bits: Sequence[int], probabilities: Sequence[int]) -> bytes:
        """Return the byte sequence that decodes to ``bits`` under ``probabilities``.

        Raises
        ------
        LengthMismatch, InvalidBit, InvalidProbability
            If the inputs break the codec contract.
        SearchInvariantViolated
            If the lower bound ever decodes to a larger bit than the upper
            bound. Nothing built so far is returned.
        """

        validate_pairing(bits, probabilities)
        bits = [int(b) for b in bits]
        probabilities = [int(p) for p in probabilities]
        self.stats = SearchStats()
        n_bits = len(bits)
        if n_bits == 0:
            return b""

        trace = _LOGGER.isEnabledFor(logging.DEBUG)
        stats = self.stats
        prefix = bytearray()
        low = bytearray()
        high = bytearray()
        state = CoderState.initial()
        bp_idx = 0

        while True:
            self._pad(low, state.index, 0)
            self._pad(high, state.index, BASE - 1)
            p = probabilities[bp_idx]
            b_low, state_low = decode_bit(p, low, state)
            b_high, state_high = decode_bit(p, high, state)
            stats.decode_calls += 2

            if b_low == b_high and state_low == state_high:
                # Both bounds consumed identical bytes, so they share this prefix
                consumed = state_low.index
                prefix += low[:consumed]
                low = low[consumed:]
                high = high[consumed:]
                state.restore(state_low)
                state.index = 0
                stats.locked_bits += 1
                bp_idx += 1
                if trace:
                    _LOGGER.debug("Locked in bit %d (prefix %d bytes)", bp_idx - 1, len(prefix))
                if bp_idx >= n_bits:
                    self._log_done(n_bits, len(prefix))
                    return bytes(prefix)
                continue

            if b_low > b_high:
                raise SearchInvariantViolated(bp_idx)

            mid = bisect_bytes(low, high)
            stats.bisections += 1
            self._pad(mid, state.index, 0)
            b_mid, state_mid = decode_bit(p, mid, state)
            stats.decode_calls += 1

            # Follow the midpoint while it keeps reproducing the target bits
            p_idx = bp_idx
            while b_mid == bits[p_idx]:
                p_idx += 1
                if p_idx >= n_bits:
                    out = bytes(prefix + mid[: state_mid.index])
                    self._log_done(n_bits, len(out))
                    return out
                self._pad(mid, state_mid.index, 0)
                b_mid, state_mid = decode_bit(probabilities[p_idx], mid, state_mid)
                stats.decode_calls += 1

            if trace:
                _LOGGER.debug(
                    "Bit %d: midpoint %s diverges at bit %d", bp_idx, mid.hex(), p_idx
                )
            if bits[p_idx] < b_mid:
                high = mid
            else:
                low = mid

    def _pad(self, seq: bytearray, index: int, fill: int) -> None:
        missing = index + self.lookahead - len(seq)
        if missing > 0:
            seq.extend(bytes([fill]) * missing)

    def _log_done(self, n_bits: int, n_bytes: int) -> None:
        _LOGGER.debug(
            "Encoded %d bits into %d bytes (%d locked, %d bisections, %d decode calls)",
            n_bits,
            n_bytes,
            self.stats.locked_bits,
            self.stats.bisections,
            self.stats.decode_calls,
        )


def encode_bits(bits: Sequence[int], probabilities: Sequence[int]) -> bytes:
    """Encode ``bits`` with a default :class:`OracleEncoder`."""

    return OracleEncoder().encode(bits, probabilities)


__all__ = ["OracleEncoder", "SearchStats", "encode_bits"]
