"""Oracle-search binary arithmetic coding.

The decoder defines the format; the encoder finds its output by bisecting
over byte sequences and asking the decoder what each candidate means.

Public API:
- CoderState
- decode_bit / decode_bits / BitDecoder
- bisect_bytes
- OracleEncoder / encode_bits
- entropy / verify_codelength
"""

from __future__ import annotations

from nnuepack.coding.state import CoderState
from nnuepack.coding.decoder import (
    BitDecoder,
    decode_bit,
    decode_bits,
    validate_pairing,
    validate_probabilities,
)
from nnuepack.coding.bisection import bisect_bytes, compare_bounds
from nnuepack.coding.encoder import OracleEncoder, SearchStats, encode_bits
from nnuepack.coding.entropy import entropy, verify_codelength

__all__ = [
    "CoderState",
    "BitDecoder",
    "decode_bit",
    "decode_bits",
    "validate_pairing",
    "validate_probabilities",
    "bisect_bytes",
    "compare_bounds",
    "OracleEncoder",
    "SearchStats",
    "encode_bits",
    "entropy",
    "verify_codelength",
]
