"""
nnuepack: Oracle-search arithmetic coding for quantized network weights.

The codec's decoder is a small, fixed integer routine; the encoder is built
on top of it by bisecting over candidate byte sequences until the decoder
reproduces the requested bits.
"""

__all__ = [
    "Config",
    "get_config",
    "__version__",
    # Errors
    "CodecError",
    "InvalidProbability",
    "InvalidBit",
    "LengthMismatch",
    "SearchInvariantViolated",
    # Codec (lazy-imported via __getattr__)
    "CoderState",
    "BitDecoder",
    "OracleEncoder",
    "encode_bits",
    "decode_bits",
    "entropy",
    # Weight binarization (lazy-imported via __getattr__)
    "debinarize",
    "derive_cutoffs",
]

__version__ = "0.1.0"

from typing import Any

from nnuepack.config import Config, get_config
from nnuepack.errors import (
    CodecError,
    InvalidBit,
    InvalidProbability,
    LengthMismatch,
    SearchInvariantViolated,
)


def __getattr__(name: str) -> Any:  # lazy attribute access to keep numpy out of import time
    if name == "CoderState":
        from nnuepack.coding.state import CoderState as _CS

        return _CS
    if name == "BitDecoder":
        from nnuepack.coding.decoder import BitDecoder as _BD

        return _BD
    if name == "decode_bits":
        from nnuepack.coding.decoder import decode_bits as _dec

        return _dec
    if name == "OracleEncoder":
        from nnuepack.coding.encoder import OracleEncoder as _OE

        return _OE
    if name == "encode_bits":
        from nnuepack.coding.encoder import encode_bits as _enc

        return _enc
    if name == "entropy":
        from nnuepack.coding.entropy import entropy as _ent

        return _ent
    # ``binarize`` itself is not exported here: the name belongs to the submodule
    if name == "debinarize":
        from nnuepack.binarize import debinarize as _db

        return _db
    if name == "derive_cutoffs":
        from nnuepack.binarize import derive_cutoffs as _dc

        return _dc
    raise AttributeError(f"module 'nnuepack' has no attribute {name!r}")
