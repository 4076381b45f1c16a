"""Centralized configuration for the codec and the weight pipeline.

Defines immutable defaults for the decoder arithmetic, the encoder search,
weight quantization, and output locations so that compression is fully
deterministic across environments.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Decoder arithmetic
    BASE: int = 256
    RENORM_THRESHOLD: int = 16384

    # Probability domain, P(bit=0) ~= probability / BASE
    MIN_PROBABILITY: int = 1
    MAX_PROBABILITY: int = 255
    UNIFORM_PROBABILITY: int = 128

    # Encoder search
    LOOKAHEAD_BYTES: int = 4

    # Weight quantization
    DEFAULT_QUANTIZE: int = 64
    MAX_MAGNITUDE_CLASSES: int = 15

    # Output paths
    RESULTS_DIR: Path = Path("results")


# Convenience re-exports
BASE: int = Config.BASE
RENORM_THRESHOLD: int = Config.RENORM_THRESHOLD
MIN_PROBABILITY: int = Config.MIN_PROBABILITY
MAX_PROBABILITY: int = Config.MAX_PROBABILITY
UNIFORM_PROBABILITY: int = Config.UNIFORM_PROBABILITY
LOOKAHEAD_BYTES: int = Config.LOOKAHEAD_BYTES


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON
