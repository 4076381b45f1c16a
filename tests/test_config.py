from pathlib import Path

from nnuepack.config import (
    BASE,
    Config,
    LOOKAHEAD_BYTES,
    MAX_PROBABILITY,
    MIN_PROBABILITY,
    RENORM_THRESHOLD,
    UNIFORM_PROBABILITY,
    get_config,
)


def test_config_singleton():
    """get_config should return the same singleton instance across calls."""

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2
    assert isinstance(c1, Config)


def test_decoder_constants():
    """Convenience constants should mirror the Config defaults."""

    assert BASE == Config.BASE == 256
    assert RENORM_THRESHOLD == Config.RENORM_THRESHOLD == 16384
    assert LOOKAHEAD_BYTES == 4


def test_probability_domain():
    assert (MIN_PROBABILITY, MAX_PROBABILITY) == (1, 255)
    assert UNIFORM_PROBABILITY == BASE // 2


def test_threshold_never_zero_at_minimum():
    """The smallest interval split can never be empty."""

    assert RENORM_THRESHOLD * MIN_PROBABILITY // BASE > 0


def test_default_paths_are_paths():
    assert isinstance(Config.RESULTS_DIR, Path)


def test_config_is_frozen():
    import dataclasses

    import pytest

    with pytest.raises(dataclasses.FrozenInstanceError):
        get_config().BASE = 10  # type: ignore[misc]
