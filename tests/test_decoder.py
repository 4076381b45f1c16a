import pytest

from nnuepack.coding import BitDecoder, CoderState, decode_bit, decode_bits
from nnuepack.errors import InvalidProbability


def test_initial_state():
    s = CoderState.initial()
    assert (s.high, s.current, s.index) == (1, 0, 0)


def test_first_decode_renormalizes_two_bytes():
    bit, s = decode_bit(128, b"", CoderState.initial())
    assert bit == 0
    assert s == CoderState(32768, 0, 2)


def test_decode_one_above_threshold():
    # current = 0x8000 which sits exactly on the 128/256 split
    bit, s = decode_bit(128, b"\x80", CoderState.initial())
    assert bit == 1
    assert s == CoderState(32768, 0, 2)


def test_decode_does_not_mutate_input_state():
    start = CoderState(20000, 123, 5)
    decode_bit(77, b"\x01\x02\x03", start)
    assert start == CoderState(20000, 123, 5)


def test_bytes_past_end_read_as_zero():
    s = CoderState.initial()
    assert decode_bit(200, b"\x12", s) == decode_bit(200, b"\x12\x00\x00", s)


def test_no_renormalization_above_threshold():
    bit, s = decode_bit(128, b"\xff", CoderState(16384, 0, 0))
    assert bit == 0
    assert s.index == 0
    assert s.high == 8192


def test_probability_one_threshold_never_zero():
    # smallest legal high with the smallest legal probability still leaves room for a 0
    bit, s = decode_bit(1, b"", CoderState(16384, 0, 0))
    assert bit == 0
    assert s.high == 64
    bit, s = decode_bit(1, b"", CoderState(16384, 64, 0))
    assert bit == 1
    assert s.high == 16384 - 64


def test_snapshot_is_independent():
    s = CoderState(16384, 7, 3)
    snap = s.snapshot()
    s.high = 1
    s.index = 99
    assert snap == CoderState(16384, 7, 3)
    assert snap is not s


def test_restore_overwrites_in_place():
    s = CoderState(16384, 7, 3)
    snap = s.snapshot()
    s.current = 0
    s.index = 10
    s.restore(snap)
    assert s == snap
    assert s is not snap


def test_state_equality_is_fieldwise():
    assert CoderState(1, 2, 3) == CoderState(1, 2, 3)
    assert CoderState(1, 2, 3) != CoderState(1, 2, 4)


def test_bit_decoder_tracks_consumed_bytes():
    dec = BitDecoder(b"\x00\x00")
    assert dec.decode(128) == 0
    assert dec.bytes_consumed == 2


def test_decode_bits_matches_stepwise():
    data = bytes([17, 200, 3, 99, 250])
    probs = [128, 5, 250, 64, 1, 255, 128, 128]
    expected = []
    state = CoderState.initial()
    for p in probs:
        bit, state = decode_bit(p, data, state)
        expected.append(bit)
    assert decode_bits(data, probs) == expected


@pytest.mark.parametrize("bad", [0, 256, -1, 1.5])
def test_decode_bits_rejects_invalid_probability(bad):
    with pytest.raises(InvalidProbability):
        decode_bits(b"\x00", [128, bad])
