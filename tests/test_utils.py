from hashlib import sha256
from pathlib import Path

import pytest

from nnuepack.utils import compute_sha256, ensure_dir, get_file_size, read_weights, write_weights


def test_compute_sha256(tmp_path: Path):
    p = tmp_path / "blob.bin"
    p.write_bytes(b"abc" * 1000)
    assert compute_sha256(p, chunk_size=7) == sha256(b"abc" * 1000).hexdigest()
    assert get_file_size(p) == 3000


def test_ensure_dir_nested(tmp_path: Path):
    d = tmp_path / "a" / "b" / "c"
    ensure_dir(d)
    ensure_dir(d)
    assert d.is_dir()


def test_read_weights_skips_blank_lines(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("0.5\n\n-0.25\n  1e-3  \n", encoding="utf-8")
    assert read_weights(p) == [0.5, -0.25, 0.001]


def test_read_weights_reports_line(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("0.5\nnope\n", encoding="utf-8")
    with pytest.raises(ValueError, match=":2:"):
        read_weights(p)


@pytest.mark.parametrize("row", ["nan", "inf", "-inf", "1e999"])
def test_read_weights_rejects_non_finite(tmp_path: Path, row: str):
    p = tmp_path / "w.txt"
    p.write_text(f"0.5\n\n{row}\n", encoding="utf-8")
    with pytest.raises(ValueError, match=r":3: not a finite number"):
        read_weights(p)


def test_write_then_read(tmp_path: Path):
    p = tmp_path / "out" / "w.txt"
    values = [0.0, 1 / 64, -3 / 64, 0.1]
    write_weights(p, values)
    assert read_weights(p) == values
