"""Shared utilities for hashing, weight files and filesystem operations."""

from __future__ import annotations

from hashlib import sha256 as _sha256
import math
from pathlib import Path
from typing import Iterable


def compute_sha256(path: Path, chunk_size: int = 1024 * 1024) -> str:
    """Return the SHA256 hex digest for the file at ``path``.

    Parameters
    ----------
    path:
        File to hash.
    chunk_size:
        Bytes read per iteration (default: 1 MiB).
    """

    h = _sha256()
    with path.open("rb") as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


def ensure_dir(path: Path) -> None:
    """Create directory ``path`` and parents if they don't exist."""

    path.mkdir(parents=True, exist_ok=True)


def get_file_size(path: Path) -> int:
    """Return file size in bytes for ``path``."""

    return path.stat().st_size


def read_weights(path: Path) -> list[float]:
    """Read one number per line from ``path``, skipping blank lines.

    Raises
    ------
    ValueError
        If a non-blank line does not parse as a finite float.
    """

    values: list[float] = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                value = float(line)
            except ValueError:
                raise ValueError(f"{path}:{lineno}: not a number: {line!r}") from None
            if not math.isfinite(value):
                raise ValueError(f"{path}:{lineno}: not a finite number: {line!r}")
            values.append(value)
    return values


def write_weights(path: Path, values: Iterable[float]) -> None:
    """Write ``values`` to ``path``, one per line."""

    ensure_dir(path.parent)
    path.write_text("\n".join(repr(float(v)) for v in values) + "\n", encoding="utf-8")
