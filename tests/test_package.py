from pathlib import Path
import os
import subprocess
import sys

import pytest

import nnuepack


REPO_ROOT = Path(__file__).resolve().parents[1]


def _run_fresh(code: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")]))
    return subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, env=env, timeout=120)


@pytest.mark.parametrize("name", nnuepack.__all__)
def test_exported_name_resolves_in_fresh_interpreter(name: str):
    result = _run_fresh(f"import nnuepack; print(type(getattr(nnuepack, {name!r})).__name__)")
    assert result.returncode == 0, result.stderr


def test_star_import_in_fresh_interpreter():
    result = _run_fresh("from nnuepack import *; print(debinarize.__name__, derive_cutoffs.__name__)")
    assert result.returncode == 0, result.stderr
    assert result.stdout.split() == ["debinarize", "derive_cutoffs"]


def test_lazy_exports_are_the_submodule_objects():
    from nnuepack.binarize import debinarize, derive_cutoffs
    from nnuepack.coding import OracleEncoder, entropy

    assert nnuepack.debinarize is debinarize
    assert nnuepack.derive_cutoffs is derive_cutoffs
    assert nnuepack.OracleEncoder is OracleEncoder
    assert nnuepack.entropy is entropy


def test_unknown_attribute():
    with pytest.raises(AttributeError):
        nnuepack.no_such_name  # noqa: B018
