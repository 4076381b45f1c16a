"""CLI command to decode a payload written by ``nnuepack compress``.

Examples
--------
  nnuepack decompress results/weights.bin
  nnuepack decompress net.bin --meta net.json --output net_quantized.txt
"""

from __future__ import annotations

from pathlib import Path
import json

import click

from nnuepack.binarize import debinarize, dequantize
from nnuepack.coding import validate_probabilities
from nnuepack.utils import compute_sha256, write_weights


@click.command(name="decompress")
@click.argument("payload", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "meta",
    "--meta",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=False,
    help="Results JSON written by compress (default: PAYLOAD with .json suffix)",
)
@click.option(
    "output",
    "--output",
    type=click.Path(path_type=Path),
    required=False,
    help="Where to write the decoded weights (default: PAYLOAD with .txt suffix)",
)
def decompress(payload: Path, meta: Path | None, output: Path | None) -> None:
    """Decode PAYLOAD back into quantized weights, one per line."""

    try:
        meta_file = meta if meta is not None else payload.with_suffix(".json")
        if not meta_file.exists():
            raise click.ClickException(f"Missing results file: {meta_file}")
        results = json.loads(meta_file.read_text(encoding="utf-8"))

        try:
            count = int(results["count"])
            quantize = int(results["quantize"])
            cutoffs = [int(c) for c in results["cutoffs"]]
        except (KeyError, TypeError, ValueError):
            raise click.ClickException(
                f"Results file {meta_file} lacks a valid count/quantize/cutoffs entry"
            ) from None
        validate_probabilities(cutoffs)

        expected_hash = results.get("payload_sha256")
        if expected_hash and compute_sha256(payload) != expected_hash:
            raise click.ClickException(f"Payload hash mismatch for {payload}")

        levels = debinarize(payload.read_bytes(), cutoffs, count)
        output_file = output if output is not None else payload.with_suffix(".txt")
        write_weights(output_file, dequantize(levels, quantize))
        click.secho(f"OK: decoded {len(levels)} weights -> {output_file}", fg="green")
    except click.ClickException:
        raise
    except ValueError as e:
        raise click.ClickException(str(e)) from None
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
