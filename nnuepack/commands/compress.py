"""CLI command to quantize and compress a weight file.

Reads one weight per line, quantizes it, derives magnitude-class cutoffs
from the histogram, encodes the resulting bits with the oracle-search
encoder and checks that decoding gives back the same levels. Writes the raw
encoded bytes plus a JSON results file holding everything needed to decode.

Examples
--------
  nnuepack compress weights.txt
  nnuepack compress weights.txt --quantize 128 --output out/net.bin
  nnuepack -v compress weights.txt --force
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
import json
import logging

import click

from nnuepack.binarize import (
    binarize,
    class_histogram,
    debinarize,
    derive_cutoffs,
    expected_bits_per_weight,
    quantize_weights,
)
from nnuepack.coding import OracleEncoder, verify_codelength
from nnuepack.config import Config
from nnuepack.utils import compute_sha256, ensure_dir, read_weights


_LOGGER = logging.getLogger(__name__)


@click.command(name="compress")
@click.argument("weights", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "quantize",
    "--quantize",
    type=int,
    default=Config.DEFAULT_QUANTIZE,
    show_default=True,
    help="Quantization steps per unit weight",
)
@click.option(
    "output",
    "--output",
    type=click.Path(path_type=Path),
    required=False,
    help="Output path for the encoded bytes (default: results/<name>.bin); results JSON is written beside it",
)
@click.option(
    "force",
    "--force",
    is_flag=True,
    help="Re-encode even if the output exists",
)
def compress(weights: Path, quantize: int, output: Path | None, force: bool) -> None:
    """Quantize WEIGHTS and write the arithmetic-coded payload."""

    try:
        if quantize <= 0:
            raise click.ClickException("--quantize must be a positive integer.")

        output_file = output if output is not None else Config.RESULTS_DIR / f"{weights.stem}.bin"
        meta_file = output_file.with_suffix(".json")

        if output_file.exists() and meta_file.exists() and not force:
            click.echo(f"Output exists: {output_file}. Use --force to re-encode.")
            try:
                parsed = json.loads(meta_file.read_text(encoding="utf-8"))
                click.echo(json.dumps(parsed, indent=2))
            except Exception:
                pass
            return

        values = read_weights(weights)
        if not values:
            raise click.ClickException(f"No weights found in {weights}")
        click.echo(f"Read {len(values)} weights from {weights}")

        levels = quantize_weights(values, quantize)
        try:
            counts = class_histogram(levels)
        except ValueError as e:
            raise click.ClickException(f"{e}. Try a smaller --quantize.") from None
        cutoffs = derive_cutoffs(counts)
        bits, probs = binarize(levels, cutoffs)
        _LOGGER.info("Binarized %d weights into %d bits", len(levels), len(bits))

        click.echo(f"Encoding {len(bits)} bits...")
        encoder = OracleEncoder()
        encoded = encoder.encode(bits, probs)

        decoded = debinarize(encoded, cutoffs, len(levels))
        if decoded != levels:
            raise click.ClickException("Round-trip check failed: decoded levels differ from input.")

        report = verify_codelength(bits, probs, encoded)
        bits_per_weight = len(encoded) * 8 / len(levels)
        click.echo(f"Encoded bytes: {len(encoded)}")
        click.echo(f"Entropy bound: {report['entropy_bits'] / 8:.1f} bytes")
        click.echo(f"Actual bits/weight: {bits_per_weight:.4f}")

        ensure_dir(output_file.parent)
        output_file.write_bytes(encoded)

        results = {
            "source": str(weights),
            "count": len(levels),
            "quantize": quantize,
            "cutoffs": cutoffs,
            "class_counts": counts,
            "n_bits": len(bits),
            "n_bytes": len(encoded),
            "entropy_bits": report["entropy_bits"],
            "efficiency": report["efficiency"],
            "expected_bits_per_weight": expected_bits_per_weight(counts),
            "bits_per_weight": bits_per_weight,
            "search": {
                "locked_bits": encoder.stats.locked_bits,
                "bisections": encoder.stats.bisections,
                "decode_calls": encoder.stats.decode_calls,
            },
            "payload_sha256": compute_sha256(output_file),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        with meta_file.open("w", encoding="utf-8") as f:
            json.dump(results, f, indent=2)
        click.echo(f"Payload saved: {output_file}")
        click.echo(f"Results saved: {meta_file}")

        click.secho(
            f"OK: {len(levels)} weights -> {len(encoded)} bytes ({bits_per_weight:.4f} bits/weight)",
            fg="green",
        )
    except click.ClickException:
        raise
    except ValueError as e:
        raise click.ClickException(str(e)) from None
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
