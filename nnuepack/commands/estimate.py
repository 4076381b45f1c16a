"""Estimate compressed size of a weight file without running the encoder.

Examples
--------
  nnuepack estimate weights.txt
  nnuepack estimate weights.txt --quantize 32 --format json
"""

from __future__ import annotations

from pathlib import Path
import json
import math

import click

from nnuepack.binarize import (
    binarize,
    class_histogram,
    derive_cutoffs,
    expected_bits_per_weight,
    quantize_weights,
)
from nnuepack.coding import entropy
from nnuepack.config import Config
from nnuepack.utils import read_weights


@click.command(name="estimate")
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
    "output_format",
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format",
)
def estimate(weights: Path, quantize: int, output_format: str) -> None:
    """Report magnitude-class statistics and the entropy bound for WEIGHTS."""

    try:
        if quantize <= 0:
            raise click.ClickException("--quantize must be a positive integer.")
        values = read_weights(weights)
        if not values:
            raise click.ClickException(f"No weights found in {weights}")

        levels = quantize_weights(values, quantize)
        try:
            counts = class_histogram(levels)
        except ValueError as e:
            raise click.ClickException(f"{e}. Try a smaller --quantize.") from None
        cutoffs = derive_cutoffs(counts)
        bits, probs = binarize(levels, cutoffs)
        h_bits = entropy(bits, probs)

        stats = {
            "count": len(levels),
            "quantize": quantize,
            "class_counts": counts,
            "cutoffs": cutoffs,
            "n_bits": len(bits),
            "expected_bits_per_weight": expected_bits_per_weight(counts),
            "entropy_bits": h_bits,
            "entropy_bits_per_weight": h_bits / len(levels),
            "estimated_bytes": math.ceil(h_bits / 8),
        }

        if output_format.lower() == "json":
            click.echo(json.dumps(stats, indent=2))
            return

        total = float(len(levels))
        click.echo(f"{'class':>5}  {'count':>8}  {'share':>7}  {'cutoff':>6}")
        for k, (c, p) in enumerate(zip(counts, cutoffs)):
            if c == 0:
                continue
            click.echo(f"{k:>5}  {c:>8}  {c / total:>7.2%}  {p:>6}")
        click.echo(f"Weights: {stats['count']} | Bits to code: {stats['n_bits']}")
        click.echo(f"Expected bits/weight (histogram): {stats['expected_bits_per_weight']:.4f}")
        click.echo(f"Entropy bound: {h_bits:.1f} bits ({stats['entropy_bits_per_weight']:.4f} bits/weight)")
        click.echo(f"Estimated size: {stats['estimated_bytes']} bytes")
    except click.ClickException:
        raise
    except ValueError as e:
        raise click.ClickException(str(e)) from None
    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)
