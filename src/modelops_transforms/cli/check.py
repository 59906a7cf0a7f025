"""Commands that inspect and check geometric transforms."""

from enum import Enum
from pathlib import Path
from typing import Optional
import logging

import typer

from ..diagnostics import check_transform, summarize_checks
from ..exceptions import InvalidDimension
from ..transforms import CorrCholeskyFactor, Transform, UnitVector
from .config import load_check_config

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    """Transforms selectable from the command line."""
    unitvec = "unitvec"
    corr = "corr"


def build_transform(kind: Kind, n: int) -> Transform:
    """Construct the transform named by ``kind`` with size n."""
    if kind is Kind.unitvec:
        return UnitVector(n)
    return CorrCholeskyFactor(n)


def _build_or_exit(kind: Kind, n: int) -> Transform:
    try:
        return build_transform(kind, n)
    except InvalidDimension as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def dimension_command(
    kind: Kind = typer.Argument(..., help="Transform kind"),
    n: int = typer.Argument(..., help="Vector length or matrix size"),
):
    """Print the unconstrained dimension of a transform."""
    typer.echo(_build_or_exit(kind, n).dimension)


def check_command(
    kind: Kind = typer.Argument(..., help="Transform kind"),
    n: int = typer.Argument(..., help="Vector length or matrix size"),
    trials: Optional[int] = typer.Option(None, "--trials", "-t", help="Number of random points"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    rtol: Optional[float] = typer.Option(None, "--rtol", help="Relative tolerance"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write per-trial results as CSV"),
):
    """Check round-trips and log-Jacobians at random points."""
    config = load_check_config(trials=trials, seed=seed, rtol=rtol)
    t = _build_or_exit(kind, n)
    logger.info(f"Checking {t!r} with {config}")

    df = check_transform(t, trials=config["trials"], seed=config["seed"], rtol=config["rtol"])
    summary = summarize_checks(df)

    typer.echo(f"{t!r}: dimension {t.dimension}")
    typer.echo(f"  passed: {summary['passed']}/{summary['trials']}")
    typer.echo(f"  max roundtrip error: {summary['max_roundtrip_error']:.3g}")
    typer.echo(f"  max logjac error: {summary['max_logjac_error']:.3g}")

    if output is not None:
        df.write_csv(output)
        typer.echo(f"  wrote {output}")

    if summary["passed"] < summary["trials"]:
        raise typer.Exit(1)
