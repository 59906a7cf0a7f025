"""Consistency checks for transforms.

For random unconstrained points, verifies that:
- inverse(transform(x)) recovers x
- the analytic log-Jacobian matches log|det J| of the numerically
  differentiated map x ↦ free_coordinates(transform(x))

Results come back as a polars DataFrame with one row per trial.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import numpy as np
import polars as pl

from .constants import DEFAULT_RTOL, DEFAULT_SEED, DEFAULT_TRIALS
from .differentiation import numerical_logjac
from .transforms.base import Transform

logger = logging.getLogger(__name__)


def roundtrip_error(t: Transform, x: np.ndarray) -> float:
    """Largest absolute error of inverse(transform(x)) against x."""
    x_back = t.inverse(t.transform(x))
    return float(np.max(np.abs(x_back - x), initial=0.0))


def logjac_error(t: Transform, x: np.ndarray) -> tuple[float, float]:
    """Analytic and numerical log-Jacobian at x."""
    _, logjac = t.transform_and_logjac(x)
    numeric = numerical_logjac(lambda v: t.free_coordinates(t.transform(v)), x)
    return float(logjac), numeric


def check_transform(
    t: Transform,
    trials: int = DEFAULT_TRIALS,
    seed: Optional[int] = DEFAULT_SEED,
    rtol: float = DEFAULT_RTOL,
    scale: float = 1.0,
) -> pl.DataFrame:
    """Run round-trip and log-Jacobian checks at random points.

    Args:
        t: Transform to check
        trials: Number of random points
        seed: Seed for the standard normal draws
        rtol: Relative tolerance for both checks (absolute floor of rtol)
        scale: Standard deviation of the draws

    Returns:
        DataFrame with columns trial, roundtrip_error, logjac,
        numerical_logjac, logjac_error and passed
    """
    if trials < 1:
        raise ValueError(f"trials must be positive, got {trials}")

    rng = np.random.default_rng(seed)
    rows = []
    for trial in range(trials):
        x = rng.standard_normal(t.dimension) * scale
        rt_error = roundtrip_error(t, x)
        logjac, numeric = logjac_error(t, x)
        lj_error = abs(logjac - numeric)
        passed = rt_error <= rtol * max(1.0, float(np.max(np.abs(x), initial=0.0))) \
            and lj_error <= rtol * max(1.0, abs(logjac))
        if not passed:
            logger.warning(
                f"{t!r} trial {trial}: roundtrip error {rt_error:.3g}, "
                f"logjac {logjac:.6g} vs numerical {numeric:.6g}"
            )
        rows.append({
            "trial": trial,
            "roundtrip_error": rt_error,
            "logjac": logjac,
            "numerical_logjac": numeric,
            "logjac_error": lj_error,
            "passed": passed,
        })

    df = pl.DataFrame(rows)
    logger.info(f"Checked {t!r}: {df['passed'].sum()}/{trials} trials passed")
    return df


def summarize_checks(df: pl.DataFrame) -> Dict[str, Any]:
    """Reduce a check table to headline numbers."""
    return {
        "trials": df.height,
        "passed": int(df["passed"].sum()),
        "max_roundtrip_error": float(df["roundtrip_error"].max()),
        "max_logjac_error": float(df["logjac_error"].max()),
    }
