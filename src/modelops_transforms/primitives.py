"""Scalar math primitives used by the transforms.

Numerically stable logistic helpers built on scipy.special. Values outside
the domain of a primitive (e.g. ``logit`` of 1.5) produce non-finite
results instead of raising.
"""

from scipy.special import expit, log_expit
from scipy.special import logit as _logit


def logistic(x: float) -> float:
    """Logistic function 1 / (1 + exp(-x)), mapping ℝ → (0, 1)."""
    return float(expit(x))


def logit(p: float) -> float:
    """Inverse of :func:`logistic`, mapping (0, 1) → ℝ."""
    return float(_logit(p))


def logistic_logjac(x: float) -> float:
    """Log derivative of the logistic function.

    Computes log(logistic(x)) + log(1 - logistic(x)) without underflow
    for large |x|.
    """
    return float(log_expit(x) + log_expit(-x))


def unit_triangular_dimension(n: int) -> int:
    """Number of elements strictly above the diagonal of an n×n matrix."""
    return n * (n - 1) // 2
