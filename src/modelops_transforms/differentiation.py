"""Numerical differentiation by central differences.

Used as a black-box oracle: to check analytic log-Jacobians and to give
:class:`~modelops_transforms.transforms.custom.CustomTransform` a
log-Jacobian without an autodiff system.
"""

from typing import Callable

import numpy as np

from .constants import FINITE_DIFF_STEP
from .exceptions import DimensionMismatch


def numerical_jacobian(
    f: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    step: float = FINITE_DIFF_STEP,
) -> np.ndarray:
    """Jacobian of f at x by central differences.

    Args:
        f: Function from a vector to an array (flattened in C order)
        x: Point of evaluation
        step: Relative step size; the absolute step is step * max(1, |x_j|)

    Returns:
        Array of shape (len(f(x)), len(x))
    """
    x = np.asarray(x, dtype=float)
    m = np.ravel(f(x)).size
    jac = np.empty((m, x.size))
    for j in range(x.size):
        h = step * max(1.0, abs(x[j]))
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus[j] += h
        x_minus[j] -= h
        # Actual step after rounding of x ± h
        width = x_plus[j] - x_minus[j]
        jac[:, j] = (np.ravel(f(x_plus)) - np.ravel(f(x_minus))) / width
    return jac


def numerical_logjac(
    f: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    step: float = FINITE_DIFF_STEP,
) -> float:
    """log |det J| of f at x, where J must be square.

    Raises:
        DimensionMismatch: If f does not map ℝᵈ to ℝᵈ
    """
    jac = numerical_jacobian(f, x, step)
    if jac.shape[0] != jac.shape[1]:
        raise DimensionMismatch(f"log-Jacobian needs a square Jacobian, got shape {jac.shape}")
    if jac.size == 0:
        return 0.0
    _, logdet = np.linalg.slogdet(jac)
    return float(logdet)
