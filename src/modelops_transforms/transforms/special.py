"""Unit vectors and correlation Cholesky factors.

Both transforms are built from the same atomic step, the L2 remainder
bijection: given an unconstrained x and a remaining squared-norm budget
r, it emits one coordinate y with |y| < √r and the leftover budget
r' = r - y². A unit vector is a chain of such steps whose final budget
becomes the last coordinate; a correlation Cholesky factor repeats the
chain independently for every column.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple
import math

import numpy as np

from ..constants import LOG2
from ..exceptions import DimensionMismatch
from ..primitives import logistic, logistic_logjac, logit, unit_triangular_dimension
from .base import JacobianMode, Transform, check_positive_dimension, logjac_zero


def l2_remainder_transform(mode: JacobianMode, x: float, r: float) -> Tuple[float, float, Optional[float]]:
    """One step of the remainder bijection.

    Given x ∈ ℝ and a budget 0 ≤ r ≤ 1, returns (y, r', logjac) with
    y² + r' = r and |y| ≤ √r. The map x ↦ y is a bijection onto
    (-√r, √r) for r > 0.

    Args:
        mode: Whether to compute the log-Jacobian of x ↦ y
        x: Unconstrained real
        r: Remaining squared-norm budget

    Returns:
        Tuple of (y, r', logjac); logjac is None for VALUE_ONLY
    """
    z = 2.0 * logistic(x) - 1.0
    y = z * math.sqrt(r)
    r_next = r * (1.0 - z * z)
    if mode is JacobianMode.VALUE_ONLY:
        return y, r_next, None
    log_r = math.log(r) if r > 0.0 else -math.inf
    return y, r_next, LOG2 + logistic_logjac(x) + 0.5 * log_r


def l2_remainder_inverse(y: float, r: float) -> Tuple[float, float]:
    """Inverse of :func:`l2_remainder_transform` in x and y.

    Returns:
        Tuple of (x, r') with r' = r - y²
    """
    return logit((y / np.sqrt(r) + 1.0) / 2.0), r - y * y


@dataclass(frozen=True)
class UnitVector(Transform):
    """Transform n - 1 reals to a unit vector of length n (Euclidean norm).

    Attributes:
        n: Length of the output vector, at least 1
    """
    n: int

    def __post_init__(self):
        """Validate the vector length."""
        object.__setattr__(self, 'n', check_positive_dimension("UnitVector", self.n))

    @property
    def dimension(self) -> int:
        return self.n - 1

    @property
    def numeric_output(self) -> bool:
        return True

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[np.ndarray, Optional[float]]:
        r = 1.0
        y = np.empty(self.n)
        logjac = logjac_zero(mode)
        for i in range(self.n - 1):
            y[i], r, step = l2_remainder_transform(mode, x[i], r)
            if step is not None:
                logjac += step
        y[-1] = math.sqrt(r)
        return y, logjac

    def _check_output(self, y: Any) -> None:
        if np.shape(y) != (self.n,):
            raise DimensionMismatch(
                f"UnitVector({self.n}) expects a vector of length {self.n}, got shape {np.shape(y)}"
            )

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        # The last coordinate is fixed by the norm and is not read
        r = 1.0
        for i in range(self.n - 1):
            out[i], r = l2_remainder_inverse(y[i], r)

    def free_coordinates(self, y: Any) -> np.ndarray:
        return np.asarray(y, dtype=float)[:-1]


@dataclass(frozen=True)
class CorrCholeskyFactor(Transform):
    """Upper-triangular Cholesky factor U of an n×n correlation matrix.

    ``U.T @ U`` is a correlation matrix: each column of U has unit norm.
    Inputs are consumed column by column, and within a column from the
    top row down to the row above the diagonal. Column ``col`` is a unit
    vector of length col + 1 built with its own budget.

    Attributes:
        n: Size of the correlation matrix, at least 1
    """
    n: int

    def __post_init__(self):
        """Validate the matrix size."""
        object.__setattr__(self, 'n', check_positive_dimension("CorrCholeskyFactor", self.n))

    @property
    def dimension(self) -> int:
        return unit_triangular_dimension(self.n)

    @property
    def numeric_output(self) -> bool:
        return True

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[np.ndarray, Optional[float]]:
        n = self.n
        U = np.zeros((n, n))
        logjac = logjac_zero(mode)
        index = 0
        for col in range(n):
            r = 1.0
            for row in range(col):
                U[row, col], r, step = l2_remainder_transform(mode, x[index], r)
                if step is not None:
                    logjac += step
                index += 1
            U[col, col] = math.sqrt(r)
        return U, logjac

    def _check_output(self, y: Any) -> None:
        if np.shape(y) != (self.n, self.n):
            raise DimensionMismatch(
                f"CorrCholeskyFactor({self.n}) expects a {self.n}×{self.n} matrix, "
                f"got shape {np.shape(y)}"
            )

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        # Only entries above the diagonal are read
        U = np.asarray(y, dtype=float)
        index = 0
        for col in range(self.n):
            r = 1.0
            for row in range(col):
                out[index], r = l2_remainder_inverse(U[row, col], r)
                index += 1

    def free_coordinates(self, y: Any) -> np.ndarray:
        U = np.asarray(y, dtype=float)
        return np.array([U[row, col] for col in range(self.n) for row in range(col)])


def to_unitvec(n: int) -> UnitVector:
    """Transform n - 1 reals to a unit vector of length n."""
    return UnitVector(n)


def to_corr_cholesky(n: int) -> CorrCholeskyFactor:
    """Transform n(n-1)/2 reals to the Cholesky factor of an n×n correlation matrix."""
    return CorrCholeskyFactor(n)
