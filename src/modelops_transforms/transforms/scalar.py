"""Scalar transforms onto intervals of the real line.

Each transform consumes one unconstrained real and returns a float in
its target interval:

- Identity: ℝ → ℝ
- ShiftedExp: ℝ → (shift, ∞) or (-∞, shift)
- ScaledShiftedLogistic: ℝ → (shift, shift + scale)

Use :func:`to_interval` rather than constructing these directly.
"""

from abc import abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple
import math
import numbers

import numpy as np

from ..exceptions import DimensionMismatch
from ..primitives import logistic, logistic_logjac, logit
from .base import JacobianMode, Transform


class ScalarTransform(Transform):
    """Transform from a single real to a float."""

    @property
    def dimension(self) -> int:
        return 1

    @property
    def numeric_output(self) -> bool:
        return True

    @abstractmethod
    def transform_scalar(self, x: float) -> float:
        """Map one unconstrained real into the interval."""

    @abstractmethod
    def logjac_scalar(self, x: float) -> float:
        """log |dy/dx| at x."""

    @abstractmethod
    def inverse_scalar(self, y: float) -> float:
        """Map a value in the interval back to ℝ."""

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[float, Optional[float]]:
        xi = float(x[0])
        y = self.transform_scalar(xi)
        if mode is JacobianMode.VALUE_ONLY:
            return y, None
        return y, self.logjac_scalar(xi)

    def _check_output(self, y: Any) -> None:
        if np.ndim(y) != 0:
            raise DimensionMismatch(
                f"{type(self).__name__} expects a scalar, got shape {np.shape(y)}"
            )

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        out[0] = self.inverse_scalar(float(y))

    def free_coordinates(self, y: Any) -> np.ndarray:
        return np.array([float(y)])


@dataclass(frozen=True)
class Identity(ScalarTransform):
    """Identity on ℝ."""

    def transform_scalar(self, x: float) -> float:
        return x

    def logjac_scalar(self, x: float) -> float:
        return 0.0

    def inverse_scalar(self, y: float) -> float:
        return y


@dataclass(frozen=True)
class ShiftedExp(ScalarTransform):
    """Exponential map onto a half-line.

    Maps x to ``shift + exp(x)`` when ``positive`` is True, otherwise to
    ``shift - exp(x)``. Inverting a value on the wrong side of ``shift``
    yields NaN.

    Attributes:
        positive: Direction of the half-line
        shift: Finite endpoint of the half-line
    """
    positive: bool = True
    shift: float = 0.0

    def __post_init__(self):
        """Validate the endpoint."""
        if not math.isfinite(self.shift):
            raise ValueError(f"ShiftedExp requires a finite shift, got {self.shift}")
        object.__setattr__(self, 'shift', float(self.shift))

    def transform_scalar(self, x: float) -> float:
        if self.positive:
            return self.shift + float(np.exp(x))
        return self.shift - float(np.exp(x))

    def logjac_scalar(self, x: float) -> float:
        return x

    def inverse_scalar(self, y: float) -> float:
        gap = y - self.shift if self.positive else self.shift - y
        return float(np.log(gap))


@dataclass(frozen=True)
class ScaledShiftedLogistic(ScalarTransform):
    """Logistic map onto a bounded interval.

    Maps x to ``shift + scale * logistic(x)``, i.e. onto
    (shift, shift + scale).

    Attributes:
        scale: Width of the interval, positive
        shift: Left endpoint
    """
    scale: float = 1.0
    shift: float = 0.0

    def __post_init__(self):
        """Validate scale and shift."""
        if not (math.isfinite(self.scale) and self.scale > 0):
            raise ValueError(f"ScaledShiftedLogistic requires scale > 0, got {self.scale}")
        if not math.isfinite(self.shift):
            raise ValueError(f"ScaledShiftedLogistic requires a finite shift, got {self.shift}")
        object.__setattr__(self, 'scale', float(self.scale))
        object.__setattr__(self, 'shift', float(self.shift))

    def transform_scalar(self, x: float) -> float:
        return self.shift + self.scale * logistic(x)

    def logjac_scalar(self, x: float) -> float:
        return math.log(self.scale) + logistic_logjac(x)

    def inverse_scalar(self, y: float) -> float:
        return logit((y - self.shift) / self.scale)


def to_interval(left: Any, right: Any) -> ScalarTransform:
    """Return a transform from ℝ onto the open interval (left, right).

    Either end may be infinite. Integer bounds are promoted to float, so
    ``to_interval(1, 4.0) == to_interval(1.0, 4.0)``.

    Args:
        left: Lower bound, possibly ``-math.inf``
        right: Upper bound, possibly ``math.inf``

    Returns:
        Identity, ShiftedExp or ScaledShiftedLogistic

    Raises:
        TypeError: If a bound is not a real number
        ValueError: If left >= right
    """
    for bound in (left, right):
        if isinstance(bound, bool) or not isinstance(bound, numbers.Real):
            raise TypeError(f"Interval bounds must be real numbers, got {bound!r}")

    left, right = float(left), float(right)
    if not left < right:
        raise ValueError(f"Interval requires left < right, got ({left}, {right})")

    if left == -math.inf and right == math.inf:
        return Identity()
    if right == math.inf:
        return ShiftedExp(True, left)
    if left == -math.inf:
        return ShiftedExp(False, right)
    return ScaledShiftedLogistic(right - left, left)


REAL = Identity()
POSITIVE = ShiftedExp(True, 0.0)
NEGATIVE = ShiftedExp(False, 0.0)
UNIT_INTERVAL = ScaledShiftedLogistic(1.0, 0.0)
