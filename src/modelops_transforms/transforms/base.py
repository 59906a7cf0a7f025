"""Base class and shared plumbing for transforms.

A transform maps a flat unconstrained vector x ∈ ℝᵈ (d = ``dimension``)
to a constrained value y and can report log|det J| of that map. Every
variant implements the same capability set:

- ``dimension``: length of the unconstrained vector
- ``transform(x)``: y
- ``transform_and_logjac(x)``: (y, log-Jacobian)
- ``inverse(y)``: x as a new array
- ``inverse_into(out, y)``: x written into a caller-provided buffer

Shape checks happen once at the public entry points; the underscore
methods assume validated input so composites can call them on slices
without re-checking.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Optional, Tuple
import numbers

import numpy as np

from ..exceptions import DimensionMismatch, InvalidDimension


class JacobianMode(Enum):
    """Whether a forward pass also accumulates the log-Jacobian."""

    VALUE_ONLY = "value_only"
    WITH_LOGJAC = "with_logjac"


def logjac_zero(mode: JacobianMode) -> Optional[float]:
    """Starting log-Jacobian for an accumulation.

    Returns ``None`` for VALUE_ONLY so an unused slot can never be
    mistaken for a real 0.0 and summed.
    """
    return 0.0 if mode is JacobianMode.WITH_LOGJAC else None


def check_positive_dimension(owner: str, n: Any) -> int:
    """Validate a declared size at construction time.

    Raises:
        InvalidDimension: If n is not a positive integer
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidDimension(f"{owner} requires an integer dimension, got {n!r}")
    if n < 1:
        raise InvalidDimension(f"{owner} requires a positive dimension, got {n}")
    return int(n)


class Transform(ABC):
    """Bijection between ℝᵈ and a constrained space.

    Subclasses are frozen dataclasses: configuration is fixed at
    construction and calls never mutate the transform, so one instance
    can be shared freely between threads.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of the unconstrained input vector."""

    @property
    def numeric_output(self) -> bool:
        """True when outputs are floats or float arrays of a fixed shape."""
        return False

    @abstractmethod
    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[Any, Optional[float]]:
        """Forward map on a validated slice of length ``dimension``."""

    @abstractmethod
    def _check_output(self, y: Any) -> None:
        """Raise DimensionMismatch if y does not have this transform's shape."""

    @abstractmethod
    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        """Write the inverse of a validated y into ``out`` (length ``dimension``)."""

    @abstractmethod
    def free_coordinates(self, y: Any) -> np.ndarray:
        """Flatten y to the ``dimension`` coordinates that determine it.

        The log-Jacobian returned by ``transform_and_logjac`` is
        log|det ∂free_coordinates(transform(x))/∂x|.
        """

    def _as_input(self, x: Any) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if x.ndim != 1 or x.shape[0] != self.dimension:
            raise DimensionMismatch(
                f"{type(self).__name__} expects a vector of length {self.dimension}, "
                f"got shape {x.shape}"
            )
        return x

    def transform(self, x: Any) -> Any:
        """Map an unconstrained vector to the constrained space.

        Args:
            x: Vector of length ``dimension``

        Returns:
            The constrained value (shape depends on the transform)

        Raises:
            DimensionMismatch: If x has the wrong length
        """
        y, _ = self._transform_with(JacobianMode.VALUE_ONLY, self._as_input(x))
        return y

    def transform_and_logjac(self, x: Any) -> Tuple[Any, float]:
        """Map x and return the log absolute Jacobian determinant as well.

        Args:
            x: Vector of length ``dimension``

        Returns:
            Tuple of (constrained value, log-Jacobian)

        Raises:
            DimensionMismatch: If x has the wrong length
        """
        return self._transform_with(JacobianMode.WITH_LOGJAC, self._as_input(x))

    def inverse(self, y: Any) -> np.ndarray:
        """Map a constrained value back to its unconstrained vector.

        Raises:
            DimensionMismatch: If y does not have the expected structure
        """
        self._check_output(y)
        out = np.empty(self.dimension, dtype=float)
        self._inverse_into(out, y)
        return out

    def inverse_into(self, out: np.ndarray, y: Any) -> np.ndarray:
        """Write the inverse of y into ``out`` and return it.

        The whole structure of y is validated before anything is written,
        so a rejected call leaves ``out`` untouched.

        Raises:
            DimensionMismatch: If out or y has the wrong shape
        """
        if not isinstance(out, np.ndarray) or out.shape != (self.dimension,):
            raise DimensionMismatch(
                f"{type(self).__name__} needs an output buffer of shape ({self.dimension},), "
                f"got {np.shape(out)}"
            )
        self._check_output(y)
        self._inverse_into(out, y)
        return out


def transform_logdensity(t: Transform, f: Callable[[Any], float], x: Any) -> float:
    """Log density in unconstrained coordinates.

    Evaluates f at y = t(x) and adds the log-Jacobian correction.

    Args:
        t: The transform
        f: Log density on the constrained space
        x: Unconstrained vector

    Returns:
        f(t(x)) + log|det J(x)|
    """
    y, logjac = t.transform_and_logjac(x)
    return f(y) + logjac


# Functional API mirroring the methods
def dimension(t: Transform) -> int:
    """Length of the unconstrained vector for t."""
    return t.dimension


def transform(t: Transform, x: Any) -> Any:
    """Apply t to x."""
    return t.transform(x)


def transform_and_logjac(t: Transform, x: Any) -> Tuple[Any, float]:
    """Apply t to x, returning the log-Jacobian as well."""
    return t.transform_and_logjac(x)


def inverse(t: Transform, y: Any) -> np.ndarray:
    """Invert t at y."""
    return t.inverse(y)


def inverse_into(out: np.ndarray, t: Transform, y: Any) -> np.ndarray:
    """Invert t at y into a caller-provided buffer."""
    return t.inverse_into(out, y)
