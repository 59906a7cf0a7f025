"""User-defined transforms from plain functions."""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import numpy as np

from ..differentiation import numerical_logjac
from ..exceptions import DimensionMismatch
from .base import JacobianMode, Transform, check_positive_dimension


@dataclass(frozen=True)
class CustomTransform(Transform):
    """Escape hatch wrapping user-supplied pure functions.

    The log-Jacobian is log|det J| of ``flatten(forward(x))``, computed by
    central differences, so ``flatten`` must return exactly ``dim`` values.

    Attributes:
        dim: Length of the unconstrained input
        forward: Maps a vector of length ``dim`` to the output value
        flatten: Maps an output value to a vector of length ``dim``
        backward: Optional inverse of ``forward``

    Example:
        >>> t = CustomTransform(2, lambda x: (x[0], x[0] + x[1]), np.asarray)
        >>> y, logjac = t.transform_and_logjac([1.0, 2.0])  # shear: logjac ≈ 0
    """
    dim: int
    forward: Callable[[np.ndarray], Any]
    flatten: Callable[[Any], np.ndarray]
    backward: Optional[Callable[[Any], np.ndarray]] = None

    def __post_init__(self):
        """Validate dimension and callables."""
        object.__setattr__(self, 'dim', check_positive_dimension("CustomTransform", self.dim))
        for name in ('forward', 'flatten'):
            if not callable(getattr(self, name)):
                raise TypeError(f"CustomTransform.{name} must be callable")

    @property
    def dimension(self) -> int:
        return self.dim

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[Any, Optional[float]]:
        y = self.forward(x)
        if mode is JacobianMode.VALUE_ONLY:
            return y, None
        return y, numerical_logjac(lambda v: self.free_coordinates(self.forward(v)), x)

    def _check_output(self, y: Any) -> None:
        if self.backward is None:
            raise NotImplementedError("CustomTransform has no inverse; pass backward= to enable it")

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        x = np.asarray(self.backward(y), dtype=float)
        if x.shape != (self.dim,):
            raise DimensionMismatch(
                f"CustomTransform inverse returned shape {x.shape}, expected ({self.dim},)"
            )
        out[:] = x

    def free_coordinates(self, y: Any) -> np.ndarray:
        return np.ravel(np.asarray(self.flatten(y), dtype=float))
