"""Composite transforms: arrays, tuples and named tuples of transforms.

A composite splits its flat input into contiguous slices, one per
sub-transform and sized by that sub-transform's ``dimension``, in
declared order with no gaps or overlaps. Log-Jacobians of independent
slices add up. The inverse runs the mirror image, writing each slot into
its own view of the output buffer.
"""

from collections import namedtuple
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple
from types import MappingProxyType
import keyword
import math

import numpy as np

from ..exceptions import DimensionMismatch
from .base import JacobianMode, Transform, check_positive_dimension, logjac_zero


def _slices(transforms: Sequence[Transform]) -> Iterator[Tuple[Transform, slice]]:
    """Pair each transform with its slice of the flat vector."""
    start = 0
    for t in transforms:
        stop = start + t.dimension
        yield t, slice(start, stop)
        start = stop


def _transform_sequence(
    transforms: Sequence[Transform], mode: JacobianMode, x: np.ndarray
) -> Tuple[List[Any], Optional[float]]:
    outputs = []
    logjac = logjac_zero(mode)
    for t, part in _slices(transforms):
        y, step = t._transform_with(mode, x[part])
        outputs.append(y)
        if step is not None:
            logjac += step
    return outputs, logjac


def _inverse_sequence(transforms: Sequence[Transform], out: np.ndarray, ys: Sequence[Any]) -> None:
    for (t, part), y in zip(_slices(transforms), ys):
        t._inverse_into(out[part], y)


def _free_sequence(transforms: Sequence[Transform], ys: Sequence[Any]) -> np.ndarray:
    parts = [t.free_coordinates(y) for t, y in zip(transforms, ys)]
    return np.concatenate(parts) if parts else np.empty(0)


def _check_transforms(owner: str, transforms: Sequence[Any]) -> None:
    for t in transforms:
        if not isinstance(t, Transform):
            raise TypeError(f"{owner} requires Transform instances, got {type(t).__name__}")


@dataclass(frozen=True, init=False)
class ArrayOf(Transform):
    """The same transform applied to every cell of an array.

    Cells are filled in C (row-major) order. Numeric elements are stacked
    into a float array of shape ``dims + element_shape``; other elements
    go into an object array of shape ``dims``.

    Attributes:
        element: Transform applied to each cell
        dims: Array shape, all entries positive
    """
    element: Transform
    dims: Tuple[int, ...]
    _count: int = field(init=False, repr=False, compare=False)

    def __init__(self, element: Transform, *dims: int):
        _check_transforms("ArrayOf", [element])
        if not dims:
            raise TypeError("ArrayOf requires at least one dimension")
        dims = tuple(check_positive_dimension("ArrayOf", d) for d in dims)
        object.__setattr__(self, 'element', element)
        object.__setattr__(self, 'dims', dims)
        object.__setattr__(self, '_count', math.prod(dims))

    @property
    def dimension(self) -> int:
        return self.element.dimension * self._count

    @property
    def numeric_output(self) -> bool:
        return self.element.numeric_output

    def _elements(self) -> List[Transform]:
        return [self.element] * self._count

    def _cells(self, y: Any) -> List[Any]:
        """Cells of a validated output in C order."""
        if self.numeric_output:
            arr = np.asarray(y, dtype=float)
            return list(arr.reshape((self._count,) + arr.shape[len(self.dims):]))
        return list(y.reshape(self._count))

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[np.ndarray, Optional[float]]:
        outputs, logjac = _transform_sequence(self._elements(), mode, x)
        if self.numeric_output:
            stacked = np.asarray(outputs, dtype=float)
            return stacked.reshape(self.dims + stacked.shape[1:]), logjac
        cells = np.empty(self._count, dtype=object)
        for i, y in enumerate(outputs):
            cells[i] = y
        return cells.reshape(self.dims), logjac

    def _check_output(self, y: Any) -> None:
        if self.numeric_output:
            shape = np.shape(y)
            if shape[:len(self.dims)] != self.dims:
                raise DimensionMismatch(
                    f"ArrayOf expects an array with leading shape {self.dims}, got {shape}"
                )
        elif not (isinstance(y, np.ndarray) and y.shape == self.dims):
            raise DimensionMismatch(
                f"ArrayOf expects an object array of shape {self.dims}, got {np.shape(y)}"
            )
        for cell in self._cells(y):
            self.element._check_output(cell)

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        _inverse_sequence(self._elements(), out, self._cells(y))

    def free_coordinates(self, y: Any) -> np.ndarray:
        return _free_sequence(self._elements(), self._cells(y))


@dataclass(frozen=True, init=False)
class TupleOf(Transform):
    """Heterogeneous transforms whose outputs form a tuple.

    Attributes:
        transforms: Sub-transforms in declared order
    """
    transforms: Tuple[Transform, ...]
    _dimension: int = field(init=False, repr=False, compare=False)

    def __init__(self, *transforms: Transform):
        _check_transforms("TupleOf", transforms)
        object.__setattr__(self, 'transforms', tuple(transforms))
        object.__setattr__(self, '_dimension', sum(t.dimension for t in transforms))

    @property
    def dimension(self) -> int:
        return self._dimension

    def __len__(self) -> int:
        return len(self.transforms)

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[tuple, Optional[float]]:
        outputs, logjac = _transform_sequence(self.transforms, mode, x)
        return tuple(outputs), logjac

    def _check_output(self, y: Any) -> None:
        if not isinstance(y, (tuple, list)):
            raise TypeError(f"TupleOf expects a tuple, got {type(y).__name__}")
        if len(y) != len(self.transforms):
            raise DimensionMismatch(
                f"TupleOf expects {len(self.transforms)} values, got {len(y)}"
            )
        for t, value in zip(self.transforms, y):
            t._check_output(value)

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        _inverse_sequence(self.transforms, out, y)

    def free_coordinates(self, y: Any) -> np.ndarray:
        return _free_sequence(self.transforms, y)


@dataclass(frozen=True, init=False)
class NamedTupleOf(Transform):
    """Named transforms whose outputs form a namedtuple.

    Output fields always follow declaration order. The inverse accepts
    either that namedtuple or any mapping keyed by name.

    Attributes:
        transforms: Read-only mapping of name to sub-transform

    Example:
        >>> t = NamedTupleOf(mu=REAL, sigma=POSITIVE)
        >>> y = t.transform(np.array([0.0, 0.0]))
        >>> y.sigma
        1.0
    """
    transforms: Mapping[str, Transform]
    _dimension: int = field(init=False, repr=False, compare=False)
    _output_type: type = field(init=False, repr=False, compare=False)

    def __init__(self, transforms: Optional[Mapping[str, Transform]] = None, /, **named: Transform):
        merged = dict(transforms or {})
        overlap = set(merged) & set(named)
        if overlap:
            raise ValueError(f"Duplicate transform names: {sorted(overlap)}")
        merged.update(named)

        for name in merged:
            if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name) \
                    or name.startswith('_'):
                raise ValueError(f"Invalid transform name: {name!r}")
        _check_transforms("NamedTupleOf", list(merged.values()))

        object.__setattr__(self, 'transforms', MappingProxyType(merged))
        object.__setattr__(self, '_dimension', sum(t.dimension for t in merged.values()))
        object.__setattr__(self, '_output_type', namedtuple("TransformedValues", list(merged)))

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def names(self) -> Tuple[str, ...]:
        """Declared names in order."""
        return tuple(self.transforms)

    def __getitem__(self, name: str) -> Transform:
        """Get the sub-transform declared under ``name``.

        Raises:
            KeyError: If name was not declared
        """
        if name not in self.transforms:
            raise KeyError(f"Unknown transform: {name}. Available: {list(self.transforms)}")
        return self.transforms[name]

    def __len__(self) -> int:
        return len(self.transforms)

    def _values(self, y: Any) -> List[Any]:
        """Values of y in declared order, looked up by name."""
        if isinstance(y, Mapping):
            values = y
        elif hasattr(y, '_asdict'):
            values = y._asdict()
        else:
            raise TypeError(f"NamedTupleOf expects a namedtuple or mapping, got {type(y).__name__}")

        extra = set(values) - set(self.transforms)
        if extra:
            raise DimensionMismatch(f"Unexpected names: {sorted(extra)}. Available: {list(self.transforms)}")
        missing = [name for name in self.transforms if name not in values]
        if missing:
            raise KeyError(f"Missing values for: {missing}")
        return [values[name] for name in self.transforms]

    def _transform_with(self, mode: JacobianMode, x: np.ndarray) -> Tuple[tuple, Optional[float]]:
        outputs, logjac = _transform_sequence(list(self.transforms.values()), mode, x)
        return self._output_type(*outputs), logjac

    def _check_output(self, y: Any) -> None:
        for t, value in zip(self.transforms.values(), self._values(y)):
            t._check_output(value)

    def _inverse_into(self, out: np.ndarray, y: Any) -> None:
        _inverse_sequence(list(self.transforms.values()), out, self._values(y))

    def free_coordinates(self, y: Any) -> np.ndarray:
        return _free_sequence(list(self.transforms.values()), self._values(y))


def to_array(element: Transform, *dims: int) -> ArrayOf:
    """Apply ``element`` to every cell of an array of shape ``dims``."""
    return ArrayOf(element, *dims)


def to_tuple(*transforms: Transform, **named: Transform) -> Transform:
    """Build a TupleOf or NamedTupleOf.

    ``to_tuple(t1, t2)`` gives positional outputs; ``to_tuple(a=t1, b=t2)``
    or ``to_tuple({"a": t1, "b": t2})`` gives named outputs.
    """
    if named:
        if transforms:
            raise TypeError("to_tuple takes either positional or named transforms, not both")
        return NamedTupleOf(**named)
    if len(transforms) == 1 and isinstance(transforms[0], Mapping):
        return NamedTupleOf(transforms[0])
    return TupleOf(*transforms)
