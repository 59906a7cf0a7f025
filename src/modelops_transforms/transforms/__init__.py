"""Transforms between unconstrained vectors and constrained values.

Every transform implements the same capability set (``dimension``,
``transform``, ``transform_and_logjac``, ``inverse``, ``inverse_into``)
and composes under arrays, tuples and named tuples.
"""

from .base import (
    JacobianMode,
    Transform,
    dimension,
    transform,
    transform_and_logjac,
    inverse,
    inverse_into,
    transform_logdensity,
)
from .scalar import (
    ScalarTransform,
    Identity,
    ShiftedExp,
    ScaledShiftedLogistic,
    to_interval,
    REAL,
    POSITIVE,
    NEGATIVE,
    UNIT_INTERVAL,
)
from .special import (
    l2_remainder_transform,
    l2_remainder_inverse,
    UnitVector,
    CorrCholeskyFactor,
    to_unitvec,
    to_corr_cholesky,
)
from .aggregation import (
    ArrayOf,
    TupleOf,
    NamedTupleOf,
    to_array,
    to_tuple,
)
from .custom import CustomTransform

__all__ = [
    # Base
    "JacobianMode",
    "Transform",
    "dimension",
    "transform",
    "transform_and_logjac",
    "inverse",
    "inverse_into",
    "transform_logdensity",
    # Scalar
    "ScalarTransform",
    "Identity",
    "ShiftedExp",
    "ScaledShiftedLogistic",
    "to_interval",
    "REAL",
    "POSITIVE",
    "NEGATIVE",
    "UNIT_INTERVAL",
    # Unit vectors and correlation factors
    "l2_remainder_transform",
    "l2_remainder_inverse",
    "UnitVector",
    "CorrCholeskyFactor",
    "to_unitvec",
    "to_corr_cholesky",
    # Composites
    "ArrayOf",
    "TupleOf",
    "NamedTupleOf",
    "to_array",
    "to_tuple",
    # Custom
    "CustomTransform",
]
