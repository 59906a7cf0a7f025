"""Public API for modelops-transforms.

This module provides the complete public API: the transform variants,
their constructors, the functional entry points, math primitives,
errors and diagnostics.
"""

# Errors
from .exceptions import InvalidDimension, DimensionMismatch

# Math primitives
from .primitives import logistic, logit, logistic_logjac, unit_triangular_dimension

# Transforms
from .transforms import (
    JacobianMode,
    Transform,
    dimension,
    transform,
    transform_and_logjac,
    inverse,
    inverse_into,
    transform_logdensity,
    # Scalar
    ScalarTransform,
    Identity,
    ShiftedExp,
    ScaledShiftedLogistic,
    to_interval,
    REAL,
    POSITIVE,
    NEGATIVE,
    UNIT_INTERVAL,
    # Unit vectors and correlation factors
    UnitVector,
    CorrCholeskyFactor,
    to_unitvec,
    to_corr_cholesky,
    # Composites
    ArrayOf,
    TupleOf,
    NamedTupleOf,
    to_array,
    to_tuple,
    # Custom
    CustomTransform,
)

# Diagnostics
from .differentiation import numerical_jacobian, numerical_logjac
from .diagnostics import check_transform, summarize_checks

# Version
from importlib.metadata import PackageNotFoundError, version
try:
    __version__ = version("modelops-transforms")
except PackageNotFoundError:
    __version__ = "0.1.0"

# Public API Export List
__all__ = [
    # Errors
    "InvalidDimension",
    "DimensionMismatch",

    # Primitives
    "logistic",
    "logit",
    "logistic_logjac",
    "unit_triangular_dimension",

    # Transform interface
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

    # Diagnostics
    "numerical_jacobian",
    "numerical_logjac",
    "check_transform",
    "summarize_checks",

    # Version
    "__version__",
]
