"""Shared fixtures and helpers for transform tests."""

import numpy as np
import pytest

from modelops_transforms.differentiation import numerical_logjac


@pytest.fixture
def rng():
    """Seeded random generator so failures reproduce."""
    return np.random.default_rng(1)


def is_valid_corr_cholesky(U: np.ndarray) -> bool:
    """Upper triangular with unit-norm columns, so U'U is a correlation matrix."""
    return (
        np.allclose(np.tril(U, -1), 0.0)
        and np.allclose(np.linalg.norm(U, axis=0), 1.0)
        and bool(np.all(np.diag(U) >= 0.0))
    )


def assert_logjac_matches_numerical(t, x, rtol=1e-6):
    """Analytic log-Jacobian equals log|det| of the finite-difference Jacobian."""
    _, logjac = t.transform_and_logjac(x)
    numeric = numerical_logjac(lambda v: t.free_coordinates(t.transform(v)), x)
    assert logjac == pytest.approx(numeric, rel=rtol, abs=rtol)
