"""Tests for scalar interval transforms.

Tests:
- to_interval dispatch and corner cases
- Outputs inside the target interval
- Invertibility
- Log-Jacobians against finite differences
"""

import math
import numpy as np
import pytest
from hypothesis import given, strategies as st

from modelops_transforms import (
    Identity,
    NEGATIVE,
    POSITIVE,
    REAL,
    ScaledShiftedLogistic,
    ShiftedExp,
    UNIT_INTERVAL,
    DimensionMismatch,
    to_interval,
    transform_logdensity,
)

from conftest import assert_logjac_matches_numerical


class TestToInterval:
    """Tests for to_interval dispatch."""

    def test_dispatch(self):
        """Test each combination of finite and infinite bounds."""
        assert to_interval(-math.inf, math.inf) == Identity()
        assert to_interval(2.0, math.inf) == ShiftedExp(True, 2.0)
        assert to_interval(-math.inf, -1.0) == ShiftedExp(False, -1.0)
        assert to_interval(1.0, 3.0) == ScaledShiftedLogistic(2.0, 1.0)

    def test_integer_bounds_promoted(self):
        """Test integer and float bounds give equal transforms."""
        assert to_interval(1, 4.0) == to_interval(1.0, 4.0)

    def test_non_numeric_bound_raises(self):
        """Test non-numeric bounds are rejected."""
        with pytest.raises(TypeError, match="real numbers"):
            to_interval("a fish", 9)

        with pytest.raises(TypeError):
            to_interval(True, 2.0)

    def test_reversed_bounds_raise(self):
        """Test left >= right is rejected."""
        with pytest.raises(ValueError, match="left < right"):
            to_interval(3.0, -4.0)

        with pytest.raises(ValueError, match="left < right"):
            to_interval(1.0, 1.0)

    def test_constants(self):
        """Test the named constants."""
        assert REAL == Identity()
        assert POSITIVE == to_interval(0, math.inf)
        assert NEGATIVE == to_interval(-math.inf, 0)
        assert UNIT_INTERVAL == to_interval(0, 1)

    def test_invalid_scale_raises(self):
        """Test ScaledShiftedLogistic validates its scale."""
        with pytest.raises(ValueError, match="scale > 0"):
            ScaledShiftedLogistic(0.0, 1.0)


class TestScalarTransforms:
    """Tests for mapping, inverting and log-Jacobians."""

    def test_dimension_one(self):
        """Test scalar transforms consume one real."""
        for t in [REAL, POSITIVE, NEGATIVE, UNIT_INTERVAL]:
            assert t.dimension == 1

    def test_output_is_float(self):
        """Test outputs are plain floats."""
        y = to_interval(0, 1).transform(np.array([0.0]))
        assert isinstance(y, float)
        assert y == 0.5

    def test_inverse_returns_vector(self):
        """Test inverse returns a length-1 array."""
        x = POSITIVE.inverse(1.0)
        assert x.shape == (1,)
        assert x[0] == 0.0

    def test_inverse_rejects_vector(self):
        """Test inverse requires a scalar."""
        with pytest.raises(DimensionMismatch, match="scalar"):
            UNIT_INTERVAL.inverse(np.array([0.5, 0.5]))

    def test_wrong_input_length_raises(self):
        """Test transform requires exactly one input."""
        with pytest.raises(DimensionMismatch):
            REAL.transform(np.array([1.0, 2.0]))

    def test_inverse_out_of_domain_is_nan(self):
        """Test out-of-domain inverse gives NaN instead of raising."""
        with np.errstate(invalid="ignore"):
            assert math.isnan(POSITIVE.inverse(-1.0)[0])

    def test_consistency(self, rng):
        """Test range, round-trip and log-Jacobian across random intervals."""
        for _ in range(100):
            a = rng.standard_normal() * 10
            b = a + 0.5 + rng.random() + math.exp(rng.standard_normal() * 3)
            cases = [
                (to_interval(-math.inf, a), lambda y: y < a),
                (to_interval(a, math.inf), lambda y: y > a),
                (to_interval(a, b), lambda y: a < y < b),
                (to_interval(-math.inf, math.inf), lambda y: True),
            ]
            for t, in_range in cases:
                x = rng.standard_normal(1)
                y = t.transform(x)
                assert in_range(y)
                np.testing.assert_allclose(t.inverse(y), x, atol=1e-8, rtol=1e-8)
                assert_logjac_matches_numerical(t, x)

    @given(x=st.floats(min_value=-15, max_value=15))
    def test_unit_interval_roundtrip(self, x):
        """Property: UNIT_INTERVAL is invertible away from saturation."""
        y = UNIT_INTERVAL.transform([x])
        assert 0.0 < y < 1.0
        assert UNIT_INTERVAL.inverse(y)[0] == pytest.approx(x, abs=1e-6)


class TestTransformLogdensity:
    """Tests for densities in unconstrained coordinates."""

    def test_positive_half_line(self, rng):
        """Test p(σ) = σ⁻³ becomes q(z) = -2z under σ = exp(z)."""
        def f(sigma):
            return -3 * math.log(sigma)

        for _ in range(100):
            z = rng.standard_normal()
            assert transform_logdensity(POSITIVE, f, [z]) == pytest.approx(-2 * z)
