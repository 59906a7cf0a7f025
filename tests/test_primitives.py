"""Tests for logistic primitives and dimension helpers."""

import math
import pytest
from hypothesis import given, strategies as st

from modelops_transforms.primitives import (
    logistic,
    logit,
    logistic_logjac,
    unit_triangular_dimension,
)


class TestUnitTriangularDimension:
    """Tests for the strictly-upper-triangular element count."""

    def test_small_values(self):
        """Test known triangular numbers."""
        assert unit_triangular_dimension(1) == 0
        assert unit_triangular_dimension(2) == 1
        assert unit_triangular_dimension(5) == 10


class TestLogistic:
    """Tests for logistic and logit."""

    def test_logistic_at_zero(self):
        """Test logistic(0) is exactly one half."""
        assert logistic(0.0) == 0.5

    def test_logistic_saturates(self):
        """Test logistic stays in [0, 1] for large inputs."""
        assert logistic(800.0) == 1.0
        assert logistic(-800.0) == 0.0

    @given(x=st.floats(min_value=-50, max_value=50))
    def test_logistic_matches_definition(self, x):
        """Property: logistic(x) = 1 / (1 + exp(-x))."""
        assert logistic(x) == pytest.approx(1.0 / (1.0 + math.exp(-x)), rel=1e-12)

    @given(p=st.floats(min_value=1e-6, max_value=1 - 1e-6))
    def test_logit_inverts_logistic(self, p):
        """Property: logistic(logit(p)) recovers p."""
        assert logistic(logit(p)) == pytest.approx(p, rel=1e-10)

    def test_logit_outside_domain_is_not_finite(self):
        """Test logit does not raise outside (0, 1)."""
        assert not math.isfinite(logit(1.5))
        assert logit(1.0) == math.inf


class TestLogisticLogjac:
    """Tests for the log derivative of logistic."""

    @given(x=st.floats(min_value=-30, max_value=30))
    def test_matches_direct_formula(self, x):
        """Property: equals log(l) + log(1 - l) where that is well conditioned."""
        expected = -(math.log1p(math.exp(-x)) + math.log1p(math.exp(x)))
        assert logistic_logjac(x) == pytest.approx(expected, rel=1e-12)

    def test_stable_for_large_inputs(self):
        """Test no -inf where the naive formula underflows."""
        for x in [-1000.0, 1000.0]:
            value = logistic_logjac(x)
            assert math.isfinite(value)
            assert value == pytest.approx(-abs(x), rel=1e-12)

    def test_symmetric(self):
        """Test the derivative of logistic is an even function."""
        for x in [0.1, 1.0, 7.5, 40.0]:
            assert logistic_logjac(x) == pytest.approx(logistic_logjac(-x))

    def test_value_at_zero(self):
        """Test log(1/4) at zero."""
        assert logistic_logjac(0.0) == pytest.approx(math.log(0.25))
