"""
Tests for the shared numeric helpers: saturating response, Q10 response,
mixing index and column standardization.
"""

import numpy as np
import pytest

from kinneret.engine.numerics import (
    mixing_index,
    q10_response,
    saturating_response,
    standardize_columns,
)
from kinneret.errors import DegenerateInputError


def approx(value: float, rel_tol: float = 1e-9, abs_tol: float = 1e-12):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


# ---------------------------------------------------------------------------
# Saturating (Michaelis-Menten) response
# ---------------------------------------------------------------------------

class TestSaturatingResponse:

    def test_half_saturation(self):
        """At C = Ks the response is exactly one half."""
        assert saturating_response(0.1, 0.1) == approx(0.5)

    def test_monotonic_in_concentration(self):
        values = [saturating_response(c, 0.1) for c in np.linspace(0.0, 50.0, 200)]
        for prev, cur in zip(values, values[1:]):
            assert cur >= prev

    def test_bounded_below_one(self):
        for c in [0.0, 0.01, 1.0, 100.0, 1e6]:
            r = saturating_response(c, 0.05)
            assert 0.0 <= r < 1.0

    def test_zero_over_zero_is_zero(self):
        assert saturating_response(0.0, 0.0) == 0.0

    def test_zero_concentration_nonzero_ks(self):
        assert saturating_response(0.0, 2.0) == 0.0

    def test_negative_concentration_counts_as_absent(self):
        assert saturating_response(-0.03, 0.1) == 0.0
        assert saturating_response(-0.1, 0.1) == 0.0

    def test_zero_ks_saturates_immediately(self):
        assert saturating_response(0.5, 0.0) == approx(1.0)


# ---------------------------------------------------------------------------
# Q10 temperature response
# ---------------------------------------------------------------------------

class TestQ10Response:

    def test_at_optimum_is_one(self):
        assert q10_response(18.0, 18.0, 2.0, (5.0, 25.0)) == approx(1.0)

    def test_outside_range_is_zero(self):
        assert q10_response(4.99, 18.0, 2.0, (5.0, 25.0)) == 0.0
        assert q10_response(25.01, 18.0, 2.0, (5.0, 25.0)) == 0.0

    def test_upper_bound_value(self):
        """At T_max: 2^(0.7) × (1 - 7/13)."""
        expected = 2.0 ** 0.7 * (1.0 - 7.0 / 13.0)
        assert q10_response(25.0, 18.0, 2.0, (5.0, 25.0)) == approx(expected)

    def test_lower_bound_reaches_zero(self):
        """The wider side of the window is the normalizer, so T_min gives 0."""
        assert q10_response(5.0, 18.0, 2.0, (5.0, 25.0)) == approx(0.0)

    def test_degenerate_window(self):
        assert q10_response(20.0, 20.0, 2.0, (20.0, 20.0)) == approx(1.0)
        assert q10_response(20.5, 20.0, 2.0, (20.0, 20.0)) == 0.0


# ---------------------------------------------------------------------------
# Mixing index
# ---------------------------------------------------------------------------

class TestMixingIndex:

    def test_calm_is_zero(self):
        assert mixing_index(0.0, 10.0) == 0.0

    def test_formula(self):
        """wind² / depth / 10 = 25 / 10 / 10."""
        assert mixing_index(5.0, 10.0) == approx(0.25)

    def test_capped_at_one(self):
        assert mixing_index(20.0, 1.0) == 1.0

    def test_shallower_mixes_more(self):
        assert mixing_index(4.0, 5.0) > mixing_index(4.0, 20.0)


# ---------------------------------------------------------------------------
# Standardization
# ---------------------------------------------------------------------------

class TestStandardizeColumns:

    def setup_method(self):
        self.data = np.array([
            [1.0, 10.0],
            [2.0, 30.0],
            [4.0, 20.0],
            [5.0, 60.0],
        ])
        self.z = standardize_columns(self.data)

    def test_zero_mean(self):
        assert np.allclose(self.z.mean(axis=0), 0.0)

    def test_unit_sample_std(self):
        assert np.allclose(self.z.std(axis=0, ddof=1), 1.0)

    def test_shape_preserved(self):
        assert self.z.shape == self.data.shape

    def test_constant_column_raises(self):
        data = np.array([[1.0, 0.1], [2.0, 0.1], [3.0, 0.1]])
        with pytest.raises(DegenerateInputError, match="zero variance"):
            standardize_columns(data)

    def test_single_row_raises(self):
        with pytest.raises(DegenerateInputError, match="2 rows"):
            standardize_columns(np.array([[1.0, 2.0]]))
