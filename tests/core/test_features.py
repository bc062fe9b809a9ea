"""Tests for kernel feature approximation."""

import logging

import numpy as np
import pytest

from kernseg.core.data import SegmentationValidationError
from kernseg.core.features import build_feature_approximator
from kernseg.core.kernels import evaluate_kernel, kernel_from_bandwidth


class TestLinearFeatures:
    def test_identity_map(self):
        """Linear kernel features are the raw inputs."""
        fa = build_feature_approximator(kernel_from_bandwidth(0.0), 1, 1, seed=0)
        values = np.array([0.5, -1.0, 2.0])
        np.testing.assert_array_equal(fa.approximate(values), values[:, np.newaxis])
        assert fa.dimension == 1

    def test_dimension_ignored_with_warning(self, caplog):
        """Configured dimension is ignored for the linear kernel, with a warning."""
        with caplog.at_level(logging.WARNING, logger="kernseg.core.features"):
            fa = build_feature_approximator(kernel_from_bandwidth(0.0), 20, 2, seed=0)
        assert fa.dimension == 2
        assert "ignoring approximation dimension 20" in caplog.text

    def test_no_warning_when_dimensions_match(self, caplog):
        with caplog.at_level(logging.WARNING, logger="kernseg.core.features"):
            build_feature_approximator(kernel_from_bandwidth(0.0), 1, 1, seed=0)
        assert caplog.text == ""


class TestRandomFourierFeatures:
    def test_shape(self):
        fa = build_feature_approximator(kernel_from_bandwidth(0.05), 20, 2, seed=1)
        features = fa.approximate(np.array([[0.1, 0.9], [0.4, 0.6], [0.25, 0.75]]))
        assert features.shape == (3, 20)
        assert fa.dimension == 20

    def test_same_seed_bit_identical(self):
        """Same seed and configuration give bit-identical features."""
        values = np.linspace(0.0, 1.0, 50)
        kernel = kernel_from_bandwidth(0.05)
        a = build_feature_approximator(kernel, 20, 1, seed=7).approximate(values)
        b = build_feature_approximator(kernel, 20, 1, seed=7).approximate(values)
        np.testing.assert_array_equal(a, b)

    def test_different_seed_differs(self):
        values = np.linspace(0.0, 1.0, 10)
        kernel = kernel_from_bandwidth(0.05)
        a = build_feature_approximator(kernel, 20, 1, seed=1).approximate(values)
        b = build_feature_approximator(kernel, 20, 1, seed=2).approximate(values)
        assert not np.array_equal(a, b)

    def test_inner_products_approximate_kernel(self):
        """With many features, <z(x), z(y)> is close to k(x, y)."""
        kernel = kernel_from_bandwidth(0.05)
        fa = build_feature_approximator(kernel, 20000, 1, seed=3)
        x, y = 0.1, 0.3
        z = fa.approximate(np.array([x, y]))
        approx = float(z[0] @ z[1])
        assert approx == pytest.approx(evaluate_kernel(kernel, x, y), abs=0.05)
        assert float(z[0] @ z[0]) == pytest.approx(1.0, abs=0.05)

    def test_basis_is_read_only(self):
        fa = build_feature_approximator(kernel_from_bandwidth(0.05), 4, 1, seed=0)
        with pytest.raises(ValueError):
            fa.frequencies[0, 0] = 1.0

    def test_wrong_input_width_raises(self):
        fa = build_feature_approximator(kernel_from_bandwidth(0.05), 4, 2, seed=0)
        with pytest.raises(ValueError, match="column"):
            fa.approximate(np.array([0.1, 0.2]))


class TestValidation:
    def test_non_positive_dimension_raises(self):
        with pytest.raises(SegmentationValidationError, match="approximation dimension"):
            build_feature_approximator(kernel_from_bandwidth(0.05), 0, 1, seed=0)
