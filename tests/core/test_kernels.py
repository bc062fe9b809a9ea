"""Tests for kernel variants."""

import numpy as np
import pytest

from kernseg.core.data import SegmentationValidationError
from kernseg.core.kernels import (
    Kernel,
    KernelKind,
    evaluate_kernel,
    kernel_from_bandwidth,
)


class TestKernelSelection:
    def test_zero_bandwidth_is_linear(self):
        """Bandwidth exactly zero selects the linear kernel."""
        kernel = kernel_from_bandwidth(0.0)
        assert kernel.kind is KernelKind.LINEAR
        assert kernel.is_linear

    def test_positive_bandwidth_is_gaussian(self):
        """Positive bandwidth selects the Gaussian kernel."""
        kernel = kernel_from_bandwidth(0.05)
        assert kernel.kind is KernelKind.GAUSSIAN
        assert kernel.bandwidth == 0.05

    @pytest.mark.parametrize("bandwidth", [-0.1, float("nan"), float("inf")])
    def test_invalid_bandwidth_raises(self, bandwidth):
        """Negative or non-finite bandwidth is a configuration error."""
        with pytest.raises(SegmentationValidationError, match="bandwidth"):
            kernel_from_bandwidth(bandwidth)

    def test_gaussian_requires_positive_bandwidth(self):
        with pytest.raises(SegmentationValidationError, match="bandwidth > 0"):
            Kernel(KernelKind.GAUSSIAN, 0.0)


class TestKernelEvaluation:
    def test_linear_is_dot_product(self):
        kernel = kernel_from_bandwidth(0.0)
        assert evaluate_kernel(kernel, [1.0, 2.0], [3.0, 4.0]) == pytest.approx(11.0)
        assert evaluate_kernel(kernel, 2.0, 3.0) == pytest.approx(6.0)

    def test_gaussian_value(self):
        """exp(-||a-b||^2 / (2 * bandwidth))."""
        kernel = kernel_from_bandwidth(0.5)
        expected = np.exp(-(0.3 ** 2) / 1.0)
        assert evaluate_kernel(kernel, 0.1, 0.4) == pytest.approx(expected)

    def test_gaussian_self_similarity_is_one(self):
        kernel = kernel_from_bandwidth(0.05)
        assert evaluate_kernel(kernel, [0.2, 0.8], [0.2, 0.8]) == pytest.approx(1.0)

    def test_symmetric(self):
        kernel = kernel_from_bandwidth(0.1)
        assert evaluate_kernel(kernel, 0.1, 0.7) == evaluate_kernel(kernel, 0.7, 0.1)

    def test_shape_mismatch_raises(self):
        kernel = kernel_from_bandwidth(0.0)
        with pytest.raises(ValueError, match="shape"):
            evaluate_kernel(kernel, [1.0, 2.0], [1.0])
