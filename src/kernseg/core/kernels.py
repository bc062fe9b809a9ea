"""
Kernel functions for segmentation costs.

A kernel is a closed tagged variant: a KernelKind plus its bandwidth.
Each kind has one pure evaluation function; there is no class hierarchy.

Kinds:
    LINEAR: k(a, b) = <a, b>
        Classical mean-shift cost; selected when bandwidth == 0.
    GAUSSIAN: k(a, b) = exp(-||a - b||^2 / (2 * bandwidth))
        Nonlinear cost sensitive to changes in the whole distribution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict
import math

import numpy as np

from kernseg.core.data import SegmentationValidationError


class KernelKind(Enum):
    """Kernel variants."""
    LINEAR = "linear"
    GAUSSIAN = "gaussian"


@dataclass(frozen=True)
class Kernel:
    """
    Kernel variant and its parameter.

    Attributes:
        kind: Kernel variant
        bandwidth: Gaussian variance (0.0 for the linear kernel)
    """

    kind: KernelKind
    bandwidth: float = 0.0

    def __post_init__(self):
        """Validate bandwidth for the chosen variant."""
        if not math.isfinite(self.bandwidth) or self.bandwidth < 0:
            raise SegmentationValidationError(
                f"kernel bandwidth ({self.bandwidth}) must be finite and >= 0"
            )
        if self.kind is KernelKind.GAUSSIAN and self.bandwidth == 0:
            raise SegmentationValidationError(
                "Gaussian kernel requires bandwidth > 0"
            )
        if self.kind is KernelKind.LINEAR and self.bandwidth != 0:
            raise SegmentationValidationError(
                f"Linear kernel takes no bandwidth, got {self.bandwidth}"
            )

    @property
    def is_linear(self) -> bool:
        return self.kind is KernelKind.LINEAR


def kernel_from_bandwidth(bandwidth: float) -> Kernel:
    """
    Select the kernel variant for a configured bandwidth.

    Args:
        bandwidth: Kernel variance; exactly 0 selects the linear kernel

    Returns:
        Kernel

    Raises:
        SegmentationValidationError: If bandwidth is negative or non-finite

    Example:
        >>> kernel_from_bandwidth(0.0).kind
        <KernelKind.LINEAR: 'linear'>
        >>> kernel_from_bandwidth(0.05).kind
        <KernelKind.GAUSSIAN: 'gaussian'>
    """
    bandwidth = float(bandwidth)
    if not math.isfinite(bandwidth) or bandwidth < 0:
        raise SegmentationValidationError(
            f"kernel bandwidth ({bandwidth}) must be finite and >= 0"
        )
    if bandwidth == 0:
        return Kernel(KernelKind.LINEAR)
    return Kernel(KernelKind.GAUSSIAN, bandwidth)


def _linear(a: np.ndarray, b: np.ndarray, bandwidth: float) -> float:
    return float(np.dot(a, b))


def _gaussian(a: np.ndarray, b: np.ndarray, bandwidth: float) -> float:
    diff = a - b
    return float(np.exp(-np.dot(diff, diff) / (2.0 * bandwidth)))


_EVALUATORS: Dict[KernelKind, Callable[[np.ndarray, np.ndarray, float], float]] = {
    KernelKind.LINEAR: _linear,
    KernelKind.GAUSSIAN: _gaussian,
}


def evaluate_kernel(kernel: Kernel, a, b) -> float:
    """
    Evaluate k(a, b).

    Args:
        kernel: Kernel variant
        a: Scalar or 1-D feature input
        b: Scalar or 1-D feature input (same length as a)

    Returns:
        Kernel similarity
    """
    a = np.atleast_1d(np.asarray(a, dtype=np.float64))
    b = np.atleast_1d(np.asarray(b, dtype=np.float64))
    if a.shape != b.shape:
        raise ValueError(f"Kernel inputs differ in shape: {a.shape} vs {b.shape}")
    return _EVALUATORS[kernel.kind](a, b, kernel.bandwidth)
