"""
Approximate kernel feature maps.

Maps each raw observation to a fixed-length real vector z(x) such that
<z(x), z(y)> estimates k(x, y). Segment costs then only need O(n * D)
work instead of an n x n kernel matrix.

Linear kernel: the map is the identity (exact, D = raw dimensionality).
Gaussian kernel: random Fourier features (Rahimi & Recht, 2007)

    z(x) = sqrt(2 / D) * cos(x @ W + b)
    W[:, j] ~ N(0, I / bandwidth),  b[j] ~ U[0, 2*pi)

All randomness comes from a Generator seeded for the build, so the same
seed and configuration give bit-identical features.
"""

from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np

from kernseg.core.data import SegmentationValidationError
from kernseg.core.kernels import Kernel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureApproximator:
    """
    Immutable feature map shared read-only by all chromosome workers.

    Attributes:
        kernel: Kernel being approximated
        input_dimension: Dimensionality of raw feature inputs
        frequencies: (input_dimension, D) random frequencies (None if linear)
        phases: (D,) random phases (None if linear)
    """

    kernel: Kernel
    input_dimension: int
    frequencies: Optional[np.ndarray] = None
    phases: Optional[np.ndarray] = None

    def __post_init__(self):
        """Freeze the random basis."""
        if self.frequencies is not None:
            self.frequencies.setflags(write=False)
        if self.phases is not None:
            self.phases.setflags(write=False)

    @property
    def dimension(self) -> int:
        """Length D of each feature vector."""
        if self.frequencies is None:
            return self.input_dimension
        return self.frequencies.shape[1]

    def approximate(self, values: np.ndarray) -> np.ndarray:
        """
        Map raw inputs to feature vectors.

        Args:
            values: (n,) or (n, input_dimension) raw inputs

        Returns:
            (n, D) float64 feature matrix
        """
        values = np.asarray(values, dtype=np.float64)
        if values.ndim == 1:
            values = values[:, np.newaxis]
        if values.ndim != 2 or values.shape[1] != self.input_dimension:
            raise ValueError(
                f"Expected inputs with {self.input_dimension} column(s), "
                f"got shape {values.shape}"
            )

        if self.frequencies is None:
            return values.copy()

        scale = np.sqrt(2.0 / self.dimension)
        return scale * np.cos(values @ self.frequencies + self.phases)

    def __repr__(self) -> str:
        return (
            f"FeatureApproximator(kernel={self.kernel.kind.value}, "
            f"input_dimension={self.input_dimension}, dimension={self.dimension})"
        )


def build_feature_approximator(
    kernel: Kernel,
    dimension: int,
    input_dimension: int,
    seed: int,
) -> FeatureApproximator:
    """
    Build the feature map for a kernel.

    Args:
        kernel: Kernel to approximate
        dimension: Target feature dimension D (ignored for the linear kernel)
        input_dimension: Dimensionality of raw inputs
        seed: Seed for the random frequencies and phases

    Returns:
        FeatureApproximator

    Example:
        >>> from kernseg.core.kernels import kernel_from_bandwidth
        >>> fa = build_feature_approximator(kernel_from_bandwidth(0.05), 20, 1, seed=1)
        >>> fa.approximate(np.array([0.1, 0.4])).shape
        (2, 20)
    """
    if dimension <= 0:
        raise SegmentationValidationError(
            f"approximation dimension ({dimension}) must be positive"
        )
    if input_dimension <= 0:
        raise SegmentationValidationError(
            f"input dimension ({input_dimension}) must be positive"
        )

    if kernel.is_linear:
        if dimension != input_dimension:
            logger.warning(
                f"Linear kernel is represented exactly; ignoring approximation "
                f"dimension {dimension} (using {input_dimension})"
            )
        return FeatureApproximator(kernel=kernel, input_dimension=input_dimension)

    rng = np.random.default_rng(seed)
    frequencies = rng.normal(
        loc=0.0,
        scale=1.0 / np.sqrt(kernel.bandwidth),
        size=(input_dimension, dimension),
    )
    phases = rng.uniform(0.0, 2.0 * np.pi, size=dimension)

    logger.debug(
        f"Sampled {dimension} random Fourier features "
        f"(bandwidth={kernel.bandwidth}, seed={seed})"
    )
    return FeatureApproximator(
        kernel=kernel,
        input_dimension=input_dimension,
        frequencies=frequencies,
        phases=phases,
    )
