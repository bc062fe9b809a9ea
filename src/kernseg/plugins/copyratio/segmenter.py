"""Kernel segmentation of copy-ratio collections."""

from kernseg.plugins.base import DomainKernelSegmenter
from kernseg.plugins.copyratio.plugin import CopyRatioPlugin
from kernseg.plugins.copyratio.records import CopyRatioCollection


class CopyRatioKernelSegmenter(DomainKernelSegmenter):
    """
    Segments a CopyRatioCollection.

    Example:
        >>> segments = CopyRatioKernelSegmenter(copy_ratios).find_segmentation(
        ...     max_changepoints_per_chromosome=25,
        ...     kernel_bandwidth=0.0,
        ...     approximation_dimension=20,
        ...     window_sizes=[8, 16, 32, 64],
        ...     linear_penalty_factor=2.0,
        ...     log_linear_penalty_factor=2.0,
        ... )
    """

    plugin_class = CopyRatioPlugin

    def __init__(self, copy_ratios: CopyRatioCollection):
        super().__init__(copy_ratios)
