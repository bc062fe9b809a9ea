"""
Copy-ratio plugin.

Segments per-bin denoised log2 copy ratios into runs of constant
copy ratio.

Example:
    >>> from kernseg.plugins.copyratio import CopyRatioKernelSegmenter
    >>> segments = CopyRatioKernelSegmenter(copy_ratios).find_segmentation(
    ...     25, 0.0, 20, [8, 16, 32, 64], 2.0, 2.0
    ... )
"""

from kernseg.plugins.copyratio.records import CopyRatio, CopyRatioCollection
from kernseg.plugins.copyratio.plugin import CopyRatioPlugin
from kernseg.plugins.copyratio.segmenter import CopyRatioKernelSegmenter

__all__ = [
    "CopyRatio",
    "CopyRatioCollection",
    "CopyRatioPlugin",
    "CopyRatioKernelSegmenter",
]
