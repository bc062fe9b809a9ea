"""
KERNSEG: Kernel segmentation of genomic signals

Multiple-changepoint segmentation of ordered per-position genomic data
(copy ratios, allelic counts) using approximate kernel features and a
penalized dynamic program.
"""

__version__ = "0.1.0"

from kernseg.core.data import (
    DataPoint,
    Segment,
    SegmentCollection,
    SampleMetadata,
    SequenceDictionary,
    SegmentationValidationError,
)
from kernseg.core.config import SegmentationConfig
from kernseg.core.segmenter import KernelSegmenter, segment_ordered_signal
from kernseg.plugins.registry import plugins

__all__ = [
    "DataPoint",
    "Segment",
    "SegmentCollection",
    "SampleMetadata",
    "SequenceDictionary",
    "SegmentationValidationError",
    "SegmentationConfig",
    "KernelSegmenter",
    "segment_ordered_signal",
    "plugins",
    "__version__",
]
