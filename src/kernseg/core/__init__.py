"""Core segmentation engine: kernels, features, candidates, and the dynamic program."""

from kernseg.core.data import (
    DataPoint,
    ChromosomeBlock,
    Segment,
    SegmentCollection,
    SampleMetadata,
    SequenceDictionary,
    SegmentationValidationError,
)
from kernseg.core.config import SegmentationConfig
from kernseg.core.kernels import Kernel, KernelKind, evaluate_kernel, kernel_from_bandwidth
from kernseg.core.features import FeatureApproximator, build_feature_approximator
from kernseg.core.partition import partition_by_contig
from kernseg.core.windows import windowed_scores, combine_scores, select_candidates
from kernseg.core.dynamic_program import (
    changepoint_penalty,
    find_changepoints,
    segment_cost,
)
from kernseg.core.merge import merge_block, merge_blocks
from kernseg.core.segmenter import KernelSegmenter, segment_ordered_signal

__all__ = [
    "DataPoint",
    "ChromosomeBlock",
    "Segment",
    "SegmentCollection",
    "SampleMetadata",
    "SequenceDictionary",
    "SegmentationValidationError",
    "SegmentationConfig",
    "Kernel",
    "KernelKind",
    "evaluate_kernel",
    "kernel_from_bandwidth",
    "FeatureApproximator",
    "build_feature_approximator",
    "partition_by_contig",
    "windowed_scores",
    "combine_scores",
    "select_candidates",
    "changepoint_penalty",
    "find_changepoints",
    "segment_cost",
    "merge_block",
    "merge_blocks",
    "KernelSegmenter",
    "segment_ordered_signal",
]
