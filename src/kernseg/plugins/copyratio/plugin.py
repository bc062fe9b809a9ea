"""Copy-ratio plugin for KERNSEG."""

import numpy as np

from kernseg.core.config import SegmentationConfig
from kernseg.core.data import DataPoint
from kernseg.plugins.base import PluginBase
from kernseg.plugins.copyratio.records import CopyRatio


class CopyRatioPlugin(PluginBase):
    """
    Segments denoised log2 copy ratios.

    Each bin contributes its log2 copy ratio as a scalar feature input.
    The default kernel is linear (bandwidth 0), i.e. a classical
    piecewise-constant mean-shift cost.
    """

    @property
    def name(self) -> str:
        return "copyratio"

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def record_type(self) -> type:
        return CopyRatio

    def to_data_point(self, record: CopyRatio) -> DataPoint:
        return DataPoint(record.contig, record.start, record.end, record.log2_copy_ratio)

    def to_feature_input(self, point: DataPoint) -> np.ndarray:
        return np.array([point.value], dtype=np.float64)

    def default_config(self) -> SegmentationConfig:
        return SegmentationConfig(kernel_bandwidth=0.0)

    @property
    def segmenter(self) -> type:
        from kernseg.plugins.copyratio.segmenter import CopyRatioKernelSegmenter

        return CopyRatioKernelSegmenter
