"""Allele-fraction plugin for KERNSEG."""

import numpy as np

from kernseg.core.config import SegmentationConfig
from kernseg.core.data import DataPoint
from kernseg.plugins.base import PluginBase
from kernseg.plugins.allelefraction.records import AllelicCount


def minor_major_fractions(ref_count: int, alt_count: int) -> np.ndarray:
    """
    Feature input for a pair of allelic counts.

    Returns [m, 1 - m] with m the minor-allele fraction. The pair is
    unchanged when ref and alt are swapped, so a heterozygous site carrying
    the minor allele on either side maps to the same input. No reads gives
    NaN, which input validation rejects.

    Both coordinates move with m, so a change of m by d moves the pair by a
    squared distance of 2 * d**2. Under the Gaussian kernel this acts like a
    bandwidth of kernel_bandwidth / 2 on the minor-allele fraction alone.

    Example:
        >>> minor_major_fractions(55, 45)
        array([0.45, 0.55])
        >>> minor_major_fractions(45, 55)
        array([0.45, 0.55])
    """
    total = ref_count + alt_count
    if total == 0:
        return np.array([np.nan, np.nan])
    alt_fraction = alt_count / total
    minor = min(alt_fraction, 1.0 - alt_fraction)
    return np.array([minor, 1.0 - minor])


class AlleleFractionPlugin(PluginBase):
    """
    Segments allelic counts by minor-allele fraction.

    Each site contributes the (minor, major) allele-fraction pair as its
    feature input. The default kernel is Gaussian, so changes in the whole
    allele-fraction distribution (e.g. the balance of hom and het sites)
    are detected, not just shifts in the mean.
    """

    @property
    def name(self) -> str:
        return "allelefraction"

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def record_type(self) -> type:
        return AllelicCount

    def to_data_point(self, record: AllelicCount) -> DataPoint:
        return DataPoint(
            record.contig,
            record.start,
            record.end,
            (record.ref_count, record.alt_count),
        )

    def to_feature_input(self, point: DataPoint) -> np.ndarray:
        ref_count, alt_count = point.value
        return minor_major_fractions(ref_count, alt_count)

    def default_config(self) -> SegmentationConfig:
        return SegmentationConfig(kernel_bandwidth=0.025)

    @property
    def segmenter(self) -> type:
        from kernseg.plugins.allelefraction.segmenter import AlleleFractionKernelSegmenter

        return AlleleFractionKernelSegmenter
