"""Kernel segmentation of allelic-count collections."""

from kernseg.plugins.base import DomainKernelSegmenter
from kernseg.plugins.allelefraction.plugin import AlleleFractionPlugin
from kernseg.plugins.allelefraction.records import AllelicCountCollection


class AlleleFractionKernelSegmenter(DomainKernelSegmenter):
    """Segments an AllelicCountCollection by minor-allele fraction."""

    plugin_class = AlleleFractionPlugin

    def __init__(self, allelic_counts: AllelicCountCollection):
        super().__init__(allelic_counts)
