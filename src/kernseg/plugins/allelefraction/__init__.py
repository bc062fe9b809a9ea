"""
Allele-fraction plugin.

Segments reference/alternate read counts at heterozygous-candidate sites
into runs of constant minor-allele fraction.
"""

from kernseg.plugins.allelefraction.records import AllelicCount, AllelicCountCollection
from kernseg.plugins.allelefraction.plugin import AlleleFractionPlugin, minor_major_fractions
from kernseg.plugins.allelefraction.segmenter import AlleleFractionKernelSegmenter

__all__ = [
    "AllelicCount",
    "AllelicCountCollection",
    "AlleleFractionPlugin",
    "AlleleFractionKernelSegmenter",
    "minor_major_fractions",
]
