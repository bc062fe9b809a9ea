"""Domain plugins adapting genomic records to the segmentation engine."""

from kernseg.plugins.base import PluginBase, RecordCollection, DomainKernelSegmenter
from kernseg.plugins.registry import PluginRegistry, plugins

__all__ = [
    "PluginBase",
    "RecordCollection",
    "DomainKernelSegmenter",
    "PluginRegistry",
    "plugins",
]
