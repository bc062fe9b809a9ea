"""Base classes for domain plugins."""

from typing import Any, Generic, List, Optional, Sequence, TypeVar
from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

import numpy as np

from kernseg.core.config import SegmentationConfig
from kernseg.core.data import DataPoint, SampleMetadata, SegmentCollection
from kernseg.core.segmenter import KernelSegmenter

logger = logging.getLogger(__name__)

R = TypeVar("R")


class PluginBase(ABC):
    """
    Base class for KERNSEG domain plugins.

    A plugin adapts one kind of genomic record to the generic engine:
    - How a record becomes a DataPoint
    - How a DataPoint becomes a raw feature input
    - Domain default configuration
    - The domain segmenter class
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Plugin name (e.g., 'copyratio', 'allelefraction')."""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Plugin version."""
        pass

    @property
    @abstractmethod
    def record_type(self) -> type:
        """Record class this plugin adapts."""
        pass

    @abstractmethod
    def to_data_point(self, record: Any) -> DataPoint:
        """Convert a domain record to a DataPoint."""
        pass

    @abstractmethod
    def to_feature_input(self, point: DataPoint) -> np.ndarray:
        """Raw feature input for a DataPoint built by to_data_point."""
        pass

    def default_config(self) -> SegmentationConfig:
        """Domain default segmentation configuration."""
        return SegmentationConfig()

    @property
    def segmenter(self) -> Optional[type]:
        """Domain segmenter class, if the plugin provides one."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name}, version={self.version})"


@dataclass
class RecordCollection(Generic[R]):
    """
    Records for one sample plus its metadata.

    Attributes:
        metadata: Sample metadata
        records: Records, grouped by contig and ascending within contig
    """

    metadata: SampleMetadata
    records: List[R]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, idx: int) -> R:
        return self.records[idx]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(sample={self.metadata.sample_name}, "
            f"n_records={len(self.records)})"
        )


class DomainKernelSegmenter:
    """
    Runs the kernel segmenter over a domain record collection.

    Subclasses set `plugin_class`.

    Attributes:
        collection: Records to segment
        plugin: Domain adapter
    """

    plugin_class: type = None

    def __init__(self, collection: RecordCollection):
        if self.plugin_class is None:
            raise TypeError(f"{self.__class__.__name__} does not define plugin_class")
        self.collection = collection
        self.plugin: PluginBase = self.plugin_class()
        self.points = [self.plugin.to_data_point(record) for record in collection]

    def find_segmentation(
        self,
        max_changepoints_per_chromosome: int,
        kernel_bandwidth: float,
        approximation_dimension: int,
        window_sizes: Sequence[int],
        linear_penalty_factor: float,
        log_linear_penalty_factor: float,
        **options,
    ) -> SegmentCollection:
        """
        Segment the collection.

        Args:
            max_changepoints_per_chromosome: K >= 0
            kernel_bandwidth: Gaussian variance >= 0 (0 selects the linear kernel)
            approximation_dimension: Feature dimension D > 0
            window_sizes: Ascending positive window sizes
            linear_penalty_factor: alpha >= 0
            log_linear_penalty_factor: beta >= 0
            **options: Other SegmentationConfig fields (seed, num_workers, ...)

        Returns:
            SegmentCollection with the collection's metadata
        """
        options.setdefault("seed", self.plugin.default_config().seed)
        config = SegmentationConfig(
            max_changepoints_per_chromosome=max_changepoints_per_chromosome,
            kernel_bandwidth=kernel_bandwidth,
            approximation_dimension=approximation_dimension,
            window_sizes=tuple(window_sizes),
            linear_penalty_factor=linear_penalty_factor,
            log_linear_penalty_factor=log_linear_penalty_factor,
            **options,
        )
        return self.segment(config)

    def segment(self, config: Optional[SegmentationConfig] = None) -> SegmentCollection:
        """Segment the collection with a full configuration (default: plugin defaults)."""
        config = config or self.plugin.default_config()
        logger.info(
            f"Segmenting {len(self.points)} {self.plugin.name} records "
            f"for sample {self.collection.metadata.sample_name}"
        )
        segments = KernelSegmenter(config).segment(
            self.points,
            to_feature_input=self.plugin.to_feature_input,
            sequence_dictionary=self.collection.metadata.sequence_dictionary,
        )
        return SegmentCollection(metadata=self.collection.metadata, segments=segments)
