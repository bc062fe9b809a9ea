"""
Copy-ratio records.

One denoised log2 copy ratio per genomic bin.
"""

from dataclasses import dataclass
from typing import Iterable, List

from kernseg.core.data import DataPoint, SampleMetadata
from kernseg.plugins.base import RecordCollection


@dataclass(frozen=True)
class CopyRatio:
    """
    Log2 copy ratio for one genomic bin.

    Attributes:
        contig: Contig name
        start: 1-based bin start (inclusive)
        end: 1-based bin end (inclusive)
        log2_copy_ratio: Denoised log2 copy ratio
    """

    contig: str
    start: int
    end: int
    log2_copy_ratio: float

    def __post_init__(self):
        """Validate coordinates."""
        if self.start < 1 or self.end < self.start:
            raise ValueError(
                f"Invalid bin {self.contig}:{self.start}-{self.end}"
            )


class CopyRatioCollection(RecordCollection[CopyRatio]):
    """Copy ratios for one sample, grouped by contig and ascending within contig."""

    @classmethod
    def from_data_points(
        cls,
        metadata: SampleMetadata,
        points: Iterable[DataPoint],
    ) -> "CopyRatioCollection":
        """
        Build from points whose value is the log2 copy ratio.

        Args:
            metadata: Sample metadata
            points: Points carrying scalar values

        Returns:
            CopyRatioCollection
        """
        records: List[CopyRatio] = [
            CopyRatio(p.contig, p.start, p.end, float(p.value)) for p in points
        ]
        return cls(metadata=metadata, records=records)
