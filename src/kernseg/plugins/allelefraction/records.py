"""
Allelic-count records.

Reference and alternate read counts at one heterozygous-candidate site.
"""

from dataclasses import dataclass
from typing import Iterable, List

from kernseg.core.data import DataPoint, SampleMetadata
from kernseg.plugins.base import RecordCollection


@dataclass(frozen=True)
class AllelicCount:
    """
    Read counts supporting each allele at a site.

    Attributes:
        contig: Contig name
        start: 1-based site start (inclusive)
        end: 1-based site end (inclusive)
        ref_count: Reads supporting the reference allele
        alt_count: Reads supporting the alternate allele
    """

    contig: str
    start: int
    end: int
    ref_count: int
    alt_count: int

    def __post_init__(self):
        """Validate coordinates and counts."""
        if self.start < 1 or self.end < self.start:
            raise ValueError(
                f"Invalid site {self.contig}:{self.start}-{self.end}"
            )
        if self.ref_count < 0 or self.alt_count < 0:
            raise ValueError(
                f"Negative count at {self.contig}:{self.start} "
                f"(ref={self.ref_count}, alt={self.alt_count})"
            )

    @property
    def total_count(self) -> int:
        return self.ref_count + self.alt_count

    @property
    def alternate_allele_fraction(self) -> float:
        """alt / (ref + alt); NaN when there are no reads."""
        if self.total_count == 0:
            return float("nan")
        return self.alt_count / self.total_count

    @property
    def minor_allele_fraction(self) -> float:
        """min(f, 1 - f) for the alternate-allele fraction f."""
        f = self.alternate_allele_fraction
        return min(f, 1.0 - f)


class AllelicCountCollection(RecordCollection[AllelicCount]):
    """Allelic counts for one sample, grouped by contig and ascending within contig."""

    @classmethod
    def from_data_points(
        cls,
        metadata: SampleMetadata,
        points: Iterable[DataPoint],
    ) -> "AllelicCountCollection":
        """
        Build from points whose value is the (ref_count, alt_count) pair.

        Args:
            metadata: Sample metadata
            points: Points carrying count pairs

        Returns:
            AllelicCountCollection
        """
        records: List[AllelicCount] = [
            AllelicCount(p.contig, p.start, p.end, int(p.value[0]), int(p.value[1]))
            for p in points
        ]
        return cls(metadata=metadata, records=records)
