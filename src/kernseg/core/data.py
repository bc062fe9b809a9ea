"""Data structures for ordered genomic signals and their segmentations."""

from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple
from dataclasses import dataclass, field


class SegmentationValidationError(ValueError):
    """
    Raised when configuration or input data violate the segmenter's contract.

    Always raised before any segmentation work starts; never transient.
    """


@dataclass(frozen=True)
class DataPoint:
    """
    One observation at a genomic position.

    Attributes:
        contig: Contig (chromosome) name
        start: 1-based start position (inclusive)
        end: 1-based end position (inclusive)
        value: Opaque payload (scalar or count pair) interpreted by a
            domain adapter
    """

    contig: str
    start: int
    end: int
    value: Any = None

    def __post_init__(self):
        """Validate coordinates."""
        if self.start < 1:
            raise ValueError(
                f"start must be >= 1, got {self.start} on contig {self.contig}"
            )
        if self.end < self.start:
            raise ValueError(
                f"end ({self.end}) must be >= start ({self.start}) "
                f"on contig {self.contig}"
            )

    @property
    def position(self) -> str:
        """Human-readable position, e.g. '1:1001-1010'."""
        return f"{self.contig}:{self.start}-{self.end}"


@dataclass(frozen=True)
class ChromosomeBlock:
    """
    Maximal contiguous run of points sharing one contig.

    Attributes:
        contig: Contig name
        points: Points in input (position) order
    """

    contig: str
    points: Tuple[DataPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return f"ChromosomeBlock(contig={self.contig}, n_points={len(self.points)})"


class Segment(NamedTuple):
    """
    A segment (genomic interval) produced by the segmenter.

    Attributes:
        contig: Contig name
        start: 1-based start of the first point in the segment
        end: 1-based end of the last point in the segment
    """
    contig: str
    start: int
    end: int


@dataclass(frozen=True)
class SequenceDictionary:
    """
    Ordered contig names with optional lengths.

    Used only to validate the grouping order of input points.

    Attributes:
        contigs: Contig names in canonical order
        lengths: Optional {contig: length}
    """

    contigs: Tuple[str, ...]
    lengths: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        """Validate contig names are unique."""
        if len(set(self.contigs)) != len(self.contigs):
            raise ValueError(f"Duplicate contig names in dictionary: {self.contigs}")
        for contig, length in self.lengths.items():
            if contig not in self.contigs:
                raise ValueError(f"Length given for unknown contig {contig}")
            if length <= 0:
                raise ValueError(f"Contig {contig} has non-positive length {length}")

    @classmethod
    def from_contigs(
        cls,
        contigs: Sequence[str],
        lengths: Optional[Sequence[int]] = None,
    ) -> "SequenceDictionary":
        """
        Create from a list of contig names and, optionally, matching lengths.

        Args:
            contigs: Contig names in order
            lengths: Contig lengths, same order as contigs

        Returns:
            SequenceDictionary instance
        """
        contigs = tuple(contigs)
        if lengths is None:
            return cls(contigs=contigs)
        if len(lengths) != len(contigs):
            raise ValueError(
                f"Got {len(lengths)} lengths for {len(contigs)} contigs"
            )
        return cls(contigs=contigs, lengths=dict(zip(contigs, lengths)))

    def index(self, contig: str) -> int:
        """Position of a contig in the dictionary order."""
        return self.contigs.index(contig)

    def __contains__(self, contig: str) -> bool:
        return contig in self.contigs

    def __len__(self) -> int:
        return len(self.contigs)


@dataclass(frozen=True)
class SampleMetadata:
    """
    Sample-level metadata attached to record and segment collections.

    Attributes:
        sample_name: Sample identifier
        sequence_dictionary: Optional contig ordering for the sample
    """

    sample_name: str
    sequence_dictionary: Optional[SequenceDictionary] = None


@dataclass
class SegmentCollection:
    """
    Ordered segments plus the metadata of the collection they came from.

    Equality is by value, so a collection can be compared directly against
    an expected one.

    Attributes:
        metadata: Sample metadata
        segments: Segments, sorted within contig and concatenated in
            contig order
    """

    metadata: SampleMetadata
    segments: List[Segment]

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __getitem__(self, idx: int) -> Segment:
        return self.segments[idx]

    def contigs(self) -> List[str]:
        """Contigs in output order (each listed once)."""
        return list(dict.fromkeys(segment.contig for segment in self.segments))

    def segments_on(self, contig: str) -> List[Segment]:
        """Segments for one contig, in order."""
        return [segment for segment in self.segments if segment.contig == contig]

    def to_records(self) -> List[Dict[str, Any]]:
        """
        Flatten to a list of dicts for tabular export by callers.

        Returns:
            [{'sample': ..., 'contig': ..., 'start': ..., 'end': ...}, ...]
        """
        return [
            {
                "sample": self.metadata.sample_name,
                "contig": segment.contig,
                "start": segment.start,
                "end": segment.end,
            }
            for segment in self.segments
        ]

    def __repr__(self) -> str:
        return (
            f"SegmentCollection(sample={self.metadata.sample_name}, "
            f"n_segments={len(self.segments)}, n_contigs={len(self.contigs())})"
        )
