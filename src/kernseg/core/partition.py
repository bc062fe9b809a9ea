"""Split an ordered point sequence into per-chromosome blocks."""

from typing import Iterable, List, Optional
import logging

from kernseg.core.data import (
    ChromosomeBlock,
    DataPoint,
    SegmentationValidationError,
    SequenceDictionary,
)

logger = logging.getLogger(__name__)


def partition_by_contig(
    points: Iterable[DataPoint],
    sequence_dictionary: Optional[SequenceDictionary] = None,
) -> List[ChromosomeBlock]:
    """
    Group points into chromosome blocks, preserving input order.

    Changepoints never cross block boundaries. Points are not re-sorted:
    the caller guarantees grouping by contig and ascending positions.

    Args:
        points: Points grouped by contig, position-ascending within contig
        sequence_dictionary: Optional contig ordering to validate against

    Returns:
        Blocks in input order

    Raises:
        SegmentationValidationError: If a contig appears in two separate
            runs, positions go backwards or overlap within a contig, or the
            blocks disagree with the sequence dictionary
    """
    blocks: List[ChromosomeBlock] = []
    seen = set()
    current: List[DataPoint] = []

    for point in points:
        if current and point.contig == current[-1].contig:
            previous = current[-1]
            if point.start < previous.start:
                raise SegmentationValidationError(
                    f"Points are not sorted on contig {point.contig}: "
                    f"{point.position} follows {previous.position}"
                )
            if point.start <= previous.end:
                raise SegmentationValidationError(
                    f"Points overlap on contig {point.contig}: "
                    f"{point.position} overlaps {previous.position}"
                )
            current.append(point)
            continue

        if current:
            blocks.append(ChromosomeBlock(current[0].contig, tuple(current)))
        if point.contig in seen:
            raise SegmentationValidationError(
                f"Points for contig {point.contig} are not contiguous: "
                f"contig reappears at {point.position}"
            )
        seen.add(point.contig)
        current = [point]

    if current:
        blocks.append(ChromosomeBlock(current[0].contig, tuple(current)))

    if sequence_dictionary is not None:
        _validate_against_dictionary(blocks, sequence_dictionary)

    logger.debug(f"Partitioned points into {len(blocks)} chromosome blocks")
    return blocks


def _validate_against_dictionary(
    blocks: List[ChromosomeBlock],
    sequence_dictionary: SequenceDictionary,
) -> None:
    previous_index = -1
    for block in blocks:
        if block.contig not in sequence_dictionary:
            raise SegmentationValidationError(
                f"Contig {block.contig} is not in the sequence dictionary"
            )
        index = sequence_dictionary.index(block.contig)
        if index < previous_index:
            raise SegmentationValidationError(
                f"Contig {block.contig} is out of sequence-dictionary order"
            )
        previous_index = index

        length = sequence_dictionary.lengths.get(block.contig)
        if length is not None and block.points[-1].end > length:
            raise SegmentationValidationError(
                f"Point {block.points[-1].position} lies past the end of "
                f"contig {block.contig} (length {length})"
            )
