"""Convert changepoint indices back into genomic segments."""

from typing import Iterable, List, Sequence, Tuple

from kernseg.core.data import ChromosomeBlock, Segment


def merge_block(block: ChromosomeBlock, changepoints: Sequence[int]) -> List[Segment]:
    """
    Split a chromosome block at its changepoints.

    Each run of consecutive points becomes one segment spanning from the
    first point's start to the last point's end.

    Args:
        block: Chromosome block
        changepoints: Increasing indices of the last point of each
            non-final segment

    Returns:
        Segments in position order

    Example:
        >>> from kernseg.core.data import DataPoint
        >>> pts = tuple(DataPoint('1', 10 * i + 1, 10 * i + 10) for i in range(4))
        >>> merge_block(ChromosomeBlock('1', pts), [1])
        [Segment(contig='1', start=1, end=20), Segment(contig='1', start=21, end=40)]
    """
    n = len(block.points)
    if n == 0:
        return []

    ends = list(changepoints) + [n - 1]
    segments = []
    first = 0
    for last in ends:
        if not first <= last < n:
            raise ValueError(
                f"Changepoint {last} out of range for block of {n} points "
                f"on contig {block.contig}"
            )
        segments.append(Segment(
            contig=block.contig,
            start=block.points[first].start,
            end=block.points[last].end,
        ))
        first = last + 1

    return segments


def merge_blocks(
    blocks_and_changepoints: Iterable[Tuple[ChromosomeBlock, Sequence[int]]],
) -> List[Segment]:
    """
    Concatenate per-block segments in block (contig) order.

    Args:
        blocks_and_changepoints: (block, changepoints) pairs in contig order

    Returns:
        All segments
    """
    segments: List[Segment] = []
    for block, changepoints in blocks_and_changepoints:
        segments.extend(merge_block(block, changepoints))
    return segments
