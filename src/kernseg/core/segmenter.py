"""
Kernel segmentation engine.

Pipeline per run:
    points -> partition_by_contig -> feature inputs (validated)
           -> FeatureApproximator (built once, shared read-only)
           -> per chromosome: features -> [windowed candidates]
              -> find_changepoints
           -> merge_blocks -> segments in contig order

Chromosomes are independent and fan out through an executor; results are
collected in submission order so the output never depends on the number
of workers.
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar
import logging

import numpy as np

from kernseg.core.config import SegmentationConfig
from kernseg.core.data import (
    ChromosomeBlock,
    DataPoint,
    Segment,
    SegmentationValidationError,
    SequenceDictionary,
)
from kernseg.core.dynamic_program import find_changepoints
from kernseg.core.features import FeatureApproximator, build_feature_approximator
from kernseg.core.kernels import kernel_from_bandwidth
from kernseg.core.merge import merge_blocks
from kernseg.core.partition import partition_by_contig
from kernseg.core.windows import select_candidates

logger = logging.getLogger(__name__)

T = TypeVar("T")

FeatureInputFn = Callable[[DataPoint], Any]


class SingleProcessExecutor(Executor):
    """Executor that runs tasks immediately in the calling thread."""

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> "Future[T]":
        future: Future = Future()
        if not future.set_running_or_notify_cancel():
            return future

        try:
            result = fn(*args, **kwargs)
        except KeyboardInterrupt:
            raise
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)

        return future


def get_executor(num_workers: int) -> Executor:
    """
    Executor for a number of workers.

    Args:
        num_workers: 0 runs in-process, > 0 uses a thread pool

    Returns:
        SingleProcessExecutor or ThreadPoolExecutor

    Raises:
        ValueError: If num_workers is negative
    """
    if num_workers == 0:
        return SingleProcessExecutor()
    elif num_workers > 0:
        return ThreadPoolExecutor(max_workers=num_workers)
    else:
        raise ValueError(f"{num_workers} is not a valid number of workers")


def default_feature_input(point: DataPoint) -> Any:
    """Use the point's value as its raw feature input."""
    return point.value


def feature_inputs(
    block: ChromosomeBlock,
    to_feature_input: FeatureInputFn,
) -> np.ndarray:
    """
    Raw feature inputs for a block as an (n, d) float matrix.

    Raises:
        SegmentationValidationError: If an input is non-numeric, non-finite,
            or has a different dimensionality from the others
    """
    rows = []
    width = None
    for point in block.points:
        try:
            row = np.atleast_1d(np.asarray(to_feature_input(point), dtype=np.float64))
        except (TypeError, ValueError) as e:
            raise SegmentationValidationError(
                f"Non-numeric feature input at {point.position}: {e}"
            ) from e
        if row.ndim != 1:
            raise SegmentationValidationError(
                f"Feature input at {point.position} must be a scalar or 1-D, "
                f"got shape {row.shape}"
            )
        if width is None:
            width = row.size
        elif row.size != width:
            raise SegmentationValidationError(
                f"Feature input at {point.position} has {row.size} values, "
                f"expected {width}"
            )
        if not np.all(np.isfinite(row)):
            raise SegmentationValidationError(
                f"Non-finite feature input {row.tolist()} at {point.position}"
            )
        rows.append(row)
    return np.vstack(rows)


def segment_block(
    inputs: np.ndarray,
    approximator: FeatureApproximator,
    config: SegmentationConfig,
) -> Tuple[int, ...]:
    """
    Changepoints for one chromosome.

    Args:
        inputs: (n, d) raw feature inputs
        approximator: Shared feature map
        config: Segmentation configuration

    Returns:
        Changepoint indices
    """
    n = inputs.shape[0]
    if n <= 1 or config.max_changepoints_per_chromosome == 0:
        return ()

    features = approximator.approximate(inputs)

    candidates = None
    if n > config.exhaustive_threshold:
        candidates = select_candidates(
            features, config.window_sizes, config.max_candidates
        )

    return find_changepoints(
        features,
        max_changepoints=config.max_changepoints_per_chromosome,
        linear_penalty_factor=config.linear_penalty_factor,
        log_linear_penalty_factor=config.log_linear_penalty_factor,
        candidates=candidates,
    )


class KernelSegmenter:
    """
    Segments an ordered genomic signal into runs of constant behavior.

    Attributes:
        config: Segmentation configuration
    """

    def __init__(self, config: Optional[SegmentationConfig] = None):
        self.config = config or SegmentationConfig()

    def find_changepoints(
        self,
        points: Sequence[DataPoint],
        to_feature_input: Optional[FeatureInputFn] = None,
        sequence_dictionary: Optional[SequenceDictionary] = None,
    ) -> List[Tuple[ChromosomeBlock, Tuple[int, ...]]]:
        """
        Changepoints for every chromosome.

        Args:
            points: Points grouped by contig, ascending within contig
            to_feature_input: Maps a point to its raw feature input
                (default: the point's value)
            sequence_dictionary: Optional contig order to validate against

        Returns:
            (block, changepoints) pairs in contig order
        """
        to_feature_input = to_feature_input or default_feature_input
        config = self.config

        blocks = partition_by_contig(points, sequence_dictionary)
        if not blocks:
            logger.info("No points to segment")
            return []

        inputs = [feature_inputs(block, to_feature_input) for block in blocks]
        widths = {block_inputs.shape[1] for block_inputs in inputs}
        if len(widths) > 1:
            raise SegmentationValidationError(
                f"Feature inputs differ in dimensionality across contigs: "
                f"{sorted(widths)}"
            )

        approximator = build_feature_approximator(
            kernel_from_bandwidth(config.kernel_bandwidth),
            dimension=config.approximation_dimension,
            input_dimension=widths.pop(),
            seed=config.seed,
        )

        logger.info(
            f"Segmenting {sum(len(b) for b in blocks)} points on "
            f"{len(blocks)} chromosomes ({approximator!r})"
        )

        with get_executor(config.num_workers) as executor:
            futures = [
                executor.submit(segment_block, block_inputs, approximator, config)
                for block_inputs in inputs
            ]
            changepoints = [future.result() for future in futures]

        for block, block_changepoints in zip(blocks, changepoints):
            logger.debug(
                f"Contig {block.contig}: {len(block)} points, "
                f"{len(block_changepoints)} changepoints"
            )

        return list(zip(blocks, changepoints))

    def segment(
        self,
        points: Sequence[DataPoint],
        to_feature_input: Optional[FeatureInputFn] = None,
        sequence_dictionary: Optional[SequenceDictionary] = None,
    ) -> List[Segment]:
        """
        Segment an ordered signal.

        Args:
            points: Points grouped by contig, ascending within contig
            to_feature_input: Maps a point to its raw feature input
            sequence_dictionary: Optional contig order to validate against

        Returns:
            Segments, sorted within contig, concatenated in contig order
        """
        results = self.find_changepoints(points, to_feature_input, sequence_dictionary)
        segments = merge_blocks(results)
        if results:
            logger.info(f"Found {len(segments)} segments")
        return segments


def segment_ordered_signal(
    points: Sequence[DataPoint],
    max_changepoints_per_chromosome: int,
    kernel_bandwidth: float,
    approximation_dimension: int,
    window_sizes: Sequence[int],
    linear_penalty_factor: float,
    log_linear_penalty_factor: float,
    seed: int,
    *,
    to_feature_input: Optional[FeatureInputFn] = None,
    sequence_dictionary: Optional[SequenceDictionary] = None,
    exhaustive_threshold: int = 5000,
    max_candidates: int = 2000,
    num_workers: int = 0,
) -> List[Segment]:
    """
    Segment an ordered genomic signal.

    Configuration is validated before any work starts.

    Args:
        points: Points grouped by contig, position-ascending within contig
        max_changepoints_per_chromosome: K >= 0
        kernel_bandwidth: Gaussian variance >= 0 (0 selects the linear kernel)
        approximation_dimension: Feature dimension D > 0
        window_sizes: Non-empty ascending positive window sizes
        linear_penalty_factor: alpha >= 0
        log_linear_penalty_factor: beta >= 0
        seed: Seed for the random feature basis
        to_feature_input: Maps a point to its raw feature input
            (default: the point's value)
        sequence_dictionary: Optional contig order to validate against
        exhaustive_threshold: Longest chromosome optimized exhaustively
        max_candidates: Candidate budget for longer chromosomes
        num_workers: Worker threads (0 = in-process)

    Returns:
        Segments, sorted within contig, concatenated in contig order

    Example:
        >>> from kernseg.core.data import DataPoint
        >>> pts = [DataPoint('1', i + 1, i + 1, 0.0 if i < 50 else 5.0) for i in range(100)]
        >>> segment_ordered_signal(pts, 5, 0.0, 1, [8], 1.0, 1.0, seed=0)
        [Segment(contig='1', start=1, end=50), Segment(contig='1', start=51, end=100)]
    """
    config = SegmentationConfig(
        max_changepoints_per_chromosome=max_changepoints_per_chromosome,
        kernel_bandwidth=kernel_bandwidth,
        approximation_dimension=approximation_dimension,
        window_sizes=tuple(window_sizes),
        linear_penalty_factor=linear_penalty_factor,
        log_linear_penalty_factor=log_linear_penalty_factor,
        seed=seed,
        exhaustive_threshold=exhaustive_threshold,
        max_candidates=max_candidates,
        num_workers=num_workers,
    )
    return KernelSegmenter(config).segment(
        points,
        to_feature_input=to_feature_input,
        sequence_dictionary=sequence_dictionary,
    )
