"""
Penalized optimal partitioning of a feature sequence.

Segment cost of the half-open range [i, j) is its dispersion around the
segment mean in feature space:

    cost(i, j) = sum_{t in [i, j)} ||z_t - mean(z[i:j])||^2
               = sum ||z_t||^2 - ||sum z_t||^2 / (j - i)

which prefix sums give in O(D). With the linear kernel this is the
classical sum of squared deviations from the segment mean.

The optimal partition into k segments follows the recurrence

    best[1][j] = cost(0, j)
    best[k][j] = min_{i < j} best[k-1][i] + cost(i, j)

and the number of segments minimizes

    best[k][n] + alpha * (k-1) + beta * (k-1) * log(n / (k-1))

Changepoints are reported as the index of the last point of each
non-final segment (a step between points 99 and 100 is changepoint 99).
"""

from typing import Optional, Sequence, Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)


def changepoint_penalty(
    num_changepoints: int,
    num_points: int,
    linear_penalty_factor: float,
    log_linear_penalty_factor: float,
) -> float:
    """
    Penalty for a segmentation with a given number of changepoints.

    Args:
        num_changepoints: Number of changepoints c (segments - 1)
        num_points: Number of points n in the chromosome
        linear_penalty_factor: alpha
        log_linear_penalty_factor: beta

    Returns:
        alpha * c + beta * c * log(n / c), or 0 when c == 0
    """
    if num_changepoints == 0:
        return 0.0
    c = num_changepoints
    return (
        linear_penalty_factor * c
        + log_linear_penalty_factor * c * np.log(num_points / c)
    )


def segment_cost(features: np.ndarray, start: int, end: int) -> float:
    """
    Dispersion cost of features[start:end] computed directly.

    Args:
        features: (n, D) feature matrix
        start: First index (inclusive)
        end: Last index (exclusive)

    Returns:
        Sum of squared distances to the segment mean
    """
    block = features[start:end]
    if block.shape[0] == 0:
        return 0.0
    centered = block - block.mean(axis=0)
    return float(np.sum(centered * centered))


class _PrefixCosts:
    """Segment costs between boundary positions via prefix sums."""

    def __init__(self, features: np.ndarray, boundaries: np.ndarray):
        n = features.shape[0]
        sums = np.zeros((n + 1, features.shape[1]))
        np.cumsum(features, axis=0, out=sums[1:])
        squares = np.zeros(n + 1)
        np.cumsum(np.einsum("ij,ij->i", features, features), out=squares[1:])

        self.boundaries = boundaries
        self.sums = sums[boundaries]
        self.squares = squares[boundaries]

    def ending_at(self, t: int) -> np.ndarray:
        """Costs of segments [boundaries[s], boundaries[t]) for s = 0..t-1."""
        lengths = self.boundaries[t] - self.boundaries[:t]
        diff = self.sums[t] - self.sums[:t]
        cost = (self.squares[t] - self.squares[:t]) - np.einsum(
            "ij,ij->i", diff, diff
        ) / lengths
        # cancellation can leave tiny negatives
        return np.maximum(cost, 0.0)


def find_changepoints(
    features: np.ndarray,
    max_changepoints: int,
    linear_penalty_factor: float,
    log_linear_penalty_factor: float,
    candidates: Optional[Sequence[int]] = None,
) -> Tuple[int, ...]:
    """
    Find the penalized optimal changepoints of a feature sequence.

    Args:
        features: (n, D) feature matrix for one chromosome
        max_changepoints: Maximum number of changepoints K
        linear_penalty_factor: alpha >= 0
        log_linear_penalty_factor: beta >= 0
        candidates: Optional split positions (in [1, n-1]) the optimizer may
            use; default is every split position, which makes the result
            the exact optimum

    Returns:
        Increasing tuple of changepoint indices (last index of each
        non-final segment)
    """
    n = features.shape[0]
    if n <= 1 or max_changepoints == 0:
        return ()

    if candidates is None:
        splits = np.arange(1, n, dtype=np.int64)
    else:
        splits = np.unique(np.asarray(candidates, dtype=np.int64))
        if splits.size and (splits[0] < 1 or splits[-1] > n - 1):
            raise ValueError(
                f"Candidate split positions must lie in [1, {n - 1}]"
            )
    if splits.size == 0:
        return ()

    boundaries = np.concatenate(([0], splits, [n]))
    num_blocks = boundaries.size - 1
    max_segments = min(max_changepoints + 1, num_blocks)
    costs = _PrefixCosts(features, boundaries)

    # best[k, t]: optimal cost of k+1 segments covering [0, boundaries[t])
    best = np.full((max_segments, num_blocks + 1), np.inf)
    back = np.zeros((max_segments, num_blocks + 1), dtype=np.int64)
    rows = np.arange(max_segments - 1)

    for t in range(1, num_blocks + 1):
        cost = costs.ending_at(t)
        best[0, t] = cost[0]
        if max_segments > 1:
            totals = best[:-1, :t] + cost
            argmin = np.argmin(totals, axis=1)
            best[1:, t] = totals[rows, argmin]
            back[1:, t] = argmin

    penalized = np.array([
        best[k, num_blocks]
        + changepoint_penalty(k, n, linear_penalty_factor, log_linear_penalty_factor)
        for k in range(max_segments)
    ])
    # argmin returns the first minimum, i.e. the fewest changepoints on ties
    num_changepoints = int(np.argmin(penalized))

    changepoints = []
    t = num_blocks
    for k in range(num_changepoints, 0, -1):
        t = int(back[k, t])
        changepoints.append(int(boundaries[t]) - 1)

    logger.debug(
        f"Chose {num_changepoints} changepoints for {n} points "
        f"({num_blocks - 1} candidates, cost={penalized[num_changepoints]:.4f})"
    )
    return tuple(sorted(changepoints))
