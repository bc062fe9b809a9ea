"""
Windowed scan statistics for changepoint candidate restriction.

For a window size w and split position i (split between points i-1 and i),
the scan statistic is the squared distance between the mean feature of the
w points before i and the mean feature of the w points from i on:

    s_w(i) = || mean(z[i-w:i]) - mean(z[i:i+w]) ||^2,   w <= i <= n - w

Long chromosomes use the local maxima of these statistics as the only
split positions the dynamic program may choose, which bounds the work to
roughly O(n * sum(w)) for scoring plus the DP over the candidates.
"""

from typing import Sequence
import logging

import numpy as np
from scipy.ndimage import maximum_filter1d

logger = logging.getLogger(__name__)


def windowed_scores(features: np.ndarray, window_sizes: Sequence[int]) -> np.ndarray:
    """
    Scan statistic for each window size at every split position.

    Args:
        features: (n, D) feature matrix for one chromosome
        window_sizes: Ascending positive window sizes

    Returns:
        (len(window_sizes), n + 1) array; entry [k, i] is s_w(i) for
        w = window_sizes[k], or 0 where the window does not fit
    """
    n = features.shape[0]
    scores = np.zeros((len(window_sizes), n + 1))

    cumulative = np.zeros((n + 1, features.shape[1]))
    np.cumsum(features, axis=0, out=cumulative[1:])

    for k, w in enumerate(window_sizes):
        if 2 * w > n:
            continue
        split = np.arange(w, n - w + 1)
        left = (cumulative[split] - cumulative[split - w]) / w
        right = (cumulative[split + w] - cumulative[split]) / w
        diff = left - right
        scores[k, split] = np.einsum("ij,ij->i", diff, diff)

    return scores


def combine_scores(scores: np.ndarray) -> np.ndarray:
    """Combine per-window statistics by taking the maximum over windows."""
    if scores.shape[0] == 0:
        raise ValueError("No window scores to combine")
    return scores.max(axis=0)


def select_candidates(
    features: np.ndarray,
    window_sizes: Sequence[int],
    max_candidates: int,
) -> np.ndarray:
    """
    Choose candidate split positions for the dynamic program.

    Candidates are the local maxima (within +/- w) of each window's scan
    statistic, pooled across windows, ranked by the combined statistic and
    truncated to the top max_candidates. Each kept peak also contributes
    its two neighbouring split positions.

    Args:
        features: (n, D) feature matrix for one chromosome
        window_sizes: Ascending positive window sizes
        max_candidates: Maximum number of peaks to keep (at most three
            candidates each)

    Returns:
        Sorted int array of split positions in [1, n - 1]
    """
    n = features.shape[0]
    if n < 2:
        return np.zeros(0, dtype=np.int64)

    scores = windowed_scores(features, window_sizes)
    combined = combine_scores(scores)

    is_peak = np.zeros(n + 1, dtype=bool)
    for k, w in enumerate(window_sizes):
        row = scores[k]
        local_max = maximum_filter1d(row, size=2 * w + 1, mode="constant", cval=0.0)
        is_peak |= (row > 0) & (row == local_max)

    is_peak[0] = False
    is_peak[n] = False
    peaks = np.flatnonzero(is_peak)

    if peaks.size > max_candidates:
        # stable sort keeps lower positions first among equal scores
        order = np.argsort(-combined[peaks], kind="stable")
        peaks = np.sort(peaks[order[:max_candidates]])

    # noise can move a peak one position off the true split
    neighbours = np.concatenate((peaks - 1, peaks, peaks + 1))
    candidates = np.unique(neighbours[(neighbours >= 1) & (neighbours <= n - 1)])

    logger.debug(
        f"Selected {candidates.size} candidate changepoints ({peaks.size} peaks) "
        f"from {n} points "
        f"(windows={list(window_sizes)})"
    )
    return candidates.astype(np.int64)
