"""
Simulation of piecewise-constant genomic signals.

Provides seeded synthetic copy-ratio and allelic-count data with known
changepoints, used for validation, testing, and tuning penalty factors.
"""

from typing import List, Optional, Sequence
import numpy as np

from kernseg.core.data import DataPoint


def contig_layout(
    index: int,
    points_per_contig: int,
    bin_width: int,
) -> DataPoint:
    """
    Position of the index-th simulated point.

    A new contig ('1', '2', ...) starts every points_per_contig points;
    bins of width bin_width tile each contig from position 1.
    """
    offset = index % points_per_contig
    return DataPoint(
        contig=str(index // points_per_contig + 1),
        start=offset * bin_width + 1,
        end=offset * bin_width + bin_width,
    )


def simulate_copy_ratio_steps(
    num_points: int = 1000,
    points_per_contig: int = 250,
    bin_width: int = 10,
    step_length: int = 100,
    levels: Optional[Sequence[float]] = None,
    noise_level: float = 0.1,
    rng: Optional[np.random.Generator] = None,
) -> List[DataPoint]:
    """
    Simulate a step-function signal with Gaussian noise.

    The level changes every step_length points (changepoints at
    step_length - 1, 2 * step_length - 1, ...). Contig boundaries add
    further changepoints.

    Args:
        num_points: Total number of points
        points_per_contig: Points per contig
        bin_width: Genomic width of each point's bin
        step_length: Points per constant level
        levels: Level for each step (default: |k - 5| for step k)
        noise_level: Standard deviation of the Gaussian noise
        rng: Random number generator (default: create new one)

    Returns:
        Points whose value is the simulated scalar

    Example:
        >>> rng = np.random.default_rng(1)
        >>> points = simulate_copy_ratio_steps(rng=rng)
        >>> len(points), points[250].contig, points[250].start
        (1000, '2', 1)
    """
    if rng is None:
        rng = np.random.default_rng()

    num_steps = -(-num_points // step_length)
    if levels is None:
        levels = [abs(k - 5) for k in range(num_steps)]
    if len(levels) < num_steps:
        raise ValueError(f"Need {num_steps} levels, got {len(levels)}")

    noise = noise_level * rng.standard_normal(num_points)

    points = []
    for i in range(num_points):
        layout = contig_layout(i, points_per_contig, bin_width)
        value = float(levels[i // step_length] + noise[i])
        points.append(DataPoint(layout.contig, layout.start, layout.end, value))
    return points


def simulate_allelic_count_steps(
    num_points: int = 10000,
    points_per_contig: int = 2500,
    step_length: int = 1000,
    minor_allele_fractions: Sequence[float] = (0.45, 0.05, 0.25),
    depth: int = 100,
    noise_level: float = 0.001,
    hom_fraction: float = 0.025,
    rng: Optional[np.random.Generator] = None,
) -> List[DataPoint]:
    """
    Simulate single-base allelic counts with piecewise-constant allele fractions.

    The minor-allele fraction cycles through minor_allele_fractions every
    step_length sites. Heterozygous sites carry the minor allele on the
    alternate or reference side with equal probability; a hom_fraction of
    sites are homozygous reference or alternate.

    Args:
        num_points: Total number of sites
        points_per_contig: Sites per contig
        step_length: Sites per constant minor-allele fraction
        minor_allele_fractions: Cycle of minor-allele fractions
        depth: Total read depth per site
        noise_level: Standard deviation of the allele-fraction noise
        hom_fraction: Probability that a site is homozygous
        rng: Random number generator (default: create new one)

    Returns:
        Points whose value is the (ref_count, alt_count) pair
    """
    if rng is None:
        rng = np.random.default_rng()
    if not 0 <= hom_fraction <= 1:
        raise ValueError(f"hom_fraction must be in [0, 1], got {hom_fraction}")

    is_hom = rng.random(num_points) < hom_fraction
    flip = rng.random(num_points) < 0.5
    noise = noise_level * rng.standard_normal(num_points)

    minor = np.array([
        minor_allele_fractions[(i // step_length) % len(minor_allele_fractions)]
        for i in range(num_points)
    ])

    alt_fraction = np.where(flip, minor + noise, 1.0 - minor + noise)
    hom_alt_fraction = np.where(flip, np.abs(noise), 1.0 - np.abs(noise))
    alt_fraction = np.where(is_hom, hom_alt_fraction, alt_fraction)
    alt_fraction = np.clip(alt_fraction, 0.0, 1.0)

    ref_counts = ((1.0 - alt_fraction) * depth).astype(int)
    alt_counts = (alt_fraction * depth).astype(int)

    points = []
    for i in range(num_points):
        layout = contig_layout(i, points_per_contig, 1)
        points.append(DataPoint(
            layout.contig,
            layout.start,
            layout.end,
            (int(ref_counts[i]), int(alt_counts[i])),
        ))
    return points
