"""Shared test fixtures for KERNSEG tests."""

import numpy as np
import pytest

from kernseg.core.data import DataPoint, SampleMetadata, SequenceDictionary


@pytest.fixture
def rng():
    """Seeded random number generator."""
    return np.random.default_rng(42)


def make_points(values, contig="1", bin_width=1):
    """Adjacent bins on one contig carrying the given values."""
    return [
        DataPoint(contig, i * bin_width + 1, (i + 1) * bin_width, value)
        for i, value in enumerate(values)
    ]


@pytest.fixture
def two_level_points():
    """100 noise-free points with a level change after index 49."""
    return make_points([0.0] * 50 + [5.0] * 50)


@pytest.fixture
def four_contig_metadata():
    """Metadata for a sample on contigs '1'-'4'."""
    dictionary = SequenceDictionary.from_contigs(
        ["1", "2", "3", "4"], [10000, 10000, 10000, 10000]
    )
    return SampleMetadata("test-sample", dictionary)
