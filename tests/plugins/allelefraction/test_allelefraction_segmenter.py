import math

import numpy as np
import pytest

from kernseg.core.data import (
    DataPoint,
    SampleMetadata,
    Segment,
    SegmentCollection,
    SegmentationValidationError,
)
from kernseg.core.kernels import evaluate_kernel, kernel_from_bandwidth
from kernseg.core.simulation import simulate_allelic_count_steps
from kernseg.plugins.allelefraction import (
    AlleleFractionKernelSegmenter,
    AlleleFractionPlugin,
    AllelicCount,
    AllelicCountCollection,
    minor_major_fractions,
)

EXPECTED_SPANS = {
    "1": [(1, 1000), (1001, 2000), (2001, 2500)],
    "2": [(1, 500), (501, 1500), (1501, 2500)],
    "3": [(1, 1000), (1001, 2000), (2001, 2500)],
    "4": [(1, 500), (501, 1500), (1501, 2500)],
}


def _segment(collection):
    return AlleleFractionKernelSegmenter(collection).find_segmentation(
        max_changepoints_per_chromosome=25,
        kernel_bandwidth=0.05,
        approximation_dimension=20,
        window_sizes=[8, 16, 32, 64],
        linear_penalty_factor=1.0,
        log_linear_penalty_factor=1.0,
    )


class TestAllelicCount:
    def test_fractions(self):
        count = AllelicCount("1", 10, 10, ref_count=70, alt_count=30)
        assert count.total_count == 100
        assert count.alternate_allele_fraction == pytest.approx(0.3)
        assert count.minor_allele_fraction == pytest.approx(0.3)
        flipped = AllelicCount("1", 10, 10, ref_count=30, alt_count=70)
        assert flipped.minor_allele_fraction == pytest.approx(0.3)

    def test_no_reads(self):
        count = AllelicCount("1", 10, 10, 0, 0)
        assert math.isnan(count.alternate_allele_fraction)

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="Negative count"):
            AllelicCount("1", 10, 10, -1, 5)

    def test_from_data_points(self):
        collection = AllelicCountCollection.from_data_points(
            SampleMetadata("s"), [DataPoint("1", 5, 5, (12, 8))]
        )
        assert collection[0] == AllelicCount("1", 5, 5, 12, 8)


class TestMinorMajorFractions:
    def test_symmetric_in_ref_and_alt(self):
        np.testing.assert_allclose(minor_major_fractions(80, 20), [0.2, 0.8])
        np.testing.assert_allclose(minor_major_fractions(20, 80), [0.2, 0.8])

    def test_no_reads_is_nan(self):
        assert np.all(np.isnan(minor_major_fractions(0, 0)))

    def test_gaussian_similarity_halves_bandwidth(self):
        """The pair doubles squared distance in the minor-allele fraction."""
        kernel = kernel_from_bandwidth(0.05)
        similarity = evaluate_kernel(
            kernel, minor_major_fractions(70, 30), minor_major_fractions(90, 10)
        )
        assert similarity == pytest.approx(np.exp(-(0.3 - 0.1) ** 2 / 0.05))


class TestAlleleFractionPlugin:
    def test_adapters(self):
        plugin = AlleleFractionPlugin()
        point = plugin.to_data_point(AllelicCount("2", 7, 7, 60, 40))
        assert point.value == (60, 40)
        np.testing.assert_allclose(plugin.to_feature_input(point), [0.4, 0.6])

    def test_defaults_to_gaussian_kernel(self):
        assert AlleleFractionPlugin().default_config().kernel_bandwidth == 0.025

    def test_segmenter_class(self):
        assert AlleleFractionPlugin().segmenter is AlleleFractionKernelSegmenter


class TestAlleleFractionKernelSegmenter:
    def test_heterozygous_sites_segmentation(self, four_contig_metadata):
        """Minor-allele fraction cycling 0.45, 0.05, 0.25 every 1000 sites."""
        points = simulate_allelic_count_steps(hom_fraction=0.0, rng=np.random.default_rng(1))
        collection = AllelicCountCollection.from_data_points(four_contig_metadata, points)

        segments = _segment(collection)

        expected = SegmentCollection(four_contig_metadata, [
            Segment(contig, start, end)
            for contig, spans in EXPECTED_SPANS.items()
            for start, end in spans
        ])
        assert segments == expected

    def test_homozygous_sites_tolerated(self, four_contig_metadata):
        """Scattered hom sites may shift a boundary slightly but add no segments."""
        points = simulate_allelic_count_steps(hom_fraction=0.025, rng=np.random.default_rng(1))
        collection = AllelicCountCollection.from_data_points(four_contig_metadata, points)

        segments = _segment(collection)

        for contig, spans in EXPECTED_SPANS.items():
            found = segments.segments_on(contig)
            assert len(found) == len(spans)
            for segment, (start, end) in zip(found, spans):
                assert abs(segment.start - start) <= 5
                assert abs(segment.end - end) <= 5

    def test_site_without_reads_rejected(self):
        collection = AllelicCountCollection(SampleMetadata("s"), [
            AllelicCount("1", 1, 1, 50, 50),
            AllelicCount("1", 2, 2, 0, 0),
        ])
        with pytest.raises(SegmentationValidationError, match="Non-finite"):
            _segment(collection)
