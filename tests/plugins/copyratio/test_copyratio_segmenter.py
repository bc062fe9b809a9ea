import numpy as np
import pytest

from kernseg.core.data import DataPoint, SampleMetadata, Segment, SegmentCollection
from kernseg.core.simulation import simulate_copy_ratio_steps
from kernseg.plugins.copyratio import (
    CopyRatio,
    CopyRatioCollection,
    CopyRatioKernelSegmenter,
    CopyRatioPlugin,
)


@pytest.fixture
def copy_ratios(four_contig_metadata):
    points = simulate_copy_ratio_steps(rng=np.random.default_rng(1))
    return CopyRatioCollection.from_data_points(four_contig_metadata, points)


class TestCopyRatioRecords:
    def test_from_data_points(self):
        metadata = SampleMetadata("s")
        collection = CopyRatioCollection.from_data_points(
            metadata, [DataPoint("1", 1, 10, 0.5), DataPoint("1", 11, 20, -1)]
        )
        assert len(collection) == 2
        assert collection[1] == CopyRatio("1", 11, 20, -1.0)

    def test_invalid_bin_raises(self):
        with pytest.raises(ValueError, match="Invalid bin"):
            CopyRatio("1", 20, 10, 0.0)


class TestCopyRatioPlugin:
    def test_adapters(self):
        plugin = CopyRatioPlugin()
        point = plugin.to_data_point(CopyRatio("3", 101, 200, 0.25))
        assert point == DataPoint("3", 101, 200, 0.25)
        np.testing.assert_array_equal(plugin.to_feature_input(point), [0.25])

    def test_defaults_to_linear_kernel(self):
        assert CopyRatioPlugin().default_config().kernel_bandwidth == 0.0

    def test_segmenter_class(self):
        assert CopyRatioPlugin().segmenter is CopyRatioKernelSegmenter


class TestCopyRatioKernelSegmenter:
    def test_step_signal_segmentation(self, copy_ratios, four_contig_metadata):
        """Level steps every 100 bins plus contig boundaries give 12 segments."""
        segments = CopyRatioKernelSegmenter(copy_ratios).find_segmentation(
            max_changepoints_per_chromosome=25,
            kernel_bandwidth=0.0,
            approximation_dimension=20,
            window_sizes=[8, 16, 32, 64],
            linear_penalty_factor=2.0,
            log_linear_penalty_factor=2.0,
        )

        expected = SegmentCollection(four_contig_metadata, [
            Segment("1", 1, 1000),
            Segment("1", 1001, 2000),
            Segment("1", 2001, 2500),
            Segment("2", 1, 500),
            Segment("2", 501, 1500),
            Segment("2", 1501, 2500),
            Segment("3", 1, 1000),
            Segment("3", 1001, 2000),
            Segment("3", 2001, 2500),
            Segment("4", 1, 500),
            Segment("4", 501, 1500),
            Segment("4", 1501, 2500),
        ])
        assert segments == expected
        assert segments.contigs() == ["1", "2", "3", "4"]

    def test_plugin_defaults(self, copy_ratios):
        segments = CopyRatioKernelSegmenter(copy_ratios).segment()
        assert len(segments) == 12

    def test_sample_name_in_records(self, copy_ratios):
        segments = CopyRatioKernelSegmenter(copy_ratios).segment()
        records = segments.to_records()
        assert records[0] == {"sample": "test-sample", "contig": "1", "start": 1, "end": 1000}

    def test_contig_missing_from_dictionary_raises(self, copy_ratios):
        from kernseg.core.data import SegmentationValidationError, SequenceDictionary

        metadata = SampleMetadata("s", SequenceDictionary.from_contigs(["1", "2", "3"]))
        collection = CopyRatioCollection(metadata, copy_ratios.records)
        with pytest.raises(SegmentationValidationError, match="sequence dictionary"):
            CopyRatioKernelSegmenter(collection).segment()
