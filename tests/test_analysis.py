# -*- coding: utf-8 -*-
"""Tests for the OverlapAnalysis session: end-to-end results, caching and error handling."""

import logging

import numpy as np
import pytest

from segoverlap import (
    AnalysisConfig,
    FrameSegmentation,
    InvalidSegmentRefError,
    MissingMetadataError,
    NotParallelError,
    OverlapAnalysis,
    OverlapState,
    SegmentFrameRef,
)


@pytest.fixture
def analysis(sample_segmentation):
    """Fixture providing an analysis of the sample segmentation."""
    return OverlapAnalysis(sample_segmentation, name="Sample")


def test_full_workflow(analysis):
    """Positions, segments, matrix and groups of the sample."""
    assert analysis.get_logical_positions() == ((0, 5), (1, 6, 3), (7, 2, 4))

    segments = analysis.get_segments_at_positions()
    assert segments[1] == (SegmentFrameRef(1, 1), SegmentFrameRef(2, 3), SegmentFrameRef(3, 6))

    matrix = analysis.get_overlap_matrix()
    assert matrix.overlapping_pairs() == [(1, 2), (2, 4)]
    assert matrix.get(1, 3) is OverlapState.NO_OVERLAP
    # segments 3 and 4 never share a slice
    assert matrix.get(3, 4) is OverlapState.NO_OVERLAP

    assert analysis.get_non_overlap_groups() == [[1, 3, 4], [2]]
    assert analysis.get_frames_for_segment(2) == [3, 4]


def test_overlap_scenario(make_volume):
    """Two frames at one position whose masks share a pixel."""
    volume = make_volume([bytes([0b1100]), bytes([0b1000])], [1, 2], [0.0, 0.0])
    matrix = OverlapAnalysis(volume).get_overlap_matrix()
    assert matrix.to_array().tolist() == [[0, 1], [1, 0]]


def test_no_overlap_scenario(make_volume):
    volume = make_volume([bytes([0b1100]), bytes([0b0011])], [1, 2], [0.0, 0.0])
    analysis = OverlapAnalysis(volume)
    assert analysis.get_overlap_matrix().get(1, 2) is OverlapState.NO_OVERLAP
    assert analysis.get_non_overlap_groups() == [[1, 2]]


def test_not_parallel(make_volume):
    volume = make_volume([b"\x01", b"\x01"], [1, 2], [0.0, 1.0], per_frame_orientation=True)
    analysis = OverlapAnalysis(volume)
    with pytest.raises(NotParallelError):
        analysis.get_logical_positions()
    with pytest.raises(NotParallelError):
        analysis.get_non_overlap_groups()


def test_zero_segment_reference_aborts(make_volume, caplog):
    """A zero reference is logged and raised, nothing is cached."""
    volume = make_volume([b"\x01", b"\x02"], [1, 0], [0.0, 0.0], segment_count=1)
    analysis = OverlapAnalysis(volume)
    with caplog.at_level(logging.ERROR, logger="segoverlap"):
        with pytest.raises(InvalidSegmentRefError):
            analysis.get_overlap_matrix()
    assert any("is 0" in record.getMessage() for record in caplog.records), "Zero reference was not logged."
    assert analysis._segments_by_position is None
    assert analysis._overlap_matrix is None


def test_failed_stage_is_recomputed(make_volume):
    """After fixing the source the next call recomputes from scratch."""
    volume = make_volume([b"\x01", b"\x01"], [1, 2], [0.0, 0.0], slice_thickness=None)
    analysis = OverlapAnalysis(volume)
    with pytest.raises(MissingMetadataError):
        analysis.get_logical_positions()
    assert analysis._logical_positions is None

    volume.thickness = 1.0
    assert analysis.get_logical_positions() == ((0, 1),)
    assert analysis.get_overlap_matrix().overlaps(1, 2)


def test_getters_are_memoized(counting_sample):
    """Repeated calls return identical results without reading the source again."""
    analysis = OverlapAnalysis(counting_sample)
    groups = analysis.get_non_overlap_groups()
    matrix = analysis.get_overlap_matrix()
    positions = analysis.get_logical_positions()
    pixel_reads = counting_sample.pixel_reads
    position_reads = counting_sample.position_reads

    assert analysis.get_non_overlap_groups() == groups
    assert analysis.get_overlap_matrix() == matrix
    assert analysis.get_logical_positions() is positions
    assert counting_sample.pixel_reads == pixel_reads, "Pixel data was read again."
    assert counting_sample.position_reads == position_reads, "Positions were read again."


def test_reset_forces_recomputation(counting_sample):
    analysis = OverlapAnalysis(counting_sample)
    matrix = analysis.get_overlap_matrix()
    pixel_reads = counting_sample.pixel_reads

    analysis.reset()
    assert analysis.get_overlap_matrix() == matrix
    assert counting_sample.pixel_reads == 2 * pixel_reads


def test_returned_results_do_not_change_cache(analysis):
    matrix = analysis.get_overlap_matrix()
    matrix.set(1, 2, OverlapState.NO_OVERLAP)
    groups = analysis.get_non_overlap_groups()
    groups[0].append(99)

    assert analysis.get_overlap_matrix().overlaps(1, 2)
    assert analysis.get_non_overlap_groups() == [[1, 3, 4], [2]]


def test_set_source_resets(analysis, make_volume):
    analysis.get_non_overlap_groups()
    volume = make_volume([bytes([0b1100]), bytes([0b0011])], [1, 2], [0.0, 0.0])
    analysis.set_source(volume)
    assert analysis.get_logical_positions() == ((0, 1),)
    assert analysis.get_non_overlap_groups() == [[1, 2]]


def test_parallel_session(sample_segmentation):
    sequential = OverlapAnalysis(sample_segmentation)
    parallel = OverlapAnalysis(sample_segmentation, config=AnalysisConfig(n_jobs=3))
    assert parallel.get_overlap_matrix() == sequential.get_overlap_matrix()
    assert parallel.get_non_overlap_groups() == sequential.get_non_overlap_groups()


def test_frames_for_segment_out_of_range(analysis):
    with pytest.raises(InvalidSegmentRefError):
        analysis.get_frames_for_segment(0)
    with pytest.raises(InvalidSegmentRefError):
        analysis.get_frames_for_segment(5)


def test_missing_source():
    with pytest.raises(ValueError):
        OverlapAnalysis().get_logical_positions()


def test_invalid_config():
    with pytest.raises(ValueError):
        AnalysisConfig(position_tolerance=0)
    with pytest.raises(ValueError):
        AnalysisConfig(n_jobs=0)


def test_unpacked_volume_end_to_end():
    """Frames with an odd number of pixels go through the unpacked comparison."""
    masks = np.zeros((3, 3, 3), dtype=bool)
    masks[0, 0, :] = True
    masks[1, 1, :] = True
    masks[2, 1, 1] = True
    volume = FrameSegmentation.from_masks(masks, [1, 2, 3], [(0, 0, 0), (0, 0, 0), (0, 0, 0)])
    analysis = OverlapAnalysis(volume)
    assert analysis.get_overlap_matrix().overlapping_pairs() == [(2, 3)]
    assert analysis.get_non_overlap_groups() == [[1, 2], [3]]


def test_string_representation(analysis):
    assert "nothing" in str(analysis)
    analysis.get_logical_positions()
    assert "positions" in str(analysis)


def test_frames_for_segment_uses_cached_mapping(counting_sample):
    """Once the mapping is known, lookups no longer ask the source for the segment count."""
    analysis = OverlapAnalysis(counting_sample)
    assert analysis.get_frames_for_segment(1) == [0, 1, 2]
    segment_count_reads = counting_sample.segment_count_reads

    assert analysis.get_frames_for_segment(4) == [7]
    with pytest.raises(InvalidSegmentRefError):
        analysis.get_frames_for_segment(5)
    assert counting_sample.segment_count_reads == segment_count_reads, "Segment count was read again."


def test_package_metadata():
    import segoverlap

    assert segoverlap.__version__ == "0.1.0"
    assert segoverlap.__author__
