# -*- coding: utf-8 -*-
"""Tests for summary tables, text formatting and plots."""

import matplotlib.pyplot as plt
import pytest

from segoverlap import (
    OverlapAnalysis,
    format_logical_positions,
    format_non_overlapping_groups,
    format_overlap_matrix,
    format_segments_by_position,
    group_summary,
    overlap_summary,
    plot_groups,
    plot_overlap_matrix,
    plot_segment_occupancy,
    segment_position_counts,
    segments_by_position_table,
)


@pytest.fixture
def analysis(sample_segmentation):
    """Fixture providing an analysis of the sample segmentation."""
    return OverlapAnalysis(sample_segmentation)


def test_segments_by_position_table(analysis):
    table = segments_by_position_table(analysis)
    assert list(table.columns) == ["position", "segment_number", "frame_number"]
    assert len(table) == 8, "Every frame should appear once."
    assert table[table["position"] == 2]["segment_number"].tolist() == [1, 2, 4]


def test_segment_position_counts(analysis):
    counts = segment_position_counts(analysis)
    assert counts.loc[1, "n_positions"] == 3
    assert counts.loc[2, "first_position"] == 1
    assert counts.loc[4, "n_frames"] == 1


def test_overlap_summary(analysis):
    summary = overlap_summary(analysis)
    assert summary["num_overlapping_pairs"] == 2
    assert summary["overlapping_pairs"] == [(1, 2), (2, 4)]
    assert summary["overlap_degree"] == {1: 1, 2: 2, 3: 0, 4: 1}
    assert summary["overlap_fraction"] == pytest.approx(2 / 6)


def test_group_summary(analysis):
    summary = group_summary(analysis)
    assert summary["num_groups"] == 2
    assert summary["group_sizes"] == [3, 1]
    assert summary["group_of_segment"][2] == 1


def test_formatting(analysis):
    assert "Logical frame #1: 1, 6, 3" in format_logical_positions(analysis.get_logical_positions())
    assert "Logical frame #0: (1,0),(3,5)" in format_segments_by_position(analysis.get_segments_at_positions())
    assert "Group #0: 1, 3, 4" in format_non_overlapping_groups(analysis.get_non_overlap_groups())

    lines = format_overlap_matrix(analysis.get_overlap_matrix()).splitlines()
    assert len(lines) == 2 + 4, "Expected a title, a header and one line per segment."
    assert lines[3].split() == ["2", "1", "0", "0", "1"]


@pytest.mark.parametrize("plot", [plot_overlap_matrix, plot_segment_occupancy, plot_groups])
def test_plots(analysis, plot):
    fig = plot(analysis)
    assert fig is not None
    assert len(fig.axes) >= 1
    plt.close(fig)
