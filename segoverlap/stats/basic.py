# -*- coding: utf-8 -*-
"""Tables and summary statistics over the results of an OverlapAnalysis."""

import json
import os

import pandas as pd


def segments_by_position_table(analysis):
    """List every (position, segment, frame) occurrence as a table.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read the segments by position from

    Returns:
    --------
    table : pandas.DataFrame
        Columns "position", "segment_number" and "frame_number", ordered by position
    """
    records = [
        {"position": index, "segment_number": ref.segment_number, "frame_number": ref.frame_number}
        for index, refs in enumerate(analysis.get_segments_at_positions())
        for ref in refs
    ]
    return pd.DataFrame(records, columns=["position", "segment_number", "frame_number"])


def segment_position_counts(analysis):
    """Count frames and logical positions per segment.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read from

    Returns:
    --------
    counts : pandas.DataFrame
        Indexed by segment number (all segments, also those without frames), with columns
        "n_frames", "n_positions", "first_position" and "last_position"
    """
    table = segments_by_position_table(analysis)
    segment_index = pd.Index(range(1, analysis.source.segment_count() + 1), name="segment_number")

    grouped = table.groupby("segment_number")
    counts = pd.DataFrame(
        {
            "n_frames": grouped["frame_number"].nunique(),
            "n_positions": grouped["position"].nunique(),
            "first_position": grouped["position"].min(),
            "last_position": grouped["position"].max(),
        }
    ).reindex(segment_index)

    counts[["n_frames", "n_positions"]] = counts[["n_frames", "n_positions"]].fillna(0).astype(int)
    return counts


def overlap_summary(analysis):
    """Summarize the overlap matrix.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read the overlap matrix from

    Returns:
    --------
    summary : dict
        Number of segments, overlapping pairs, their count, the fraction of all pairs that
        overlap, and per segment the number of segments it overlaps
    """
    matrix = analysis.get_overlap_matrix()
    pairs = matrix.overlapping_pairs()
    n = matrix.num_segments
    total_pairs = n * (n - 1) // 2

    degree = matrix.to_dataframe().clip(lower=0).sum(axis=1)

    return {
        "num_segments": n,
        "overlapping_pairs": pairs,
        "num_overlapping_pairs": len(pairs),
        "overlap_fraction": len(pairs) / total_pairs if total_pairs else 0.0,
        "overlap_degree": {int(k): int(v) for k, v in degree.items()},
    }


def group_summary(analysis):
    """Summarize the groups of non-overlapping segments.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read the groups from

    Returns:
    --------
    summary : dict
        Number of groups, size of each group, and the group each segment belongs to
    """
    groups = analysis.get_non_overlap_groups()
    return {
        "num_groups": len(groups),
        "group_sizes": [len(group) for group in groups],
        "group_of_segment": {s: index for index, group in enumerate(groups) for s in group},
    }


def calculate_statistics_summary(analysis, output_file=None):
    """Collect all summaries of an analysis, optionally saving them as JSON.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to summarize
    output_file : str, optional
        Path to save the summary to (as JSON)

    Returns:
    --------
    summary : dict
        Dictionary with summary statistics
    """
    positions = analysis.get_logical_positions()
    overlaps = overlap_summary(analysis)
    groups = group_summary(analysis)

    summary = {
        "num_frames": analysis.source.frame_count(),
        "num_logical_positions": len(positions),
        "frames_per_position": [len(frames) for frames in positions],
        "num_segments": overlaps["num_segments"],
        "overlapping_pairs": [list(pair) for pair in overlaps["overlapping_pairs"]],
        "overlap_fraction": overlaps["overlap_fraction"],
        "num_groups": groups["num_groups"],
        "groups": analysis.get_non_overlap_groups(),
    }

    if output_file:
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_file, "w") as f:
            json.dump(summary, f, indent=2)

    return summary
