# -*- coding: utf-8 -*-
"""Helpers for building sample data and printing analysis results."""

import numpy as np

from ..io.source import FrameSegmentation


def create_sample_segmentation():
    """Create a small synthetic segmentation with known overlaps.

    Four segments on 4x4 frames at three slices (z = 0, 2.5, 5 with slice thickness 2.5).
    Some positions carry a little noise, as real position values often do.

    - Segment 1: rows 0-1, columns 0-1 on all three slices
    - Segment 2: rows 1-2, columns 1-2 on slices 2 and 3, overlaps segment 1
    - Segment 3: row 3 on slices 1 and 2, overlaps nothing
    - Segment 4: rows 2-3, columns 2-3 on slice 3, overlaps segment 2

    Returns:
    --------
    segmentation : FrameSegmentation
        Eight frames, stored segment by segment
    """
    shapes = {
        1: (slice(0, 2), slice(0, 2)),
        2: (slice(1, 3), slice(1, 3)),
        3: (slice(3, 4), slice(0, 4)),
        4: (slice(2, 4), slice(2, 4)),
    }
    # (segment, z) per frame
    layout = [(1, 0.0), (1, 2.5), (1, 5.0), (2, 2.504), (2, 5.0), (3, 0.0), (3, 2.5), (4, 4.997)]

    masks = np.zeros((len(layout), 4, 4), dtype=bool)
    for frame_number, (segment_number, _) in enumerate(layout):
        masks[frame_number][shapes[segment_number]] = True

    return FrameSegmentation.from_masks(
        masks,
        segment_numbers=[segment_number for segment_number, _ in layout],
        positions=[(-100.0, -120.0, z) for _, z in layout],
        orientation=(1.0, 0.0, 0.0, 0.0, 1.0, 0.0),
        slice_thickness=2.5,
        segment_count=4,
    )


def format_logical_positions(positions):
    """Format logical positions, one line per position.

    Parameters:
    -----------
    positions : sequence of sequence of int
        Frame numbers per logical position

    Returns:
    --------
    text : str
    """
    lines = ["Frames grouped by position:"]
    for index, frames in enumerate(positions):
        lines.append(f"Logical frame #{index}: " + ", ".join(str(f) for f in frames))
    return "\n".join(lines)


def format_segments_by_position(segments_by_position):
    """Format the (segment, frame) pairs found at each logical position.

    Parameters:
    -----------
    segments_by_position : sequence of sequence of SegmentFrameRef
        References per logical position

    Returns:
    --------
    text : str
    """
    lines = ["Segments grouped by logical frame positions, (seg#,frame#):"]
    for index, refs in enumerate(segments_by_position):
        pairs = ",".join(f"({ref.segment_number},{ref.frame_number})" for ref in refs)
        lines.append(f"Logical frame #{index}: {pairs}")
    return "\n".join(lines)


def format_overlap_matrix(matrix):
    """Format an overlap matrix with segment numbers as row and column headers.

    Parameters:
    -----------
    matrix : OverlapMatrix
        Matrix to format

    Returns:
    --------
    text : str
    """
    values = matrix.to_array()
    width = max(len(str(matrix.num_segments)), 2)
    header = " " * width + " " + " ".join(str(s).rjust(width) for s in matrix.segment_numbers)
    lines = ["Overlap matrix:", header]
    for segment_number, row in zip(matrix.segment_numbers, values):
        lines.append(str(segment_number).rjust(width) + " " + " ".join(str(v).rjust(width) for v in row))
    return "\n".join(lines)


def format_non_overlapping_groups(groups):
    """Format groups of non-overlapping segments, one line per group."""
    lines = ["Non-overlapping segments:"]
    for index, group in enumerate(groups):
        lines.append(f"Group #{index}: " + ", ".join(str(s) for s in group))
    return "\n".join(lines)
