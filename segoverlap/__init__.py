# -*- coding: utf-8 -*-
# segoverlap/__init__.py

"""
SegOverlap: Overlap analysis for multi-frame binary segmentations
=================================================================

SegOverlap finds out whether the segments of a multi-frame segmentation image can share a
single raster plane without ambiguity.

Key features:
- Validation that all frames are parallel
- Grouping of frames into logical positions (slices)
- Segment x segment overlap matrix from pixel masks
- Partition of segments into non-overlapping groups
- Summary tables and plots of the results
"""

__version__ = "0.1.0"
__author__ = "SegOverlap developers"

from .config import AnalysisConfig
from .core.analysis import OverlapAnalysis
from .core.errors import (
    FrameUnavailableError,
    InconsistentFrameDataError,
    IndeterminateAxisError,
    InvalidSegmentRefError,
    MissingMetadataError,
    NotParallelError,
    OverlapAnalysisError,
)
from .core.frames import FrameCoordinate, OrientationVector, SegmentFrameRef, pack_binary_frame, unpack_binary_frame
from .core.overlap import OverlapMatrix, OverlapState, compare_frames
from .io.source import FrameSegmentation, SegmentationSource
from .logging_config import setup_logging

from .stats.basic import (
    calculate_statistics_summary,
    group_summary,
    overlap_summary,
    segment_position_counts,
    segments_by_position_table,
)

from .utils.helpers import (
    create_sample_segmentation,
    format_logical_positions,
    format_non_overlapping_groups,
    format_overlap_matrix,
    format_segments_by_position,
)
from .viz.charts import plot_groups, plot_overlap_matrix, plot_segment_occupancy
