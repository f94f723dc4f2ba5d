# -*- coding: utf-8 -*-
"""Defines the OverlapAnalysis session that ties the analysis stages together.

An OverlapAnalysis is attached to one segmentation source. Each result (orientation, logical
positions, segments by position, overlap matrix, non-overlapping groups) is computed on first
request, including whatever earlier stages it needs, and then kept until reset() is called or
a new source is set. A stage that fails keeps no partial result, so asking again recomputes it.
"""

import logging

from ..config import AnalysisConfig
from .errors import InvalidSegmentRefError
from .orientation import validate_parallel
from .overlap import build_overlap_matrix, frames_for_segment, map_segments_to_positions
from .partition import partition_non_overlapping
from .positions import group_frames_by_position

logger = logging.getLogger(__name__)


class OverlapAnalysis:
    """Finds slices, co-located segments, overlapping segments and non-overlapping groups.

    Not thread-safe: one session must not be used from several threads at the same time.
    """

    def __init__(self, source=None, config=None, name=None):
        """Initialize the analysis.

        Parameters:
        -----------
        source : SegmentationSource, optional
            Segmentation to analyse. Can also be set later with set_source.
        config : AnalysisConfig, optional
            Tuning parameters. Defaults are used if None.
        name : str, optional
            Name used in log messages and the string representation
        """
        self.source = source
        self.config = config if config is not None else AnalysisConfig()
        self.name = name if name else "OverlapAnalysis"

        self._orientation = None
        self._logical_positions = None
        self._segments_by_position = None
        self._frames_for_segment = None
        self._overlap_matrix = None
        self._non_overlap_groups = None

    def set_source(self, source):
        """Replace the segmentation source and drop all cached results.

        Returns:
        --------
        self : OverlapAnalysis
            Returns self for chaining
        """
        self.source = source
        self.reset()
        return self

    def reset(self):
        """Drop all cached results, the next request recomputes from scratch."""
        self._orientation = None
        self._logical_positions = None
        self._segments_by_position = None
        self._frames_for_segment = None
        self._overlap_matrix = None
        self._non_overlap_groups = None

    def _require_source(self):
        if self.source is None:
            raise ValueError(f"No segmentation source set for '{self.name}'")
        return self.source

    def get_orientation(self):
        """Get the orientation shared by all frames.

        Returns:
        --------
        orientation : OrientationVector
        """
        if self._orientation is None:
            self._orientation = validate_parallel(self._require_source())
        return self._orientation

    def get_logical_positions(self):
        """Get the frames grouped by logical position (slice).

        Returns:
        --------
        positions : tuple of tuple of int
            Physical frame numbers per logical position, ordered along the dominant axis
        """
        if self._logical_positions is None:
            source = self._require_source()
            orientation = self.get_orientation()
            self._logical_positions = group_frames_by_position(source, orientation, self.config)
            logger.info(
                "%s: %d frames at %d logical positions", self.name, source.frame_count(), len(self._logical_positions)
            )
        return self._logical_positions

    def get_segments_at_positions(self):
        """Get the segments present at each logical position.

        Returns:
        --------
        segments_by_position : tuple of tuple of SegmentFrameRef
            One entry per logical position, sorted by (segment number, frame number)
        """
        if self._segments_by_position is None:
            positions = self.get_logical_positions()
            self._segments_by_position = map_segments_to_positions(self._require_source(), positions)
        return self._segments_by_position

    def get_frames_for_segment(self, segment_number):
        """Get the physical frames of one segment.

        Parameters:
        -----------
        segment_number : int
            Segment number (1..number of segments)

        Returns:
        --------
        frames : list of int
            Ascending physical frame numbers
        """
        if self._frames_for_segment is None:
            num_segments = self._require_source().segment_count()
        else:
            num_segments = len(self._frames_for_segment)
        if not 1 <= segment_number <= num_segments:
            logger.error("Segment number %s is out of range 1..%d", segment_number, num_segments)
            raise InvalidSegmentRefError(f"Segment number {segment_number} is out of range 1..{num_segments}")

        if self._frames_for_segment is None:
            self._frames_for_segment = frames_for_segment(self._require_source())
        return list(self._frames_for_segment[segment_number])

    def get_overlap_matrix(self):
        """Get the segment overlap matrix.

        Returns:
        --------
        matrix : OverlapMatrix
            A copy of the finalized matrix
        """
        if self._overlap_matrix is None:
            segments_by_position = self.get_segments_at_positions()
            matrix = build_overlap_matrix(self._require_source(), segments_by_position, self.config)
            logger.info("%s: %d overlapping segment pairs", self.name, len(matrix.overlapping_pairs()))
            self._overlap_matrix = matrix
        return self._overlap_matrix.copy()

    def get_non_overlap_groups(self):
        """Get groups of segments that do not overlap each other.

        Returns:
        --------
        groups : list of list of int
            Segment numbers per group, first-fit in ascending segment order
        """
        if self._non_overlap_groups is None:
            self.get_overlap_matrix()
            groups = partition_non_overlapping(self._overlap_matrix)
            logger.info("%s: %d groups of non-overlapping segments", self.name, len(groups))
            self._non_overlap_groups = groups
        return [list(group) for group in self._non_overlap_groups]

    def __str__(self):
        """String representation of the analysis."""
        source = str(self.source) if self.source is not None else "None"
        computed = [
            label
            for label, value in (
                ("positions", self._logical_positions),
                ("segments", self._segments_by_position),
                ("matrix", self._overlap_matrix),
                ("groups", self._non_overlap_groups),
            )
            if value is not None
        ]
        return f"OverlapAnalysis '{self.name}' (source: {source}, computed: {', '.join(computed) or 'nothing'})"
