# -*- coding: utf-8 -*-
"""Builds the segment overlap matrix of a segmentation volume.

Segments are first mapped to the logical positions their frames belong to. At every position,
the frames of each pair of different segments found there are compared pixel by pixel; two
segments overlap if they share a set pixel at any position. Once a pair is known to overlap
it is not compared again. Pairs that never meet at a position cannot overlap.

Frames whose pixel count is a multiple of 8 are compared on the packed bytes directly,
other frames are unpacked to one value per pixel first.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

import numpy as np
import pandas as pd

from ..config import AnalysisConfig
from .errors import (
    FrameUnavailableError,
    InconsistentFrameDataError,
    InvalidSegmentRefError,
    OverlapAnalysisError,
)
from .frames import SegmentFrameRef, unpack_binary_frame

logger = logging.getLogger(__name__)


class OverlapState(Enum):
    """State of a cell of the overlap matrix."""

    UNKNOWN = "unknown"
    NO_OVERLAP = "no_overlap"
    OVERLAP = "overlap"


class OverlapMatrix:
    """Symmetric segment x segment matrix of OverlapState cells.

    Cells are addressed with 1-based segment numbers. The diagonal is always NO_OVERLAP.
    """

    def __init__(self, num_segments):
        """Initialize all cells to UNKNOWN and the diagonal to NO_OVERLAP.

        Parameters:
        -----------
        num_segments : int
            Number of segments (matrix size)
        """
        self.num_segments = int(num_segments)
        self.cells = [[OverlapState.UNKNOWN] * self.num_segments for _ in range(self.num_segments)]
        for i in range(self.num_segments):
            self.cells[i][i] = OverlapState.NO_OVERLAP

    @property
    def segment_numbers(self):
        return list(range(1, self.num_segments + 1))

    def _check(self, segment_number):
        if not 1 <= segment_number <= self.num_segments:
            raise IndexError(f"Segment number {segment_number} out of range 1..{self.num_segments}")

    def get(self, segment_a, segment_b):
        """Return the state of the cell for two segment numbers."""
        self._check(segment_a)
        self._check(segment_b)
        return self.cells[segment_a - 1][segment_b - 1]

    def set(self, segment_a, segment_b, state):
        """Record a state for two different segments, symmetrically."""
        self._check(segment_a)
        self._check(segment_b)
        if segment_a == segment_b:
            raise ValueError(f"Cannot change the diagonal cell of segment {segment_a}")
        self.cells[segment_a - 1][segment_b - 1] = state
        self.cells[segment_b - 1][segment_a - 1] = state

    def overlaps(self, segment_a, segment_b):
        """Whether two segments are known to overlap."""
        return self.get(segment_a, segment_b) is OverlapState.OVERLAP

    def finalize(self):
        """Turn all cells still UNKNOWN into NO_OVERLAP.

        Returns:
        --------
        self : OverlapMatrix
            Returns self for chaining
        """
        for row in self.cells:
            for j, state in enumerate(row):
                if state is OverlapState.UNKNOWN:
                    row[j] = OverlapState.NO_OVERLAP
        return self

    def is_final(self):
        return all(state is not OverlapState.UNKNOWN for row in self.cells for state in row)

    def overlapping_pairs(self):
        """List the pairs (a, b) with a < b that overlap."""
        return [
            (a, b)
            for a in range(1, self.num_segments + 1)
            for b in range(a + 1, self.num_segments + 1)
            if self.cells[a - 1][b - 1] is OverlapState.OVERLAP
        ]

    def to_array(self):
        """Return the matrix as an int8 array: 1 overlap, 0 no overlap, -1 unknown."""
        codes = {OverlapState.OVERLAP: 1, OverlapState.NO_OVERLAP: 0, OverlapState.UNKNOWN: -1}
        return np.array([[codes[state] for state in row] for row in self.cells], dtype=np.int8).reshape(
            self.num_segments, self.num_segments
        )

    def to_dataframe(self):
        """Return the matrix as a DataFrame indexed by segment number on both axes."""
        labels = pd.Index(self.segment_numbers, name="segment")
        return pd.DataFrame(self.to_array(), index=labels, columns=labels.rename("other_segment"))

    def copy(self):
        new_matrix = OverlapMatrix(self.num_segments)
        new_matrix.cells = [list(row) for row in self.cells]
        return new_matrix

    def __len__(self):
        return self.num_segments

    def __eq__(self, other):
        if not isinstance(other, OverlapMatrix):
            return NotImplemented
        return self.cells == other.cells

    def __str__(self):
        """String representation of the matrix, one row per line."""
        return "\n".join(" ".join(str(v) for v in row) for row in self.to_array().tolist())


def _resolve_segment(source, frame_number, num_segments):
    segment_number = source.segment_referenced_by(frame_number)
    if segment_number is None:
        logger.error("Referenced segment number not found for frame %d, cannot add segment", frame_number)
        raise InvalidSegmentRefError(f"Referenced segment number not found for frame {frame_number}")
    segment_number = int(segment_number)
    if segment_number == 0:
        logger.error("Referenced segment number is 0 (not permitted) for frame %d", frame_number)
        raise InvalidSegmentRefError(f"Referenced segment number is 0 for frame {frame_number}")
    if segment_number < 0 or segment_number > num_segments:
        logger.error(
            "Found referenced segment number %d for frame %d but only %d segments are present",
            segment_number,
            frame_number,
            num_segments,
        )
        raise InvalidSegmentRefError(
            f"Referenced segment number {segment_number} of frame {frame_number} is out of range 1..{num_segments}"
        )
    return segment_number


def map_segments_to_positions(source, positions):
    """Collect the segments present at each logical position.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to read from
    positions : sequence of sequence of int
        Logical positions as returned by group_frames_by_position

    Returns:
    --------
    segments_by_position : tuple of tuple of SegmentFrameRef
        Per position, deduplicated references sorted by (segment number, frame number)

    Raises:
    -------
    InvalidSegmentRefError
        A frame references no segment, segment 0, or a segment beyond the declared count
    """
    num_segments = source.segment_count()
    result = []
    for frames in positions:
        refs = {SegmentFrameRef(_resolve_segment(source, f, num_segments), f) for f in frames}
        result.append(tuple(sorted(refs)))

    if logger.isEnabledFor(logging.DEBUG):
        for index, refs in enumerate(result):
            logger.debug(
                "Logical frame #%d: %s", index, ",".join(f"({r.segment_number},{r.frame_number})" for r in refs)
            )
    return tuple(result)


def frames_for_segment(source):
    """Map every segment number to the physical frames that reference it.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to read from

    Returns:
    --------
    frames : dict
        Segment number (1..N) -> ascending list of frame numbers. Segments without frames map
        to an empty list.

    Raises:
    -------
    InvalidSegmentRefError
        A frame references no segment, segment 0, or a segment beyond the declared count
    """
    num_segments = source.segment_count()
    frames = {segment_number: [] for segment_number in range(1, num_segments + 1)}
    for frame_number in range(source.frame_count()):
        frames[_resolve_segment(source, frame_number, num_segments)].append(frame_number)
    return frames


def compare_frames(data_a, data_b, rows, columns):
    """Check whether two packed binary frames share a set pixel.

    Parameters:
    -----------
    data_a, data_b : bytes-like
        Packed frames, least significant bit first
    rows : int
        Number of rows per frame
    columns : int
        Number of columns per frame

    Returns:
    --------
    overlap : bool

    Raises:
    -------
    InconsistentFrameDataError
        The frames do not have the same length
    """
    packed_a = np.frombuffer(bytes(data_a), dtype=np.uint8)
    packed_b = np.frombuffer(bytes(data_b), dtype=np.uint8)
    if packed_a.size != packed_b.size:
        raise InconsistentFrameDataError(f"Frames have different length ({packed_a.size} vs {packed_b.size} bytes)")

    if (rows * columns) % 8 == 0:
        # 8 pixels per byte, a common set bit means a common pixel
        return bool(np.any(np.bitwise_and(packed_a, packed_b)))

    pixels_a = unpack_binary_frame(packed_a, rows, columns)
    pixels_b = unpack_binary_frame(packed_b, rows, columns)
    if pixels_a.size != pixels_b.size:
        raise InconsistentFrameDataError(f"Unpacked frames have different length ({pixels_a.size} vs {pixels_b.size})")
    return bool(np.any((pixels_a != 0) & (pixels_b != 0)))


class _FrameReader:
    """Fetches pixel data from the source at most once per frame."""

    def __init__(self, source):
        self.source = source
        self.rows, self.columns = source.image_dimensions()
        self._frames = {}

    def get(self, frame_number):
        data = self._frames.get(frame_number)
        if data is None:
            data = self.source.pixel_mask(frame_number)
            if data is None:
                logger.error("Cannot access pixel data of frame %d for comparison", frame_number)
                raise FrameUnavailableError(f"Pixel data of frame {frame_number} is not available")
            self._frames[frame_number] = data
        return data

    def overlap(self, frame_a, frame_b):
        # The same frame is never considered overlapping
        if frame_a == frame_b:
            return False
        try:
            overlap = compare_frames(self.get(frame_a), self.get(frame_b), self.rows, self.columns)
        except InconsistentFrameDataError:
            logger.error("Frames %d and %d have different length, cannot compare", frame_a, frame_b)
            raise
        logger.debug("Frames %d and %d %s", frame_a, frame_b, "do overlap" if overlap else "don't overlap")
        return overlap


def frames_overlap(source, frame_a, frame_b):
    """Check whether two physical frames of a source share a set pixel.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to read from
    frame_a, frame_b : int
        Physical frame numbers

    Returns:
    --------
    overlap : bool
        Always False for the same frame number

    Raises:
    -------
    FrameUnavailableError
        Pixel data of one of the frames is not accessible
    InconsistentFrameDataError
        The frames do not have the same length
    """
    return _FrameReader(source).overlap(frame_a, frame_b)


def _comparison_plan(segments_by_position):
    """Frame pairs to compare for every unordered segment pair, in sequential comparison order.

    Every frame pair carries its (position, first index, second index) key so that errors found
    by different tasks can be ordered the way the sequential build would meet them.
    """
    plan = {}
    for index, refs in enumerate(segments_by_position):
        for i, first in enumerate(refs):
            for j in range(i + 1, len(refs)):
                second = refs[j]
                if first.segment_number == second.segment_number:
                    continue
                plan.setdefault((first.segment_number, second.segment_number), []).append(
                    ((index, i, j), first.frame_number, second.frame_number)
                )
    return plan


def _compare_pair(reader, comparisons):
    """Compare the frame pairs of one segment pair until the first overlap.

    Returns the state, and the key and error of the comparison that failed, if any.
    """
    for key, frame_a, frame_b in comparisons:
        try:
            overlap = reader.overlap(frame_a, frame_b)
        except OverlapAnalysisError as error:
            return OverlapState.UNKNOWN, (key, error)
        if overlap:
            return OverlapState.OVERLAP, None
    return OverlapState.NO_OVERLAP, None


def build_overlap_matrix(source, segments_by_position, config=None):
    """Compare co-located segments and build the finalized overlap matrix.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to read pixel data from
    segments_by_position : sequence of sequence of SegmentFrameRef
        As returned by map_segments_to_positions
    config : AnalysisConfig, optional
        n_jobs > 1 compares segment pairs in worker threads

    Returns:
    --------
    matrix : OverlapMatrix
        Finalized matrix, no UNKNOWN cells left

    Raises:
    -------
    FrameUnavailableError
        Pixel data of a frame is not accessible
    InconsistentFrameDataError
        Two compared frames have different lengths

    With several failing comparisons, the error raised is the one met first in position order,
    whether or not worker threads are used.
    """
    if config is None:
        config = AnalysisConfig()

    start = time.perf_counter()
    matrix = OverlapMatrix(source.segment_count())
    reader = _FrameReader(source)

    if config.n_jobs > 1:
        _compare_parallel(matrix, reader, segments_by_position, config.n_jobs)
    else:
        _compare_sequential(matrix, reader, segments_by_position)

    matrix.finalize()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Overlap matrix:\n%s", matrix)
    logger.debug("Building overlap matrix took %.4f s", time.perf_counter() - start)
    return matrix


def _compare_sequential(matrix, reader, segments_by_position):
    for index, refs in enumerate(segments_by_position):
        logger.debug("Comparing segments at logical frame position %d", index)
        for i, first in enumerate(refs):
            for second in refs[i + 1 :]:
                if first.segment_number == second.segment_number:
                    continue
                if matrix.overlaps(first.segment_number, second.segment_number):
                    logger.debug(
                        "Skipping frame comparison on pos #%d for segments %d and %d (already marked as overlapping)",
                        index,
                        first.segment_number,
                        second.segment_number,
                    )
                    continue
                overlap = reader.overlap(first.frame_number, second.frame_number)
                state = OverlapState.OVERLAP if overlap else OverlapState.NO_OVERLAP
                matrix.set(first.segment_number, second.segment_number, state)


def _compare_parallel(matrix, reader, segments_by_position, n_jobs):
    # Each segment pair is handled by exactly one task, which is the only writer of its cell
    plan = _comparison_plan(segments_by_position)
    logger.debug("Comparing %d segment pairs using %d threads", len(plan), n_jobs)

    def compare(pair):
        state, failure = _compare_pair(reader, plan[pair])
        if failure is None:
            matrix.set(pair[0], pair[1], state)
        return failure

    with ThreadPoolExecutor(max_workers=n_jobs) as executor:
        failures = [failure for failure in executor.map(compare, plan) if failure is not None]

    if failures:
        # raise what the sequential build would have raised first
        _, error = min(failures, key=lambda failure: failure[0])
        raise error
