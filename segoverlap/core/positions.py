# -*- coding: utf-8 -*-
"""Groups physical frames into logical positions, i.e. the slices of the volume.

Frames are sorted along the dominant axis and clustered sequentially. Position values that
went through a text round trip carry a little noise, so a frame whose coordinate is within a
small fraction of the slice thickness of the previous frame is put into the same slice.
"""

import logging
import time

from ..config import AnalysisConfig
from .errors import MissingMetadataError
from .frames import FrameCoordinate
from .orientation import dominant_axis

logger = logging.getLogger(__name__)


def collect_frame_positions(source):
    """Read the position of every physical frame.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to read from

    Returns:
    --------
    coordinates : list of FrameCoordinate
        One entry per frame, in frame order

    Raises:
    -------
    MissingMetadataError
        Any frame has no position
    """
    coordinates = []
    for frame_number in range(source.frame_count()):
        position = source.position_at(frame_number)
        if position is None:
            logger.error("Image position not found for frame %d, cannot sort frames by position", frame_number)
            raise MissingMetadataError(f"Image position not found for frame {frame_number}")
        position = tuple(float(v) for v in position)
        if len(position) != 3:
            logger.error("Image position of frame %d has %d values instead of 3", frame_number, len(position))
            raise MissingMetadataError(f"Image position of frame {frame_number} is incomplete")
        coordinates.append(FrameCoordinate(frame_number, position))
    return coordinates


def group_frames_by_position(source, orientation, config=None):
    """Cluster frames into logical positions along the dominant axis.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to read from
    orientation : OrientationVector
        Shared orientation, as returned by validate_parallel
    config : AnalysisConfig, optional
        Provides the position tolerance (fraction of slice thickness, inclusive)

    Returns:
    --------
    positions : tuple of tuple of int
        Logical positions in dominant-axis order, each holding physical frame numbers

    Raises:
    -------
    MissingMetadataError
        A frame position or the slice thickness is missing
    IndeterminateAxisError
        No dominant axis can be found
    """
    if config is None:
        config = AnalysisConfig()

    start = time.perf_counter()
    coordinates = collect_frame_positions(source)
    axis = dominant_axis(orientation)

    if len(coordinates) == 1:
        positions = ((coordinates[0].frame_number,),)
        _log_positions(positions)
        return positions

    thickness = source.slice_thickness()
    if thickness is None:
        logger.error("Slice thickness not found, cannot sort frames by position")
        raise MissingMetadataError("Slice thickness not found")
    thickness = float(thickness)
    tolerance = thickness * config.position_tolerance
    logger.debug("Slice thickness is %s, frames at most %s apart are grouped", thickness, tolerance)

    ordered = sorted(coordinates, key=lambda c: (c.position[axis], c.frame_number))

    groups = [[ordered[0].frame_number]]
    for previous, current in zip(ordered, ordered[1:]):
        diff = abs(current.position[axis] - previous.position[axis])
        if diff <= tolerance:
            groups[-1].append(current.frame_number)
        else:
            groups.append([current.frame_number])

    positions = tuple(tuple(group) for group in groups)
    _log_positions(positions)
    logger.debug("Grouping frames by position took %.4f s", time.perf_counter() - start)
    return positions


def _log_positions(positions):
    if not logger.isEnabledFor(logging.DEBUG):
        return
    for index, frames in enumerate(positions):
        logger.debug("Logical frame #%d: %s", index, ", ".join(str(f) for f in frames))
