# -*- coding: utf-8 -*-
"""Checks that all frames of a segmentation are parallel and finds the axis slices are stacked along.

Frames can only be grouped into slices when they share one orientation. The slice normal,
the cross product of row and column direction cosines, then tells which patient coordinate
changes from slice to slice.
"""

import logging

import numpy as np

from .errors import IndeterminateAxisError, MissingMetadataError, NotParallelError
from .frames import OrientationVector

logger = logging.getLogger(__name__)


def validate_parallel(source):
    """Make sure the orientation is shared by all frames and return it.

    Parameters:
    -----------
    source : SegmentationSource
        Segmentation to check

    Returns:
    --------
    orientation : OrientationVector
        Direction cosines shared by all frames

    Raises:
    -------
    MissingMetadataError
        The volume has no frames, no orientation, or an orientation without six values
    NotParallelError
        The orientation is stored per frame
    """
    if source.frame_count() < 1:
        logger.error("Segmentation has no frames, cannot check for parallel frames")
        raise MissingMetadataError("Segmentation has no frames")

    values, per_frame = source.orientation_at(0)
    if values is None:
        logger.error("Image orientation not found, cannot check for parallel frames")
        raise MissingMetadataError("Image orientation not found")

    if per_frame:
        logger.error("Image orientation is per-frame, frames are probably not parallel")
        raise NotParallelError("Image orientation is per-frame, frames are probably not parallel")

    values = list(values)
    if len(values) != 6:
        logger.error("Image orientation has %d values instead of 6, cannot check for parallel frames", len(values))
        raise MissingMetadataError(f"Image orientation has {len(values)} values instead of 6")

    orientation = OrientationVector.from_values(values)
    logger.debug("Image orientation is shared, frames are parallel: %s", ", ".join(str(v) for v in orientation))
    return orientation


def dominant_axis(orientation):
    """Identify the coordinate that changes the most between slices.

    Parameters:
    -----------
    orientation : OrientationVector
        Shared orientation of the volume

    Returns:
    --------
    axis : int
        0, 1 or 2 for x, y or z

    Raises:
    -------
    IndeterminateAxisError
        No component of the slice normal is strictly larger than the other two
    """
    normal = np.abs(orientation.normal)
    for axis in range(3):
        others = np.delete(normal, axis)
        if np.all(normal[axis] > others):
            logger.debug("Using coordinate %d for sorting frames by position", axis)
            return axis

    logger.error("Cannot identify coordinate relevant for sorting frames by position (normal %s)", normal)
    raise IndeterminateAxisError(f"No dominant axis for slice normal {normal.tolist()}")
