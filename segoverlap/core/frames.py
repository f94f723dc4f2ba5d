# -*- coding: utf-8 -*-
"""Small value types shared by the analysis stages, plus bit packing of binary frames.

Binary segmentation frames are stored with one bit per pixel, least significant bit first
within each byte. pack_binary_frame and unpack_binary_frame convert between that layout and
one value per pixel.
"""

from typing import NamedTuple, Tuple

import numpy as np


class FrameCoordinate(NamedTuple):
    """Physical frame number (0-based) and its 3D position."""

    frame_number: int
    position: Tuple[float, float, float]


class SegmentFrameRef(NamedTuple):
    """A segment's presence at a physical frame.

    Ordering is by segment number first, then frame number.
    """

    segment_number: int
    frame_number: int


class OrientationVector(NamedTuple):
    """Row and column direction cosines shared by all frames of a volume."""

    row_x: float
    row_y: float
    row_z: float
    column_x: float
    column_y: float
    column_z: float

    @classmethod
    def from_values(cls, values):
        """Create an orientation vector from six numbers.

        Parameters:
        -----------
        values : sequence of float
            Row cosines (x, y, z) followed by column cosines (x, y, z)

        Returns:
        --------
        orientation : OrientationVector
        """
        values = [float(v) for v in values]
        if len(values) != 6:
            raise ValueError(f"Orientation needs 6 values, got {len(values)}")
        return cls(*values)

    @property
    def row(self):
        return np.array(self[0:3], dtype=np.float64)

    @property
    def column(self):
        return np.array(self[3:6], dtype=np.float64)

    @property
    def normal(self):
        """Slice normal, the cross product of row and column cosines."""
        return np.cross(self.row, self.column)


def pack_binary_frame(mask):
    """Pack a binary mask into bytes, 8 pixels per byte, least significant bit first.

    Parameters:
    -----------
    mask : numpy.ndarray
        Array of any shape; nonzero values are set pixels

    Returns:
    --------
    packed : bytes
        ceil(mask.size / 8) bytes
    """
    flat = np.asarray(mask).ravel() != 0
    return np.packbits(flat, bitorder="little").tobytes()


def unpack_binary_frame(data, rows, columns):
    """Unpack a packed binary frame to one uint8 value (0 or 1) per pixel.

    Parameters:
    -----------
    data : bytes-like
        Packed frame, least significant bit first
    rows : int
        Number of rows of the frame
    columns : int
        Number of columns of the frame

    Returns:
    --------
    pixels : numpy.ndarray
        1D uint8 array of length rows * columns. If the buffer holds fewer bits than that,
        only the available bits are returned.
    """
    buffer = np.frombuffer(bytes(data), dtype=np.uint8)
    count = min(int(rows) * int(columns), buffer.size * 8)
    return np.unpackbits(buffer, count=count, bitorder="little")
