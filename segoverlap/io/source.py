# -*- coding: utf-8 -*-
"""Defines where the overlap analysis reads its frame data and geometry from.

SegmentationSource is the interface a segmentation object model has to provide. Missing
attributes are reported as None; turning that into typed errors is left to the analysis.
FrameSegmentation is an in-memory implementation backed by numpy arrays, useful whenever the
frames are already decoded (and for tests and examples).
"""

from abc import ABC, abstractmethod

import numpy as np

from ..core.frames import pack_binary_frame


class SegmentationSource(ABC):
    """Read-only access to the frames and geometry of a multi-frame binary segmentation."""

    @abstractmethod
    def frame_count(self):
        """Number of physical frames."""

    @abstractmethod
    def orientation_at(self, frame_number):
        """Orientation of a frame.

        Returns:
        --------
        orientation : tuple
            (six direction cosines or None, per_frame) where per_frame tells whether the
            orientation is stored per frame instead of once for the whole volume
        """

    @abstractmethod
    def position_at(self, frame_number):
        """Position (x, y, z) of the frame's first pixel, or None if unknown."""

    @abstractmethod
    def slice_thickness(self):
        """Slice thickness of the volume, or None if unknown."""

    @abstractmethod
    def segment_count(self):
        """Number of declared segments."""

    @abstractmethod
    def segment_referenced_by(self, frame_number):
        """Segment number referenced by a frame, or None if the frame references none."""

    @abstractmethod
    def pixel_mask(self, frame_number):
        """Packed binary pixel data of a frame (bytes-like), or None if not accessible."""

    @abstractmethod
    def image_dimensions(self):
        """Frame size as (rows, columns)."""


class FrameSegmentation(SegmentationSource):
    """Segmentation held in memory as packed binary frames.

    Frames may be stored as ``None`` to model pixel data that cannot be accessed, positions and
    segment references likewise. This makes it easy to build incomplete volumes on purpose.
    """

    def __init__(
        self,
        frames,
        rows,
        columns,
        segment_numbers,
        positions,
        orientation,
        slice_thickness,
        segment_count=None,
        per_frame_orientation=False,
    ):
        """Initialize the segmentation.

        Parameters:
        -----------
        frames : list of bytes-like
            Packed binary pixel data per frame (least significant bit first)
        rows : int
            Number of rows per frame
        columns : int
            Number of columns per frame
        segment_numbers : list of int
            Segment number referenced by each frame
        positions : list of tuple
            Position (x, y, z) of each frame
        orientation : sequence of float or None
            Six direction cosines shared by all frames
        slice_thickness : float or None
            Slice thickness of the volume
        segment_count : int, optional
            Number of declared segments. If None, the largest referenced segment number is used.
        per_frame_orientation : bool
            Whether the orientation is stored per frame rather than shared
        """
        frame_total = len(frames)
        if len(segment_numbers) != frame_total:
            raise ValueError(f"Expected {frame_total} segment numbers, got {len(segment_numbers)}")
        if len(positions) != frame_total:
            raise ValueError(f"Expected {frame_total} positions, got {len(positions)}")

        self.frames = [None if f is None else np.frombuffer(bytes(f), dtype=np.uint8) for f in frames]
        self.rows = int(rows)
        self.columns = int(columns)
        self.segment_numbers = [None if s is None else int(s) for s in segment_numbers]
        self.positions = [None if p is None else tuple(float(v) for v in p) for p in positions]
        self.orientation = None if orientation is None else tuple(float(v) for v in orientation)
        self.thickness = None if slice_thickness is None else float(slice_thickness)
        self.per_frame_orientation = per_frame_orientation

        if segment_count is None:
            referenced = [s for s in self.segment_numbers if s is not None]
            segment_count = max(referenced) if referenced else 0
        self.num_segments = int(segment_count)

    @classmethod
    def from_masks(
        cls,
        masks,
        segment_numbers,
        positions,
        orientation=(1.0, 0.0, 0.0, 0.0, 1.0, 0.0),
        slice_thickness=1.0,
        segment_count=None,
        per_frame_orientation=False,
    ):
        """Create a segmentation from unpacked binary masks.

        Parameters:
        -----------
        masks : numpy.ndarray
            Array (frames, rows, columns); nonzero values are set pixels
        segment_numbers : list of int
            Segment number referenced by each frame
        positions : list of tuple
            Position (x, y, z) of each frame
        orientation : sequence of float or None
            Six direction cosines shared by all frames (axial by default)
        slice_thickness : float or None
            Slice thickness of the volume
        segment_count : int, optional
            Number of declared segments
        per_frame_orientation : bool
            Whether the orientation is stored per frame rather than shared

        Returns:
        --------
        segmentation : FrameSegmentation
        """
        masks = np.asarray(masks)
        if masks.ndim != 3:
            raise ValueError(f"Masks must have shape (frames, rows, columns), got {masks.shape}")

        _, rows, columns = masks.shape
        frames = [pack_binary_frame(mask) for mask in masks]

        return cls(
            frames,
            rows,
            columns,
            segment_numbers,
            positions,
            orientation,
            slice_thickness,
            segment_count=segment_count,
            per_frame_orientation=per_frame_orientation,
        )

    def frame_count(self):
        return len(self.frames)

    def orientation_at(self, frame_number):
        return self.orientation, self.per_frame_orientation

    def position_at(self, frame_number):
        return self.positions[frame_number]

    def slice_thickness(self):
        return self.thickness

    def segment_count(self):
        return self.num_segments

    def segment_referenced_by(self, frame_number):
        return self.segment_numbers[frame_number]

    def pixel_mask(self, frame_number):
        return self.frames[frame_number]

    def image_dimensions(self):
        return self.rows, self.columns

    def __str__(self):
        """String representation of the segmentation."""
        return (
            f"FrameSegmentation ({len(self.frames)} frames of {self.rows}x{self.columns}, "
            f"segments: {self.num_segments})"
        )
