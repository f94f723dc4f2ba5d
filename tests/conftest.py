# -*- coding: utf-8 -*-
"""Shared fixtures for the segoverlap test suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from segoverlap import FrameSegmentation, create_sample_segmentation


class CountingSegmentation(FrameSegmentation):
    """FrameSegmentation that counts how often pixel data, positions and the segment count are read."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pixel_reads = 0
        self.position_reads = 0
        self.segment_count_reads = 0

    def pixel_mask(self, frame_number):
        self.pixel_reads += 1
        return super().pixel_mask(frame_number)

    def segment_count(self):
        self.segment_count_reads += 1
        return super().segment_count()

    def position_at(self, frame_number):
        self.position_reads += 1
        return super().position_at(frame_number)


@pytest.fixture
def sample_segmentation():
    """Fixture providing the synthetic four-segment sample."""
    return create_sample_segmentation()


@pytest.fixture
def counting_sample():
    """Fixture providing the sample segmentation wrapped to count reads."""
    sample = create_sample_segmentation()
    return CountingSegmentation(
        sample.frames,
        sample.rows,
        sample.columns,
        sample.segment_numbers,
        sample.positions,
        sample.orientation,
        sample.thickness,
        segment_count=sample.num_segments,
    )


@pytest.fixture
def make_volume():
    """Fixture returning a factory for small packed volumes stacked along z."""

    def _make(frames, segment_numbers, z_positions, rows=1, columns=8, **kwargs):
        kwargs.setdefault("orientation", (1.0, 0.0, 0.0, 0.0, 1.0, 0.0))
        kwargs.setdefault("slice_thickness", 1.0)
        return FrameSegmentation(
            frames,
            rows,
            columns,
            segment_numbers,
            [(0.0, 0.0, z) for z in z_positions],
            **kwargs,
        )

    return _make
