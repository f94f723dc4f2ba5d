# -*- coding: utf-8 -*-
"""Exceptions raised while analysing a segmentation volume.

All of them derive from OverlapAnalysisError, which itself is a ValueError, so callers
that already guard against bad input with ``except ValueError`` keep working.
"""


class OverlapAnalysisError(ValueError):
    """Base exception for overlap analysis errors."""

    pass


class NotParallelError(OverlapAnalysisError):
    """Image orientation varies per frame, slices cannot be assumed parallel."""

    pass


class MissingMetadataError(OverlapAnalysisError):
    """A required geometric attribute (orientation, position, slice thickness) is absent."""

    pass


class IndeterminateAxisError(OverlapAnalysisError):
    """No single spatial axis dominates the slice normal."""

    pass


class InvalidSegmentRefError(OverlapAnalysisError):
    """A frame references segment 0, no segment, or a segment beyond the declared count."""

    pass


class InconsistentFrameDataError(OverlapAnalysisError):
    """Two frames that must be compared have pixel masks of different length."""

    pass


class FrameUnavailableError(OverlapAnalysisError):
    """Pixel data of a frame needed for comparison cannot be accessed."""

    pass
