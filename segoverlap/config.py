# -*- coding: utf-8 -*-
"""Tuning parameters for the overlap analysis."""

from dataclasses import dataclass


@dataclass
class AnalysisConfig:
    """Configuration for an OverlapAnalysis session.

    Parameters:
    -----------
    position_tolerance : float
        Fraction of the slice thickness up to which two consecutive frames
        (in dominant-axis order) are considered to be at the same logical position.
    n_jobs : int
        Number of worker threads used to compare frames while building the
        overlap matrix. 1 runs the comparison sequentially.
    """

    position_tolerance: float = 0.01
    n_jobs: int = 1

    def __post_init__(self):
        """Validate the parameters."""
        if not self.position_tolerance > 0:
            raise ValueError(f"position_tolerance must be positive, got {self.position_tolerance}")
        if int(self.n_jobs) < 1:
            raise ValueError(f"n_jobs must be at least 1, got {self.n_jobs}")
        self.n_jobs = int(self.n_jobs)
