# -*- coding: utf-8 -*-
"""Testing Working Document!

Just a workspace document to try the library on the synthetic sample segmentation.
"""

import logging
import os

from segoverlap import (
    AnalysisConfig,
    OverlapAnalysis,
    calculate_statistics_summary,
    create_sample_segmentation,
    format_logical_positions,
    format_non_overlapping_groups,
    format_overlap_matrix,
    format_segments_by_position,
    plot_groups,
    plot_overlap_matrix,
    plot_segment_occupancy,
    setup_logging,
)


def run_example(n_jobs=1, verbose=False):
    """Run Example."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    output_dir = "output"
    os.makedirs(output_dir, exist_ok=True)

    segmentation = create_sample_segmentation()
    print(segmentation)

    analysis = OverlapAnalysis(segmentation, config=AnalysisConfig(n_jobs=n_jobs), name="Sample")

    print("\nGrouping frames by position...")
    print(format_logical_positions(analysis.get_logical_positions()))

    print("\nCollecting segments by position...")
    print(format_segments_by_position(analysis.get_segments_at_positions()))

    print("\nBuilding overlap matrix...")
    print(format_overlap_matrix(analysis.get_overlap_matrix()))

    print("\nGrouping non-overlapping segments...")
    print(format_non_overlapping_groups(analysis.get_non_overlap_groups()))

    fig1 = plot_overlap_matrix(analysis)
    fig1.savefig(os.path.join(output_dir, "1_overlap_matrix.png"))

    fig2 = plot_segment_occupancy(analysis)
    fig2.savefig(os.path.join(output_dir, "2_segment_occupancy.png"))

    fig3 = plot_groups(analysis)
    fig3.savefig(os.path.join(output_dir, "3_groups.png"))

    calculate_statistics_summary(analysis, os.path.join(output_dir, "summary.json"))

    print(f"\nResults saved to {output_dir}")
    print(analysis)


if __name__ == "__main__":
    run_example()
