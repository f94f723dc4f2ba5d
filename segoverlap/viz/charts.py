# -*- coding: utf-8 -*-
"""Visualization functions for overlap matrices, segment occupancy and segment groups."""

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..stats.basic import segments_by_position_table


def plot_overlap_matrix(analysis, figsize=(8, 7), cmap="Reds", annotate=None):
    """Plot the segment overlap matrix as a heatmap.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read the overlap matrix from
    figsize : tuple
        Figure size
    cmap : str
        Colormap for the cells
    annotate : bool, optional
        Whether to write the cell values. By default only for up to 20 segments.

    Returns:
    --------
    fig : matplotlib.figure.Figure
        Figure object
    """
    data = analysis.get_overlap_matrix().to_dataframe()
    if annotate is None:
        annotate = len(data) <= 20

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(data, ax=ax, cmap=cmap, vmin=0, vmax=1, cbar=False, square=True, annot=annotate, linewidths=0.5)

    ax.set_title("Segment Overlap")
    ax.set_xlabel("Segment")
    ax.set_ylabel("Segment")

    return fig


def plot_segment_occupancy(analysis, figsize=(12, 6), cmap="viridis"):
    """Plot which segments are present at which logical position.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read the segments by position from
    figsize : tuple
        Figure size
    cmap : str
        Colormap for the frame counts

    Returns:
    --------
    fig : matplotlib.figure.Figure
        Figure object
    """
    table = segments_by_position_table(analysis)
    num_positions = len(analysis.get_logical_positions())
    num_segments = analysis.source.segment_count()

    occupancy = (
        table.pivot_table(index="segment_number", columns="position", values="frame_number", aggfunc="count")
        .reindex(index=range(1, num_segments + 1), columns=range(num_positions))
        .fillna(0)
    )

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(occupancy, ax=ax, cmap=cmap, cbar_kws={"label": "Frames"})

    ax.set_title("Segments by Logical Position")
    ax.set_xlabel("Logical position")
    ax.set_ylabel("Segment")

    return fig


def plot_groups(analysis, figsize=(10, 6)):
    """Plot the size of each group of non-overlapping segments.

    Parameters:
    -----------
    analysis : OverlapAnalysis
        Analysis to read the groups from
    figsize : tuple
        Figure size

    Returns:
    --------
    fig : matplotlib.figure.Figure
        Figure object
    """
    groups = analysis.get_non_overlap_groups()
    sizes = np.array([len(group) for group in groups])
    labels = [f"Group {index}" for index in range(len(groups))]

    fig, ax = plt.subplots(figsize=figsize)
    sns.barplot(x=labels, y=sizes, ax=ax, color="steelblue")

    for index, group in enumerate(groups):
        ax.text(index, sizes[index], ", ".join(str(s) for s in group), ha="center", va="bottom", fontsize=8)

    ax.set_title("Non-overlapping Segment Groups")
    ax.set_xlabel("Group")
    ax.set_ylabel("Segments")

    plt.tight_layout()
    return fig
