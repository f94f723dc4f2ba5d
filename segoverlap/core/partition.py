# -*- coding: utf-8 -*-
"""Partitions segments into groups whose members never overlap each other.

Greedy first-fit: segments are visited in ascending order and placed into the first group
(in creation order) that holds no segment overlapping them, or into a new group. This does not
guarantee the smallest number of groups, but the result is deterministic.
"""

import logging

logger = logging.getLogger(__name__)


def partition_non_overlapping(matrix):
    """Group segments so that no two segments of a group overlap.

    Parameters:
    -----------
    matrix : OverlapMatrix
        Finalized overlap matrix

    Returns:
    --------
    groups : list of list of int
        Segment numbers per group. Every segment appears in exactly one group.
    """
    groups = [[]]
    for segment_number in matrix.segment_numbers:
        for group in groups:
            if not any(matrix.overlaps(segment_number, member) for member in group):
                group.append(segment_number)
                break
        else:
            groups.append([segment_number])

    if logger.isEnabledFor(logging.DEBUG):
        for index, group in enumerate(groups):
            logger.debug("Group #%d: %s", index, ", ".join(str(s) for s in group))
    return groups
