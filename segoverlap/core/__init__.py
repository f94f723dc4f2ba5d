# -*- coding: utf-8 -*-
"""The core package holds the analysis stages of segoverlap.

Orientation validation, grouping of frames by position, the overlap matrix, the partition into
non-overlapping groups, and the OverlapAnalysis session that caches their results.
"""
