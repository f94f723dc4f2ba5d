# -*- coding: utf-8 -*-
"""The io package defines how frame data and geometry are read into the analysis.

It contains the SegmentationSource interface and an in-memory implementation.
"""
