# -*- coding: utf-8 -*-
"""Plotting of overlap matrices, segment occupancy and segment groups."""
