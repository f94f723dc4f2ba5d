# -*- coding: utf-8 -*-
"""Utility helpers: sample data and text formatting of analysis results."""
