# -*- coding: utf-8 -*-
"""The stats package turns analysis results into tables and summary dictionaries."""
