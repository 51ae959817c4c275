"""
Geometry helpers for ranking.

Responsibilities:
- Planar distance over raw degrees for local ordering.
- Great-circle distance for radius filtering.
"""
