"""
Projection builders.

Houses builders that transform reduced buckets into renderer-facing
formats (bar series, treemap hierarchy) and the palette helpers used to
color them consistently.
"""

from .projections import ProjectionBuilder, ProjectionSet, build_projections
from .palette import assign_colors, color_for_key

__all__ = [
    "ProjectionBuilder",
    "ProjectionSet",
    "build_projections",
    "assign_colors",
    "color_for_key",
]
