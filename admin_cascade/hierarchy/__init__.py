"""
Hierarchy building module for the admin cascade application.

This module turns the rows of a denormalized boundary sheet into
de-duplicated per-level records linked to their parents.
"""

from admin_cascade.hierarchy.hierarchy_builder import HierarchyBuilder

__all__ = [
    'HierarchyBuilder'
]
