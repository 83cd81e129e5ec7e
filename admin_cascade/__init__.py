"""
Admin Cascade - cascading selection sheets from administrative boundary tables.

This package converts a country's administrative-boundary reference workbook
into a flat "choices" sheet of parent/child lists for dependent dropdowns
in survey authoring tools.
"""

__version__ = "1.0.0"
__author__ = "Data Analytics Team"
