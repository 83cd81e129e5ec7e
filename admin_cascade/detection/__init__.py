"""
Detection of sheet and header conventions in boundary workbooks.

Stages run in order: the sheet selector picks the deepest level sheet, the
header inferencer derives the column pattern and locale, and the column
locator resolves each level's name and code column.
"""

from admin_cascade.detection.sheet_selector import SheetSelector
from admin_cascade.detection.header_inference import HeaderPatternInferencer
from admin_cascade.detection.column_locator import ColumnLocator

__all__ = [
    'SheetSelector',
    'HeaderPatternInferencer',
    'ColumnLocator'
]
