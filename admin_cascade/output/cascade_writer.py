"""
Cascading selection sheet writer.

This module flattens the per-level records into the ``list_name, name,
label, <prefix>0..<prefix>(N-1)`` layout survey authoring tools expect for
dependent dropdowns: one block of rows per level, separated by a blank row,
where each row names its parent in the column of the enclosing level.
"""

import logging
from typing import List, Optional

from ..documents import TabularDocument
from ..models import CascadeRow, ColumnPattern, HierarchyResult


FIXED_HEADERS = ['list_name', 'name', 'label']


class CascadeWriter:
    """Writes per-level records as a cascading selection sheet."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the cascade writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.rows_written = 0

    def header(self, pattern: ColumnPattern, deepest_level: int) -> List[str]:
        """Header row with one ancestry column per level shallower than the deepest."""
        prefix = pattern.list_prefix
        return FIXED_HEADERS + [f"{prefix}{level}" for level in range(deepest_level)]

    def build_rows(self, hierarchy: HierarchyResult, pattern: ColumnPattern,
                   deepest_level: int) -> List[Optional[CascadeRow]]:
        """
        Flatten records into output rows, level by level.

        A None entry stands for the blank separator row written between two
        level blocks.

        Args:
            hierarchy: Records per level
            pattern: Column pattern providing the list name prefix
            deepest_level: Deepest level number N

        Returns:
            Data rows in output order (header row excluded)
        """
        prefix = pattern.list_prefix
        rows: List[Optional[CascadeRow]] = []

        for level in range(deepest_level + 1):
            if level > 0:
                rows.append(None)
            for record in hierarchy.levels.get(level, []):
                parent_refs = [""] * deepest_level
                if level > 0:
                    parent_refs[level - 1] = record.parent_code
                rows.append(CascadeRow(
                    list_name=f"{prefix}{level}",
                    name=record.code,
                    label=record.label,
                    parent_refs=tuple(parent_refs)
                ))

        return rows

    def write(self, document: TabularDocument, sheet: str, hierarchy: HierarchyResult,
              pattern: ColumnPattern, deepest_level: int) -> bool:
        """
        Write the cascading selection sheet into a document.

        Args:
            document: Output document (not saved here)
            sheet: Name of the output sheet
            hierarchy: Records per level
            pattern: Column pattern providing the list name prefix
            deepest_level: Deepest level number N

        Returns:
            True when every level contributed at least one record
        """
        for col, value in enumerate(self.header(pattern, deepest_level), start=1):
            document.set_cell(sheet, 1, col, value)

        row_index = 1
        for row in self.build_rows(hierarchy, pattern, deepest_level):
            row_index += 1
            if row is None:
                continue
            for col, value in enumerate(row.to_cells(), start=1):
                if value != "":
                    document.set_cell(sheet, row_index, col, value)

        self.rows_written = document.max_row(sheet)
        self.logger.info(f"Wrote {self.rows_written:,} row(s) to sheet '{sheet}'")

        complete = all(len(hierarchy.levels.get(level, [])) > 0 for level in range(deepest_level + 1))
        if not complete:
            self.logger.warning("Not every admin level produced records; output is partial")
        return complete
