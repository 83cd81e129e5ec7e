"""
Hierarchy building for the admin cascade application.

This module walks the data rows of the deepest level sheet once and
collects, for every admin level, the de-duplicated records together with
the code of their parent read from the same row.
"""

import logging
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm

from ..documents import TabularDocument
from ..exceptions import EmptyLevel, LevelIssue, OrphanRecords
from ..models import AdminRecord, HierarchyResult, LevelColumns, LevelRecords
from ..utils.data_utils import safe_string_conversion


class HierarchyBuilder:
    """
    Builds per-level record lists from a fully denormalized boundary sheet.

    Each row of the deepest level sheet repeats the codes and names of all
    its ancestors, so a record's parent is the code found in the next
    shallower level's code column on the same row.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, show_progress: bool = False):
        """
        Initialize the hierarchy builder.

        Args:
            logger: Optional logger instance
            show_progress: Display a progress bar while scanning rows
        """
        self.logger = logger or logging.getLogger(__name__)
        self.show_progress = show_progress

    def build(self, document: TabularDocument, sheet: str,
              columns: Sequence[LevelColumns]) -> HierarchyResult:
        """
        Scan rows 2..max_row and collect the records of every level.

        Levels with a missing name or code column yield no records. The
        first occurrence of a code at a level wins; later rows with the
        same code are skipped.

        Args:
            document: Source document
            sheet: Name of the deepest level sheet
            columns: Column indices per level, in level order

        Returns:
            HierarchyResult with records, orphans, scan counters and the
            OrphanRecords and EmptyLevel issues found
        """
        result = HierarchyResult(levels={column.level: LevelRecords(column.level) for column in columns})
        code_columns: Dict[int, Optional[int]] = {column.level: column.code_column for column in columns}
        active = [column for column in columns if column.is_complete]

        last_row = document.max_row(sheet)
        rows = range(2, last_row + 1)
        self.logger.info(f"Scanning {len(rows):,} data row(s) of sheet '{sheet}'")

        with tqdm(total=len(rows), desc="Building hierarchy", disable=not self.show_progress) as pbar:
            for row in rows:
                for column in active:
                    code = safe_string_conversion(document.get_cell(sheet, row, column.code_column))
                    if not code:
                        continue

                    level_records = result.levels[column.level]
                    if code in level_records:
                        result.duplicates_skipped += 1
                        continue

                    parent_code = ""
                    parent_column = code_columns.get(column.level - 1)
                    if parent_column is not None:
                        parent_code = safe_string_conversion(document.get_cell(sheet, row, parent_column))

                    level_records.add(AdminRecord(
                        level=column.level,
                        code=code,
                        label=safe_string_conversion(document.get_cell(sheet, row, column.name_column)),
                        parent_code=parent_code
                    ))

                result.rows_scanned += 1
                pbar.update(1)

        result.orphans = self.find_orphans(result)
        result.issues = self._collect_issues(result)
        return result

    def find_orphans(self, result: HierarchyResult) -> Dict[int, List[AdminRecord]]:
        """
        Find records whose parent code is not a record of the enclosing level.

        Orphans stay in the output; they are only reported.

        Args:
            result: Collected records per level

        Returns:
            Mapping of level to its orphaned records (levels without orphans omitted)
        """
        orphans = {}
        for level, records in result.levels.items():
            if level == 0 or len(records) == 0:
                continue
            parents = result.levels.get(level - 1)
            missing = [
                record for record in records
                if parents is None or record.parent_code not in parents
            ]
            if missing:
                orphans[level] = missing
        return orphans

    def _collect_issues(self, result: HierarchyResult) -> List[LevelIssue]:
        issues: List[LevelIssue] = []
        for level, records in result.orphans.items():
            issue = OrphanRecords(level, [record.code for record in records])
            issues.append(issue)
            self.logger.debug(issue.message)

        for level in result.empty_levels():
            issue = EmptyLevel(level)
            issues.append(issue)
            self.logger.warning(issue.message)

        for level, count in sorted(result.record_counts().items()):
            self.logger.debug(f"Admin level {level}: {count:,} record(s)")

        return issues
