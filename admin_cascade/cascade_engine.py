"""
Conversion orchestration engine for the admin cascade application.

This module provides the CascadeEngine class that runs the conversion
pipeline (sheet selection, header inference, column location, hierarchy
building and writing) with both documents held for the duration of a run.
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from .config import CascadeConfig, CascadeStats
from .detection import ColumnLocator, HeaderPatternInferencer, SheetSelector
from .documents import open_document
from .exceptions import EmptyLevel, LevelIssue, OrphanRecords, get_error_severity
from .hierarchy import HierarchyBuilder
from .logging_config import CascadeLogger
from .models import HeaderInference, HierarchyResult, LevelColumns, SheetSelection
from .output import CascadeWriter


@dataclass
class CascadeResult:
    """Outcome of a conversion run."""

    output_file: str
    selection: SheetSelection
    inference: HeaderInference
    columns: List[LevelColumns]
    hierarchy: HierarchyResult
    stats: CascadeStats
    complete: bool
    issues: List[LevelIssue] = field(default_factory=list)

    @property
    def empty_levels(self) -> List[int]:
        return [issue.level for issue in self.issues if isinstance(issue, EmptyLevel)]


class CascadeEngine:
    """
    Orchestrates a complete conversion run.

    The input document is opened for reading and the output document is
    created, both inside scoped blocks, so they are released on every exit
    path. The output is only saved once every stage has completed.
    """

    def __init__(self, config: CascadeConfig, logger: Optional[CascadeLogger] = None):
        """
        Initialize the CascadeEngine.

        Args:
            config: Run configuration
            logger: Optional logger instance for logging operations
        """
        self.config = config
        self.logger = logger or CascadeLogger(level=config.log_level)

        self.sheet_selector = SheetSelector(self.logger.logger)
        self.header_inferencer = HeaderPatternInferencer(self.logger.logger)
        self.column_locator = ColumnLocator(self.logger.logger)
        self.hierarchy_builder = HierarchyBuilder(
            self.logger.logger,
            show_progress=config.show_progress and config.verbose
        )
        self.writer = CascadeWriter(self.logger.logger)
        self.stats = CascadeStats()

    def run(self) -> CascadeResult:
        """
        Run the conversion from input document to saved output document.

        Returns:
            CascadeResult describing what was written and any non-fatal issues

        Raises:
            NoMatchingSheetError: If no sheet matches the inferred naming prefix
            DocumentAccessError: If a document cannot be opened
            OutputGenerationError: If the output cannot be saved
        """
        start_time = time.time()
        self.logger.log_run_start(self.config.input_file, self.config.output_file)

        with open_document(self.config.input_file, "r") as source, \
                open_document(self.config.output_file, "w",
                              sheet_name=self.config.output_sheet_name) as target:

            self.logger.log_phase_start("Sheet Selection")
            selection = self.sheet_selector.select(source.list_sheets())
            sheet = selection.sheet_name
            deepest_level = selection.deepest_level

            self.logger.log_phase_start("Header Inference")
            phase_start = time.time()
            inference = self.header_inferencer.infer(source, sheet, deepest_level)
            layout = self.column_locator.locate(source, sheet, deepest_level, inference)
            columns = layout.columns
            self.logger.log_phase_complete(
                "Header Inference",
                sum(1 for column in columns if column.is_complete),
                time.time() - phase_start
            )

            self.logger.log_phase_start("Hierarchy Building")
            phase_start = time.time()
            hierarchy = self.hierarchy_builder.build(source, sheet, columns)
            self.logger.log_phase_complete("Hierarchy Building", hierarchy.rows_scanned,
                                           time.time() - phase_start)

            self.logger.log_phase_start("Output Generation")
            phase_start = time.time()
            complete = self.writer.write(target, self.config.output_sheet_name,
                                         hierarchy, inference.pattern, deepest_level)
            target.save()
            self.logger.log_file_operation("Saved cascading sheet", self.config.output_file,
                                           self.writer.rows_written)
            self.logger.log_phase_complete("Output Generation", self.writer.rows_written,
                                           time.time() - phase_start)

        self.stats = CascadeStats(
            sheet_name=sheet,
            deepest_level=deepest_level,
            rows_scanned=hierarchy.rows_scanned,
            records_per_level=hierarchy.record_counts(),
            duplicates_skipped=hierarchy.duplicates_skipped,
            orphan_records=hierarchy.orphan_count(),
            rows_written=self.writer.rows_written,
            processing_time=time.time() - start_time
        )
        self.logger.log_level_summary(self.stats.records_per_level)
        self.logger.log_run_complete(self.stats)

        issues = list(layout.issues) + list(hierarchy.issues)
        for issue in issues:
            if isinstance(issue, OrphanRecords):
                self.logger.log_data_quality_warning(issue.message)
            self.logger.debug(f"{get_error_severity(issue)} severity issue: {issue.to_dict()}")

        return CascadeResult(
            output_file=self.config.output_file,
            selection=selection,
            inference=inference,
            columns=columns,
            hierarchy=hierarchy,
            stats=self.stats,
            complete=complete,
            issues=issues
        )
