"""
Logging configuration for the admin cascade application.

This module provides the logging infrastructure with configurable levels,
optional file output and phase tracking helpers.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional
from datetime import datetime


class CascadeLogger:
    """Custom logger for cascade conversion runs."""

    def __init__(self, name: str = "admin_cascade", level: str = "WARNING",
                 log_file: Optional[str] = None):
        """
        Initialize the cascade logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_file: Optional file path for log output
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear any existing handlers
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            self._setup_file_handler(log_file, formatter)

    def _setup_file_handler(self, log_file: str, formatter: logging.Formatter):
        """Set up file logging handler."""
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def log_phase_start(self, phase_name: str):
        """Log the start of a processing phase."""
        self.debug("-" * 40)
        self.debug(f"Starting {phase_name}")
        self.debug("-" * 40)

    def log_phase_complete(self, phase_name: str, count: int, duration: float):
        """Log the completion of a processing phase."""
        self.debug(f"Completed {phase_name}: {count:,} item(s) in {duration:.2f} seconds")

    def log_level_summary(self, records_per_level: Dict[int, int]):
        """Log record counts for each admin level."""
        for level, count in sorted(records_per_level.items()):
            self.info(f"Admin level {level}: {count:,} record(s)")

    def log_data_quality_warning(self, message: str):
        """Log data quality warnings."""
        self.warning(f"DATA QUALITY: {message}")

    def log_file_operation(self, operation: str, file_path: str, record_count: int):
        """Log file operations."""
        self.info(f"{operation}: {file_path} ({record_count:,} rows)")

    def log_run_start(self, input_file: str, output_file: str):
        self.info("=" * 60)
        self.info("CASCADE CONVERSION STARTED")
        self.info("=" * 60)
        self.info(f"Input: {input_file}")
        self.info(f"Output: {output_file}")
        self.info(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def log_run_complete(self, stats):
        """Log run completion with statistics."""
        self.info("=" * 60)
        self.info("CASCADE CONVERSION COMPLETED")
        self.info("=" * 60)
        self.info(f"Source sheet: {stats.sheet_name} (deepest level {stats.deepest_level})")
        self.info(f"Rows scanned: {stats.rows_scanned:,}")
        self.info(f"Records written: {stats.total_records:,}")
        self.info(f"Duplicate codes skipped: {stats.duplicates_skipped:,}")
        self.info(f"Processing time: {stats.processing_time:.2f} seconds")


def setup_logging(config) -> CascadeLogger:
    """
    Set up logging based on configuration.

    Args:
        config: CascadeConfig instance

    Returns:
        Configured CascadeLogger instance
    """
    return CascadeLogger(
        name="admin_cascade",
        level=config.log_level,
        log_file=config.log_file
    )
