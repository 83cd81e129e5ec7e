"""
Configuration management for the admin cascade application.

This module provides dataclasses for run configuration (file paths,
overwrite and trace options) and the statistics collected during a run.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional
import os
from pathlib import Path

from .documents import SUPPORTED_SUFFIXES
from .exceptions import ConfigurationError, InputNotFoundError, OutputAlreadyExistsError


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class CascadeConfig:
    """Configuration class for a cascading sheet conversion run."""

    # File paths
    input_file: str
    output_file: str

    # Run options
    overwrite: bool = False
    verbose: bool = False
    output_sheet_name: str = "choices"
    show_progress: bool = True

    # Logging configuration; verbose runs default to DEBUG
    log_level: Optional[str] = None
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.log_level is None:
            self.log_level = "DEBUG" if self.verbose else "WARNING"
        self._validate_paths()
        self._validate_options()

    def _validate_paths(self):
        """Validate input existence and the overwrite policy for the output."""
        if not os.path.exists(self.input_file):
            raise InputNotFoundError(self.input_file)

        if os.path.exists(self.output_file) and not self.overwrite:
            raise OutputAlreadyExistsError(self.output_file)

        for key, path in (('input_file', self.input_file), ('output_file', self.output_file)):
            suffix = Path(path).suffix.lower()
            if suffix not in SUPPORTED_SUFFIXES:
                raise ConfigurationError(
                    f"Unsupported file type '{suffix or path}' for {key}",
                    config_key=key,
                    config_value=path,
                    valid_values=list(SUPPORTED_SUFFIXES)
                )

        if Path(self.input_file).resolve() == Path(self.output_file).resolve():
            raise ConfigurationError(
                "Input and output must be different files",
                config_key='output_file',
                config_value=self.output_file
            )

    def _validate_options(self):
        """Validate logging and sheet options."""
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=VALID_LOG_LEVELS
            )

        if not self.output_sheet_name or not self.output_sheet_name.strip():
            raise ConfigurationError(
                "Output sheet name must not be empty",
                config_key='output_sheet_name',
                config_value=self.output_sheet_name
            )

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'CascadeConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'input_file': self.input_file,
            'output_file': self.output_file,
            'overwrite': self.overwrite,
            'verbose': self.verbose,
            'output_sheet_name': self.output_sheet_name,
            'show_progress': self.show_progress,
            'log_level': self.log_level,
            'log_file': self.log_file
        }


@dataclass
class CascadeStats:
    """Statistics tracking for a conversion run."""

    sheet_name: str = ""
    deepest_level: int = -1
    rows_scanned: int = 0
    records_per_level: Dict[int, int] = field(default_factory=dict)
    duplicates_skipped: int = 0
    orphan_records: int = 0
    rows_written: int = 0
    processing_time: float = 0.0

    @property
    def total_records(self) -> int:
        return sum(self.records_per_level.values())

    def to_dict(self) -> Dict:
        """Convert statistics to dictionary."""
        return {
            'sheet_name': self.sheet_name,
            'deepest_level': self.deepest_level,
            'rows_scanned': self.rows_scanned,
            'records_per_level': dict(self.records_per_level),
            'total_records': self.total_records,
            'duplicates_skipped': self.duplicates_skipped,
            'orphan_records': self.orphan_records,
            'rows_written': self.rows_written,
            'processing_time': self.processing_time
        }
