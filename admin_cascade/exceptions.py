"""
Custom exception classes for the admin cascade application.

This module defines the fatal errors that abort a run and the non-fatal
issues that are collected while a run proceeds, so the caller can report
them once the cascading sheet has been written.
"""

from typing import Optional, List, Dict, Any


class CascadeError(Exception):
    """Base exception class for all admin cascade errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        """
        Initialize the base cascade error.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional context information about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code,
            'context': self.context
        }


class FileAccessError(CascadeError):
    """Exception raised for file access and I/O errors."""

    def __init__(self, message: str, file_path: str, operation: str,
                 error_code: str = 'FILE_ACCESS_ERROR',
                 original_error: Optional[Exception] = None):
        """
        Initialize file access error.

        Args:
            message: Human-readable error message
            file_path: Path to the file that caused the error
            operation: Type of operation that failed (read, write, create, etc.)
            error_code: Error code for programmatic handling
            original_error: Original exception that caused this error
        """
        context = {
            'file_path': file_path,
            'operation': operation,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code=error_code, context=context)
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class InputNotFoundError(FileAccessError):
    """Exception raised when the input document does not exist."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Input file not found: {file_path}",
            file_path=file_path,
            operation="read",
            error_code='INPUT_NOT_FOUND'
        )


class OutputAlreadyExistsError(FileAccessError):
    """Exception raised when the output exists and overwriting was not requested."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Output file already exists: {file_path} (use --overwrite to replace it)",
            file_path=file_path,
            operation="write",
            error_code='OUTPUT_ALREADY_EXISTS'
        )


class DocumentAccessError(FileAccessError):
    """Exception raised when a tabular document cannot be opened or is unsupported."""

    def __init__(self, message: str, file_path: str, operation: str,
                 original_error: Optional[Exception] = None):
        super().__init__(
            message,
            file_path=file_path,
            operation=operation,
            error_code='DOCUMENT_ACCESS_ERROR',
            original_error=original_error
        )


class ConfigurationError(CascadeError):
    """Exception raised for configuration errors."""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_value: Any = None, valid_values: Optional[List[Any]] = None):
        """
        Initialize configuration error.

        Args:
            message: Human-readable error message
            config_key: Configuration key that has invalid value
            config_value: Invalid configuration value
            valid_values: List of valid values for the configuration key
        """
        context = {
            'config_key': config_key,
            'config_value': str(config_value) if config_value is not None else None,
            'valid_values': [str(v) for v in valid_values] if valid_values else None
        }
        super().__init__(message, error_code='CONFIGURATION_ERROR', context=context)
        self.config_key = config_key
        self.config_value = config_value
        self.valid_values = valid_values or []


class NoMatchingSheetError(CascadeError):
    """Exception raised when no sheet shares the inferred naming prefix."""

    def __init__(self, sheet_names: List[str], naming_prefix: Optional[str] = None):
        """
        Initialize no matching sheet error.

        Args:
            sheet_names: Sheet names found in the input document
            naming_prefix: Naming prefix that was inferred, if any
        """
        if naming_prefix is None:
            message = "Input document contains no sheets"
        else:
            message = (
                f"No sheet matches the inferred naming prefix '{naming_prefix}'. "
                f"Sheets: {', '.join(sheet_names)}"
            )
        context = {
            'sheet_names': list(sheet_names),
            'naming_prefix': naming_prefix
        }
        super().__init__(message, error_code='NO_MATCHING_SHEET', context=context)
        self.sheet_names = list(sheet_names)
        self.naming_prefix = naming_prefix


class OutputGenerationError(CascadeError):
    """Exception raised for errors during output generation."""

    def __init__(self, message: str, output_path: Optional[str] = None,
                 record_count: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        """
        Initialize output generation error.

        Args:
            message: Human-readable error message
            output_path: Path where output was being written
            record_count: Number of records being written
            original_error: Original exception that caused this error
        """
        context = {
            'output_path': output_path,
            'record_count': record_count,
            'original_error': str(original_error) if original_error else None,
            'original_error_type': type(original_error).__name__ if original_error else None
        }
        super().__init__(message, error_code='OUTPUT_GENERATION_ERROR', context=context)
        self.output_path = output_path
        self.record_count = record_count
        self.original_error = original_error


# Non-fatal issues: collected on the run result, never raised by the engine

class LevelIssue(CascadeError):
    """Base class for non-fatal issues affecting a single admin level."""

    def __init__(self, message: str, level: int, error_code: str,
                 context: Optional[Dict[str, Any]] = None):
        context = dict(context or {})
        context['level'] = level
        super().__init__(message, error_code=error_code, context=context)
        self.level = level


class MissingColumnForLevel(LevelIssue):
    """A level's name or code column could not be located."""

    def __init__(self, level: int, missing: List[str], expected_headers: Dict[str, str]):
        """
        Initialize missing column issue.

        Args:
            level: Admin level with the missing column(s)
            missing: Which columns are missing ('name', 'code')
            expected_headers: Header text that was searched for, per column kind
        """
        message = (
            f"Admin level {level}: no {' or '.join(missing)} column found "
            f"(expected {', '.join(expected_headers.get(kind, '?') for kind in missing)})"
        )
        super().__init__(
            message,
            level=level,
            error_code='MISSING_COLUMN_FOR_LEVEL',
            context={'missing': missing, 'expected_headers': expected_headers}
        )
        self.missing = missing
        self.expected_headers = expected_headers


class EmptyLevel(LevelIssue):
    """A level produced zero records after scanning every row."""

    def __init__(self, level: int):
        super().__init__(
            f"Admin level {level} produced no records",
            level=level,
            error_code='EMPTY_LEVEL'
        )


class OrphanRecords(LevelIssue):
    """Records whose parent code is not a code of the enclosing level."""

    def __init__(self, level: int, orphan_codes: List[str]):
        """
        Initialize orphan records issue.

        Args:
            level: Admin level holding the orphaned records
            orphan_codes: Codes of the records without a known parent
        """
        preview = ', '.join(orphan_codes[:5])
        if len(orphan_codes) > 5:
            preview += ', ...'
        super().__init__(
            f"Admin level {level}: {len(orphan_codes)} record(s) reference a parent "
            f"missing from level {level - 1} ({preview})",
            level=level,
            error_code='ORPHAN_RECORDS',
            context={'orphan_codes': orphan_codes}
        )
        self.orphan_codes = orphan_codes


def get_error_severity(error: Exception) -> str:
    """
    Get the severity level of an error.

    Args:
        error: Exception to evaluate

    Returns:
        Severity level string (low, medium, high, critical)
    """
    if isinstance(error, ConfigurationError):
        return 'critical'
    elif isinstance(error, (FileAccessError, NoMatchingSheetError)):
        return 'high'
    elif isinstance(error, (OutputGenerationError, EmptyLevel)):
        return 'medium'
    elif isinstance(error, LevelIssue):
        return 'low'
    else:
        return 'medium'
