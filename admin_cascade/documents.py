"""
Tabular document adapters.

This module provides the small capability interface the conversion core
depends on (sheet listing and 1-based cell reads/writes) together with
an openpyxl-backed Excel implementation and a pandas-backed CSV
implementation. Documents are acquired through ``open_document`` which
releases them unconditionally.
"""

import logging
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd
from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import InvalidFileException

from .exceptions import DocumentAccessError, OutputGenerationError


EXCEL_SUFFIXES = ('.xlsx', '.xlsm')
CSV_SUFFIXES = ('.csv',)
SUPPORTED_SUFFIXES = EXCEL_SUFFIXES + CSV_SUFFIXES

logger = logging.getLogger(__name__)


class TabularDocument:
    """
    Capability interface over a spreadsheet document.

    Rows and columns are 1-based; row 1 is the header row. Reading a cell
    outside the used range returns None.
    """

    def list_sheets(self) -> List[str]:
        raise NotImplementedError

    def get_cell(self, sheet: str, row: int, col: int) -> Any:
        raise NotImplementedError

    def set_cell(self, sheet: str, row: int, col: int, value: Any) -> None:
        raise NotImplementedError

    def max_row(self, sheet: str) -> int:
        raise NotImplementedError

    def max_column(self, sheet: str) -> int:
        raise NotImplementedError

    def save(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def header_row(self, sheet: str) -> List[Any]:
        """Return the values of row 1 across all used columns."""
        return [self.get_cell(sheet, 1, col) for col in range(1, self.max_column(sheet) + 1)]


class GridDocument(TabularDocument):
    """
    In-memory document holding each sheet as a list of rows.

    Used directly for tests and as the storage for the file-backed
    documents below.
    """

    def __init__(self, sheets: Optional[Dict[str, List[List[Any]]]] = None,
                 path: Optional[str] = None):
        self.path = path
        self._sheets: Dict[str, Optional[List[List[Any]]]] = {
            name: [list(row) for row in rows] for name, rows in (sheets or {}).items()
        }
        self.closed = False

    def _rows(self, sheet: str) -> List[List[Any]]:
        if sheet not in self._sheets:
            raise KeyError(f"Unknown sheet: {sheet}")
        rows = self._sheets[sheet]
        if rows is None:
            rows = self._load_sheet(sheet)
            self._sheets[sheet] = rows
        return rows

    def _load_sheet(self, sheet: str) -> List[List[Any]]:
        return []

    def list_sheets(self) -> List[str]:
        return list(self._sheets)

    def get_cell(self, sheet: str, row: int, col: int) -> Any:
        rows = self._rows(sheet)
        if row < 1 or row > len(rows):
            return None
        values = rows[row - 1]
        if col < 1 or col > len(values):
            return None
        return values[col - 1]

    def set_cell(self, sheet: str, row: int, col: int, value: Any) -> None:
        if row < 1 or col < 1:
            raise IndexError(f"Cell ({row}, {col}) is out of range; rows and columns start at 1")
        rows = self._rows(sheet)
        while len(rows) < row:
            rows.append([])
        values = rows[row - 1]
        while len(values) < col:
            values.append(None)
        values[col - 1] = value

    def max_row(self, sheet: str) -> int:
        return len(self._rows(sheet))

    def max_column(self, sheet: str) -> int:
        return max((len(values) for values in self._rows(sheet)), default=0)

    def rows(self, sheet: str) -> List[List[Any]]:
        """Rows of a sheet padded to the sheet's width."""
        width = self.max_column(sheet)
        return [values + [None] * (width - len(values)) for values in self._rows(sheet)]

    def save(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


class ExcelDocument(GridDocument):
    """Excel workbook backed by openpyxl; sheets are read on first access."""

    def __init__(self, path: str, workbook: Optional[Workbook] = None,
                 sheets: Optional[Dict[str, List[List[Any]]]] = None):
        super().__init__(sheets=sheets, path=path)
        self._workbook = workbook

    @classmethod
    def open_read(cls, path: str) -> 'ExcelDocument':
        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
            raise DocumentAccessError(
                f"Could not open workbook '{path}': {e}",
                file_path=path,
                operation="read",
                original_error=e
            )
        document = cls(path, workbook=workbook)
        document._sheets = {name: None for name in workbook.sheetnames}
        logger.debug(f"Opened workbook {path} with sheets {workbook.sheetnames}")
        return document

    @classmethod
    def create_write(cls, path: str, sheet_name: str) -> 'ExcelDocument':
        return cls(path, sheets={sheet_name: []})

    def _load_sheet(self, sheet: str) -> List[List[Any]]:
        worksheet = self._workbook[sheet]
        rows = [list(values) for values in worksheet.iter_rows(values_only=True)]
        # Read-only worksheets may report trailing rows that hold no values
        while rows and all(value is None for value in rows[-1]):
            rows.pop()
        logger.debug(f"Loaded sheet '{sheet}' with {len(rows)} rows")
        return rows

    def save(self) -> None:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for name in self.list_sheets():
            worksheet = workbook.create_sheet(title=name)
            for row_index, values in enumerate(self._rows(name), start=1):
                for col_index, value in enumerate(values, start=1):
                    if value is not None:
                        self._write_cell(worksheet, row_index, col_index, value)
        try:
            workbook.save(self.path)
        except OSError as e:
            raise OutputGenerationError(
                f"Could not save workbook '{self.path}': {e}",
                output_path=self.path,
                original_error=e
            )

    def _write_cell(self, worksheet, row: int, column: int, value: Any) -> None:
        """Write a value as literal cell content; text never becomes a formula."""
        if isinstance(value, str):
            cleaned = ILLEGAL_CHARACTERS_RE.sub("", value)
            if cleaned != value:
                logger.warning(
                    f"Removed control characters not allowed in worksheets from "
                    f"cell ({row}, {column}) of '{worksheet.title}': {value!r}"
                )
            cell = worksheet.cell(row=row, column=column, value=cleaned)
            cell.data_type = "s"
            return
        worksheet.cell(row=row, column=column, value=value)

    def close(self) -> None:
        if self._workbook is not None:
            self._workbook.close()
            self._workbook = None
        super().close()


class CsvDocument(GridDocument):
    """Single-sheet CSV document backed by pandas; the sheet is named after the file stem."""

    @classmethod
    def open_read(cls, path: str) -> 'CsvDocument':
        try:
            df = pd.read_csv(path, header=None, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError as e:
            raise DocumentAccessError(
                f"CSV file '{path}' is empty",
                file_path=path,
                operation="read",
                original_error=e
            )
        except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
            raise DocumentAccessError(
                f"Could not parse CSV file '{path}': {e}",
                file_path=path,
                operation="read",
                original_error=e
            )
        return cls(sheets={Path(path).stem: df.values.tolist()}, path=path)

    @classmethod
    def create_write(cls, path: str, sheet_name: str) -> 'CsvDocument':
        return cls(sheets={sheet_name: []}, path=path)

    def save(self) -> None:
        sheets = self.list_sheets()
        if len(sheets) != 1:
            raise OutputGenerationError(
                f"CSV output holds exactly one sheet, got {len(sheets)}",
                output_path=self.path
            )
        rows = self.rows(sheets[0])
        header, body = (rows[0], rows[1:]) if rows else ([], [])
        df = pd.DataFrame(body, columns=header)
        try:
            df.to_csv(self.path, index=False, encoding='utf-8')
        except OSError as e:
            raise OutputGenerationError(
                f"Could not write CSV file '{self.path}': {e}",
                output_path=self.path,
                record_count=len(body),
                original_error=e
            )


def _document_class(path: str):
    suffix = Path(path).suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return ExcelDocument
    if suffix in CSV_SUFFIXES:
        return CsvDocument
    raise DocumentAccessError(
        f"Unsupported document type '{suffix}' for {path}",
        file_path=path,
        operation="open"
    )


@contextmanager
def open_document(path: str, mode: str = "r",
                  sheet_name: str = "Sheet1") -> Iterator[TabularDocument]:
    """
    Open a tabular document for reading ("r") or create one for writing ("w").

    The document is closed when the block exits, whether or not it raised.
    Writes are only persisted by an explicit ``save()``.
    """
    document_class = _document_class(path)
    if mode == "r":
        document = document_class.open_read(path)
    elif mode == "w":
        document = document_class.create_write(path, sheet_name)
    else:
        raise ValueError(f"Invalid document mode: {mode}")

    try:
        yield document
    finally:
        document.close()
