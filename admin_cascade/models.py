"""
Data models for the admin cascade application.

This module defines the core data structures that flow between the sheet
selector, header inference, column locator, hierarchy builder and writer.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from .exceptions import LevelIssue, MissingColumnForLevel


@dataclass(frozen=True)
class SheetSelection:
    """The worksheet holding the deepest admin level and how it was picked."""

    sheet_name: str
    deepest_level: int
    naming_prefix: str


@dataclass(frozen=True)
class ColumnPattern:
    """
    Literal text surrounding the level digit in code and name column headers.

    For ``ADM1_PCODE`` the code prefix is ``ADM`` and the code suffix is
    ``_PCODE``; for ``Admin1Name_en`` the name prefix is ``Admin`` and the
    name suffix is ``Name`` (the ``_en`` locale token is kept separately).
    """

    code_prefix: str = ""
    code_suffix: str = ""
    name_prefix: str = ""
    name_suffix: str = ""

    @property
    def has_code_pattern(self) -> bool:
        return bool(self.code_prefix or self.code_suffix)

    @property
    def has_name_pattern(self) -> bool:
        return bool(self.name_prefix or self.name_suffix)

    @property
    def list_prefix(self) -> str:
        """Prefix used for list names, falling back to the code prefix."""
        return self.name_prefix if self.has_name_pattern else self.code_prefix

    def code_header(self, level: int) -> str:
        """Header of the code column for a level."""
        return f"{self.code_prefix}{level}{self.code_suffix}"

    def name_header(self, level: int, locale: str = "") -> str:
        """Header of the localized name column for a level."""
        base = f"{self.name_prefix}{level}{self.name_suffix}"
        if not locale:
            return base
        return f"{base}_{locale}"


@dataclass(frozen=True)
class HeaderInference:
    """Column pattern and locale suffix inferred from a header row."""

    pattern: ColumnPattern
    locale: str = ""


@dataclass(frozen=True)
class LevelColumns:
    """1-based column indices of one level's name and code columns."""

    level: int
    name_column: Optional[int] = None
    code_column: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.name_column is not None and self.code_column is not None


@dataclass
class ColumnLayout:
    """Located columns for every level plus the levels whose columns are missing."""

    columns: List[LevelColumns] = field(default_factory=list)
    issues: List[MissingColumnForLevel] = field(default_factory=list)


@dataclass(frozen=True)
class AdminRecord:
    """One administrative unit at one level."""

    level: int
    code: str
    label: str
    parent_code: str = ""


class LevelRecords:
    """
    Append-only, de-duplicated sequence of records for one admin level.

    Records keep first-seen order; adding a code already present is a no-op.
    """

    def __init__(self, level: int):
        self.level = level
        self._records: List[AdminRecord] = []
        self._seen: Set[str] = set()

    def add(self, record: AdminRecord) -> bool:
        """
        Append a record unless its code was already seen at this level.

        Args:
            record: Record to append

        Returns:
            True if the record was appended, False for a duplicate code
        """
        if record.code in self._seen:
            return False
        self._seen.add(record.code)
        self._records.append(record)
        return True

    def __contains__(self, code: str) -> bool:
        return code in self._seen

    def __iter__(self) -> Iterator[AdminRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> AdminRecord:
        return self._records[index]

    def codes(self) -> List[str]:
        return [record.code for record in self._records]


@dataclass
class HierarchyResult:
    """Per-level records collected by the hierarchy builder."""

    levels: Dict[int, LevelRecords] = field(default_factory=dict)
    orphans: Dict[int, List[AdminRecord]] = field(default_factory=dict)
    rows_scanned: int = 0
    duplicates_skipped: int = 0
    issues: List[LevelIssue] = field(default_factory=list)

    def records(self, level: int) -> LevelRecords:
        return self.levels[level]

    def record_counts(self) -> Dict[int, int]:
        return {level: len(records) for level, records in self.levels.items()}

    def empty_levels(self) -> List[int]:
        return [level for level, records in self.levels.items() if len(records) == 0]

    def is_complete(self) -> bool:
        """True when every level yielded at least one record."""
        return not self.empty_levels()

    def orphan_count(self) -> int:
        return sum(len(records) for records in self.orphans.values())


@dataclass(frozen=True)
class CascadeRow:
    """One row of the cascading selection sheet."""

    list_name: str
    name: str
    label: str
    parent_refs: tuple = ()

    def to_cells(self) -> List[str]:
        return [self.list_name, self.name, self.label, *self.parent_refs]
