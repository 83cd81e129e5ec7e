"""
Column location for the admin cascade application.

Using the inferred header conventions, this module finds, for every admin
level from 0 to the deepest level, the column holding the level's code and
the column holding its localized name.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from ..documents import TabularDocument
from ..exceptions import MissingColumnForLevel
from ..models import ColumnLayout, HeaderInference, LevelColumns
from ..utils.data_utils import safe_string_conversion


class ColumnLocator:
    """
    Locates the name and code column of each admin level.

    Code columns are matched exactly. Name columns are matched exactly
    against the chosen locale first; when a level lacks that locale the
    locator falls back to a case-insensitive match, then to the same level
    in any other locale, then to a non-localized name header.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the column locator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def locate(self, document: TabularDocument, sheet: str, deepest_level: int,
               inference: HeaderInference) -> ColumnLayout:
        """
        Locate level columns in a worksheet.

        Args:
            document: Source document
            sheet: Name of the deepest level sheet
            deepest_level: Level number of that sheet
            inference: Column pattern and locale from the header row

        Returns:
            ColumnLayout with one LevelColumns per level 0..deepest_level, in
            level order, and a MissingColumnForLevel issue per incomplete level
        """
        headers = [safe_string_conversion(value) for value in document.header_row(sheet)]
        return self.locate_in_headers(headers, deepest_level, inference)

    def locate_in_headers(self, headers: Sequence[str], deepest_level: int,
                          inference: HeaderInference) -> ColumnLayout:
        """Locate level columns in a list of header strings (1-based indices)."""
        layout = ColumnLayout()

        for level in range(deepest_level + 1):
            code_header = inference.pattern.code_header(level)
            code_column = self._find_exact(headers, code_header) if inference.pattern.has_code_pattern else None
            name_column = self._find_name_column(headers, level, inference)

            missing = []
            if code_column is None:
                missing.append('code')
            if name_column is None:
                missing.append('name')

            if missing:
                issue = MissingColumnForLevel(
                    level,
                    missing,
                    {
                        'code': code_header,
                        'name': inference.pattern.name_header(level, inference.locale)
                    }
                )
                layout.issues.append(issue)
                self.logger.warning(issue.message)
            else:
                self.logger.debug(
                    f"Level {level}: code column {code_column} ('{headers[code_column - 1]}'), "
                    f"name column {name_column} ('{headers[name_column - 1]}')"
                )

            layout.columns.append(LevelColumns(level=level, name_column=name_column, code_column=code_column))

        return layout

    def _find_name_column(self, headers: Sequence[str], level: int,
                          inference: HeaderInference) -> Optional[int]:
        pattern = inference.pattern
        if not pattern.has_name_pattern:
            return None

        expected = pattern.name_header(level, inference.locale)
        column = self._find_exact(headers, expected)
        if column is not None:
            return column

        for description, candidate in self._name_fallbacks(headers, level, inference):
            if candidate is not None:
                self.logger.warning(
                    f"Level {level}: name column '{expected}' not found, "
                    f"using {description} '{headers[candidate - 1]}'"
                )
                return candidate

        return None

    def _name_fallbacks(self, headers: Sequence[str], level: int,
                        inference: HeaderInference) -> List[Tuple[str, Optional[int]]]:
        pattern = inference.pattern
        other_locale = re.compile(
            rf"^{re.escape(pattern.name_prefix)}{level}{re.escape(pattern.name_suffix)}_[A-Za-z]{{2}}$",
            re.IGNORECASE
        )
        fallbacks = []
        if inference.locale:
            fallbacks.append((
                'case-insensitive match',
                self._find_casefold(headers, pattern.name_header(level, inference.locale))
            ))
            fallbacks.append((
                'other locale',
                next((index for index, header in enumerate(headers, start=1)
                      if other_locale.match(header)), None)
            ))
        fallbacks.append((
            'non-localized name column',
            self._find_exact(headers, pattern.name_header(level))
        ))
        return fallbacks

    @staticmethod
    def _find_exact(headers: Sequence[str], expected: str) -> Optional[int]:
        for index, header in enumerate(headers, start=1):
            if header == expected:
                return index
        return None

    @staticmethod
    def _find_casefold(headers: Sequence[str], expected: str) -> Optional[int]:
        expected = expected.casefold()
        for index, header in enumerate(headers, start=1):
            if header.casefold() == expected:
                return index
        return None
