"""
Sheet selection for the admin cascade application.

Boundary workbooks hold one sheet per admin level (``Admin0``..``Admin3``,
``eth_pop_adm0``..``eth_pop_adm3``). This module works out the naming
convention shared by most sheets and picks the sheet for the deepest level.
"""

import logging
from typing import Optional, Sequence, Tuple

from ..exceptions import NoMatchingSheetError
from ..models import SheetSelection
from ..utils.data_utils import extract_digits, most_common, strip_digits


class SheetSelector:
    """Picks the worksheet that represents the finest-grained admin level."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the sheet selector.

        Args:
            logger: Optional logger instance for logging selection results
        """
        self.logger = logger or logging.getLogger(__name__)

    def select(self, sheet_names: Sequence[str]) -> SheetSelection:
        """
        Select the deepest admin level sheet.

        The naming prefix is the most common digit-stripped sheet name.
        Sheets starting with that prefix are ranked by their level number
        (first run of digits in the name), so ``Admin10`` ranks above
        ``Admin2``; ties fall back to lexicographic order. The prefix has
        every digit removed, so names carrying a second digit run such as
        ``eth_adm2_2021`` never match it.

        Args:
            sheet_names: Sheet names of the input document, in document order

        Returns:
            SheetSelection naming the sheet and its level number

        Raises:
            NoMatchingSheetError: If no sheet shares the inferred prefix
        """
        naming_prefix = most_common(strip_digits(name) for name in sheet_names)
        if naming_prefix is None:
            raise NoMatchingSheetError(list(sheet_names))

        candidates = [name for name in sheet_names if name.startswith(naming_prefix)]
        if not candidates:
            raise NoMatchingSheetError(list(sheet_names), naming_prefix)

        self.logger.debug(
            f"Naming prefix '{naming_prefix}' shared by {len(candidates)} sheet(s): "
            f"{', '.join(candidates)}"
        )

        sheet_name = max(candidates, key=self._rank)
        deepest_level = extract_digits(sheet_name) or 0

        self.logger.info(f"Selected sheet '{sheet_name}' as admin level {deepest_level}")
        return SheetSelection(
            sheet_name=sheet_name,
            deepest_level=deepest_level,
            naming_prefix=naming_prefix
        )

    @staticmethod
    def _rank(sheet_name: str) -> Tuple[int, str]:
        return extract_digits(sheet_name) or 0, sheet_name
