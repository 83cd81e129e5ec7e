"""
Header pattern inference for the admin cascade application.

Boundary tables follow loose, per-country header conventions such as
``ADM1_PCODE``/``ADM1_EN`` or ``Admin1Pcode``/``Admin1Name_en``. This module
derives, from the header row of the deepest level sheet alone, the text
surrounding the level digit in code and name headers and the locale suffix
to use for names.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from ..documents import TabularDocument
from ..models import ColumnPattern, HeaderInference
from ..utils.data_utils import most_common, safe_string_conversion


LOCALE_TOKEN = re.compile(r"_([A-Za-z]{2})$")
CODE_MARKER = "PCODE"
IGNORED_MARKERS = ("ALT", "REF")


class HeaderPatternInferencer:
    """Infers the column pattern and locale suffix from a header row."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the header pattern inferencer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def infer(self, document: TabularDocument, sheet: str,
              deepest_level: int) -> HeaderInference:
        """
        Infer the header conventions of a worksheet.

        Args:
            document: Source document
            sheet: Name of the deepest level sheet
            deepest_level: Level number of that sheet

        Returns:
            HeaderInference with the column pattern and locale suffix
        """
        headers = [safe_string_conversion(value) for value in document.header_row(sheet)]
        return self.infer_from_headers(headers, deepest_level)

    def infer_from_headers(self, headers: Sequence[str],
                           deepest_level: int) -> HeaderInference:
        """
        Infer the header conventions from a list of header strings.

        Every header containing the deepest level number is split around
        it. Headers mentioning PCODE give the code pattern, ALT/REF headers
        (alternate and reference names) are ignored, and the rest give the
        name pattern once their trailing ``_xx`` locale token is removed.
        When several headers compete, the most common split wins.
        """
        token = str(deepest_level)
        code_candidates: List[Tuple[str, str]] = []
        name_candidates: List[Tuple[str, str]] = []

        for header in headers:
            if token not in header:
                continue

            before, after = header.split(token, 1)
            upper = header.upper()

            if CODE_MARKER in upper:
                code_candidates.append((before, after))
            elif any(marker in upper for marker in IGNORED_MARKERS):
                self.logger.debug(f"Ignoring alternate/reference name column '{header}'")
            else:
                match = LOCALE_TOKEN.search(after)
                name_suffix = after[:match.start()] if match else after
                name_candidates.append((before, name_suffix))

        code_prefix, code_suffix = most_common(code_candidates) or ("", "")
        name_prefix, name_suffix = most_common(name_candidates) or ("", "")

        if not code_candidates:
            self.logger.debug(f"No code column header found for admin level {deepest_level}")
        if not name_candidates:
            self.logger.debug(f"No name column header found for admin level {deepest_level}")

        pattern = ColumnPattern(
            code_prefix=code_prefix,
            code_suffix=code_suffix,
            name_prefix=name_prefix,
            name_suffix=name_suffix
        )
        locale = self.infer_locale(headers, pattern, deepest_level) if name_candidates else ""

        self.logger.info(
            f"Inferred headers: code '{pattern.code_header(deepest_level)}', "
            f"name '{pattern.name_header(deepest_level, locale)}'"
        )
        return HeaderInference(pattern=pattern, locale=locale)

    def infer_locale(self, headers: Sequence[str], pattern: ColumnPattern,
                     deepest_level: int) -> str:
        """
        Pick the most frequent two-letter locale suffix across all levels.

        Args:
            headers: Header strings of the sheet
            pattern: Inferred column pattern
            deepest_level: Deepest level number

        Returns:
            Two-letter locale suffix, or an empty string if no name header
            carries one
        """
        locales = []
        for level in range(deepest_level + 1):
            regex = self._locale_regex(pattern, level)
            for header in headers:
                match = regex.match(header)
                if match:
                    locales.append(match.group(1))

        locale = most_common(locales)
        if locale is None:
            self.logger.debug("Name columns carry no locale suffix")
            return ""

        self.logger.debug(f"Locale suffixes found: {sorted(set(locales))}; using '{locale}'")
        return locale

    @staticmethod
    def _locale_regex(pattern: ColumnPattern, level: int):
        return re.compile(
            rf"^{re.escape(pattern.name_prefix)}{level}{re.escape(pattern.name_suffix)}_([A-Za-z]{{2}})$",
            re.IGNORECASE
        )
