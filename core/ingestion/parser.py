"""
Cell Parser - Extracts house numbers, title numbers and title types

Spreadsheet cells are free text, e.g.:

    House cell:  "12A High Street"      -> house 13
    Title cell:  "Freehold AB123456"    -> title 123456, type "Freehold AB"

Title numbers are the LAST run of at least `min_title_digits` digits in the
cell. Everything before that run is the title type (category label).
"""

from __future__ import annotations

import re
from typing import Final, Optional

from core.title_engine.models import Sample


# Minimum digits for a run to count as a title number. Shorter runs (e.g.
# flat numbers inside the title type) are treated as label text. A value of
# 1 accepts any digit run.
DEFAULT_MIN_TITLE_DIGITS: Final[int] = 5

HOUSE_NUMBER_REGEX: Final = re.compile(r"\d+")

# "12A" is stored as the next number in sequence
LETTER_SUFFIX: Final[str] = "A"


def _title_regex(min_digits: int) -> re.Pattern:
    if min_digits < 1:
        raise ValueError("min_digits must be at least 1")
    return re.compile(rf"\d{{{min_digits},}}")


def normalise_category(label: str) -> str:
    """Lower-case and strip all whitespace, for case-insensitive matching."""
    return "".join(label.lower().split())


def parse_house_number(text: str) -> Optional[int]:
    """
    Extract the house number from a cell.

    Uses the first run of digits. A trailing 'A' suffix bumps the number by
    one, so "12A" and "12 a" both give 13.

    Returns:
        House number, or None if the cell has no digits
    """
    match = HOUSE_NUMBER_REGEX.search(text)
    if not match:
        return None

    house_number = int(match.group())
    rest = text[match.end():].strip()
    if rest.upper().startswith(LETTER_SUFFIX):
        house_number += 1

    return house_number


def _last_title_match(text: str, min_digits: int) -> Optional[re.Match]:
    last = None
    for last in _title_regex(min_digits).finditer(text):
        pass
    return last


def parse_title_number(
    text: str,
    min_digits: int = DEFAULT_MIN_TITLE_DIGITS,
) -> Optional[int]:
    """Extract the last run of at least `min_digits` digits, or None."""
    match = _last_title_match(text, min_digits)
    return int(match.group()) if match else None


def parse_category_label(
    text: str,
    min_digits: int = DEFAULT_MIN_TITLE_DIGITS,
) -> str:
    """Text preceding the title number, stripped. Empty if no title number."""
    match = _last_title_match(text, min_digits)
    if not match:
        return ""
    return text[:match.start()].strip()


class CellParser:
    """
    Parses house/title cell pairs into Samples.

    The digit policy is a deliberate parser setting: it decides which text is
    offered to the engine as a title type.
    """

    def __init__(self, min_title_digits: int = DEFAULT_MIN_TITLE_DIGITS):
        _title_regex(min_title_digits)  # validate
        self.min_title_digits = min_title_digits

    def parse_pair(self, house_cell: str, title_cell: str) -> Optional[Sample]:
        """
        Parse one column of the template.

        Returns:
            Sample, or None if either cell is empty or has no usable number
            (zero counts as unusable)
        """
        if not house_cell or not title_cell:
            return None

        house_number = parse_house_number(house_cell)
        title_number = parse_title_number(title_cell, self.min_title_digits)
        if not house_number or not title_number:
            return None

        return Sample(
            house_number=house_number,
            title_number=title_number,
            category_label=parse_category_label(title_cell, self.min_title_digits),
        )
