"""
Workbook Reader - Loads samples from the street survey template

Template layout (first worksheet only):
- Row 11: house number cells
- Row 26: title cells ("<title type> <title number>")
- Columns D onwards: one property per column

Columns that fail to parse are skipped and logged, never fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Final, List, Optional, Sequence

from openpyxl import load_workbook

from core.ingestion.parser import CellParser
from core.title_engine.models import Sample


logger = logging.getLogger(__name__)


# =============================================================================
# Template Layout
# =============================================================================

HOUSE_ROW_INDEX: Final[int] = 10  # Row 11
TITLE_ROW_INDEX: Final[int] = 25  # Row 26
FIRST_DATA_COLUMN: Final[int] = 3  # Column D
MIN_TEMPLATE_ROWS: Final[int] = TITLE_ROW_INDEX + 1

SUPPORTED_EXTENSIONS: Final[tuple[str, ...]] = (".xlsx", ".xlsm")
SUPPORTED_CONTENT_TYPES: Final[tuple[str, ...]] = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroEnabled.12",
)


# =============================================================================
# Errors
# =============================================================================


class WorkbookError(Exception):
    """Base class for workbook ingestion failures."""

    kind = "workbook_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedFileError(WorkbookError):
    """Raised when the upload is not an .xlsx/.xlsm workbook."""

    kind = "unsupported_file"


class WorkbookReadError(WorkbookError):
    """Raised when the workbook is corrupt or cannot be opened."""

    kind = "unreadable_workbook"


class TemplateLayoutError(WorkbookError):
    """Raised when the worksheet does not follow the survey template."""

    kind = "invalid_template"


# =============================================================================
# Import Result
# =============================================================================


@dataclass
class WorkbookImport:
    """Samples read from one workbook."""
    samples: List[Sample]
    skipped_columns: List[int] = field(default_factory=list)  # 0-based column indices

    @property
    def sample_count(self) -> int:
        return len(self.samples)


def is_supported_file(filename: str, content_type: Optional[str] = None) -> bool:
    """Check the upload is an OOXML workbook by extension or content type."""
    if filename and filename.lower().endswith(SUPPORTED_EXTENSIONS):
        return True
    return content_type in SUPPORTED_CONTENT_TYPES


def cell_text(value: Any) -> str:
    """
    Render a cell value as text.

    Integral floats drop their ".0" so numeric title cells parse correctly.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def read_rows(content: bytes) -> List[tuple]:
    """
    Read all rows of the first worksheet as value tuples.

    Raises:
        WorkbookReadError: the content is not a readable workbook
    """
    try:
        workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    except Exception as e:
        logger.error("Could not open workbook: %s", e)
        raise WorkbookReadError(
            "Could not read the Excel file. It may be corrupt or an invalid format."
        ) from e

    try:
        worksheet = workbook.worksheets[0]
        return [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def extract_samples(rows: Sequence[Sequence[Any]], parser: CellParser) -> WorkbookImport:
    """
    Extract samples from template rows.

    Args:
        rows: Worksheet rows (row 1 first)
        parser: Cell parser carrying the title digit policy

    Returns:
        WorkbookImport with samples in column order

    Raises:
        TemplateLayoutError: fewer than 26 rows
    """
    if len(rows) < MIN_TEMPLATE_ROWS:
        raise TemplateLayoutError(
            f"Invalid Excel template. The file must have at least {MIN_TEMPLATE_ROWS} rows."
        )

    house_row = rows[HOUSE_ROW_INDEX] or ()
    title_row = rows[TITLE_ROW_INDEX] or ()

    samples: List[Sample] = []
    skipped: List[int] = []

    for column in range(FIRST_DATA_COLUMN, len(house_row)):
        house_cell = cell_text(house_row[column])
        title_cell = cell_text(title_row[column]) if column < len(title_row) else ""

        try:
            sample = parser.parse_pair(house_cell, title_cell)
        except ValueError as e:
            logger.warning("Skipped column %d due to a processing error: %s", column, e)
            skipped.append(column)
            continue

        if sample is not None:
            samples.append(sample)

    logger.info("Extracted %d samples from workbook", len(samples))
    return WorkbookImport(samples=samples, skipped_columns=skipped)


def load_samples(
    content: bytes,
    filename: str,
    parser: Optional[CellParser] = None,
    content_type: Optional[str] = None,
) -> WorkbookImport:
    """
    Load samples from uploaded workbook bytes.

    Args:
        content: Raw file content
        filename: Original filename (used for type detection)
        parser: Cell parser (default: 5-digit title policy)
        content_type: Upload MIME type, if known

    Raises:
        UnsupportedFileError: not an .xlsx/.xlsm file
        WorkbookReadError: unreadable workbook
        TemplateLayoutError: template layout not followed
    """
    if not is_supported_file(filename, content_type):
        raise UnsupportedFileError("Invalid file type. Please upload an .xlsx file.")

    rows = read_rows(content)
    return extract_samples(rows, parser or CellParser())
