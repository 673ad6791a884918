"""
Title Engine - Ingestion Layer

Turns survey spreadsheets into Samples. This is the single entry point for
data entering the Title Engine; the engine itself never parses text.
"""

from core.ingestion.parser import (
    DEFAULT_MIN_TITLE_DIGITS,
    CellParser,
    normalise_category,
    parse_house_number,
    parse_title_number,
    parse_category_label,
)
from core.ingestion.workbook import (
    WorkbookImport,
    WorkbookError,
    UnsupportedFileError,
    WorkbookReadError,
    TemplateLayoutError,
    load_samples,
    extract_samples,
)
from core.ingestion.session import MAX_SAMPLES, SampleSession

__all__ = [
    # Cell parsing
    "DEFAULT_MIN_TITLE_DIGITS",
    "CellParser",
    "normalise_category",
    "parse_house_number",
    "parse_title_number",
    "parse_category_label",
    # Workbook reading
    "WorkbookImport",
    "WorkbookError",
    "UnsupportedFileError",
    "WorkbookReadError",
    "TemplateLayoutError",
    "load_samples",
    "extract_samples",
    # Sessions
    "MAX_SAMPLES",
    "SampleSession",
]
