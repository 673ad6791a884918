"""
Shared fixtures: survey workbooks built in memory with openpyxl.
"""

from io import BytesIO

import pytest
from openpyxl import Workbook


@pytest.fixture
def build_workbook():
    """
    Factory fixture for survey template workbooks.

    Columns A-C hold row labels; data starts at column D. House cells go on
    row 11 and title cells on row 26.
    """
    def _build(house_cells, title_cells, rows=26, extra_sheet=False):
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "Survey"

        sheet.cell(row=1, column=1, value="Street survey")
        if rows >= 11:
            sheet.cell(row=11, column=1, value="House No.")
        if rows >= 26:
            sheet.cell(row=26, column=1, value="Title")

        for offset, value in enumerate(house_cells):
            if rows >= 11:
                sheet.cell(row=11, column=4 + offset, value=value)
        for offset, value in enumerate(title_cells):
            if rows >= 26:
                sheet.cell(row=26, column=4 + offset, value=value)

        # Make sure the sheet spans exactly `rows` rows
        sheet.cell(row=rows, column=2, value="end")

        if extra_sheet:
            other = workbook.create_sheet("Ignored")
            other.cell(row=11, column=4, value="99")

        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return _build


@pytest.fixture
def survey_workbook(build_workbook):
    """Six houses on both sides of a street, two title types."""
    return build_workbook(
        ["2", "4", "6", "8", "1", "3"],
        [
            "Freehold 100100",
            "Freehold 100102",
            "Leasehold 100104",
            "freehold 100106",
            "Freehold 200001",
            "Freehold 200003",
        ],
    )
