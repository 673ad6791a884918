"""
Tests for Estimate Sheets and the CLI

Tests covering:
1. PDF generation for each confidence level
2. Deterministic PDF output for same input
3. Report files written to the output directory
4. CLI exit codes and output
"""

import json

import pytest

from core.title_engine import Sample, predict_title_number
from reporting import EstimateReportGenerator, ReportSuccess, generate_estimate_pdf
from reporting import cli


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def note_outcome():
    """Prediction where No. 6 was ignored as an outlier."""
    samples = [
        Sample(2, 100, "Freehold"),
        Sample(4, 102, "Freehold"),
        Sample(6, 300, "Freehold <old>"),
        Sample(8, 106, "Freehold"),
        Sample(10, 108, ""),
    ]
    return predict_title_number(samples, 12, filter_description="All")


@pytest.fixture
def low_outcome():
    samples = [Sample(2, 100), Sample(4, 300), Sample(6, 150), Sample(8, 400)]
    return predict_title_number(samples, 10)


@pytest.fixture
def survey_file(tmp_path, survey_workbook):
    path = tmp_path / "survey.xlsx"
    path.write_bytes(survey_workbook)
    return path


# =============================================================================
# Test: PDF Generation
# =============================================================================

class TestEstimatePDF:
    """Tests for the estimate sheet generator."""

    def test_pdf_bytes(self, note_outcome):
        pdf_bytes = generate_estimate_pdf(note_outcome)

        assert pdf_bytes.startswith(b"%PDF")

    def test_low_confidence_still_renders(self, low_outcome):
        """Low confidence results are shown, never suppressed."""
        pdf_bytes = generate_estimate_pdf(low_outcome)

        assert pdf_bytes.startswith(b"%PDF")

    def test_same_outcome_same_pdf(self, note_outcome):
        generator = EstimateReportGenerator()

        first = generator.generate_to_buffer(note_outcome)
        second = generator.generate_to_buffer(note_outcome)

        assert first == second

    def test_report_written_to_output_dir(self, tmp_path, note_outcome):
        generator = EstimateReportGenerator(output_dir=tmp_path / "out")

        result = generator.generate_report(note_outcome)

        assert isinstance(result, ReportSuccess)
        assert result.path == tmp_path / "out" / "TITLE-12.pdf"
        assert result.path.read_bytes().startswith(b"%PDF")
        assert result.samples_listed == 5


# =============================================================================
# Test: CLI
# =============================================================================

class TestCLI:
    """Tests for the command line entry point."""

    def test_inspect(self, survey_file, capsys):
        exit_code = cli.main(["inspect", str(survey_file)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Found 6 valid data pairs" in out
        assert "Title types: Freehold, Leasehold" in out

    def test_predict(self, survey_file, capsys):
        exit_code = cli.main(["predict", str(survey_file), "--target", "10"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Calculated Title Number: 100108" in out
        assert "Let n = (HouseNo / 2)" in out
        assert "High Confidence (100.0%)" in out

    def test_predict_json_with_type_filter(self, survey_file, capsys):
        exit_code = cli.main([
            "predict", str(survey_file),
            "--target", "5",
            "--type", "freehold",
            "--json",
        ])

        result = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert result["predicted_title_number"] == 200005
        assert result["transform"] == "(HouseNo + 1) / 2"
        assert result["filter"] == "Freehold"

    def test_predict_writes_pdf(self, survey_file, tmp_path, capsys):
        output_dir = tmp_path / "reports"

        exit_code = cli.main([
            "predict", str(survey_file),
            "--target", "10",
            "--pdf",
            "--output-dir", str(output_dir),
        ])

        assert exit_code == 0
        assert (output_dir / "TITLE-10.pdf").exists()
        assert "Report generated" in capsys.readouterr().out

    def test_invalid_target(self, survey_file, capsys):
        exit_code = cli.main(["predict", str(survey_file), "--target", "abc"])

        assert exit_code == 1
        assert "Target House Number" in capsys.readouterr().err

    def test_not_enough_matching_houses(self, survey_file, capsys):
        exit_code = cli.main([
            "predict", str(survey_file), "--target", "10", "--type", "Leasehold",
        ])

        assert exit_code == 1
        assert "even" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        exit_code = cli.main(["inspect", str(tmp_path / "missing.xlsx")])

        assert exit_code == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_file(self, tmp_path, capsys):
        path = tmp_path / "survey.csv"
        path.write_text("2,100100\n")

        exit_code = cli.main(["inspect", str(path)])

        assert exit_code == 1
        assert "xlsx" in capsys.readouterr().err

    def test_min_digits_must_be_positive(self, survey_file):
        with pytest.raises(SystemExit):
            cli.main(["--min-digits", "0", "inspect", str(survey_file)])
