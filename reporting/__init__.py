"""
Reporting module for the Title Number Engine.

Generates single-page estimate sheets (PDF) explaining a prediction.

Usage:
    from reporting import EstimateReportGenerator

    generator = EstimateReportGenerator(output_dir=Path("reports"))
    result = generator.generate_report(outcome)
"""

from .estimate_pdf import EstimateReportGenerator, ReportSuccess, generate_estimate_pdf

__all__ = [
    "EstimateReportGenerator",
    "ReportSuccess",
    "generate_estimate_pdf",
]
