"""
Title Number Estimate Sheet

Single-page PDF explaining one prediction: the estimated title number, the
fitted formula, the confidence rating and the samples behind it.

Uses ReportLab for deterministic PDF generation (same input = same PDF).
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from core.title_engine import Confidence, PredictionOutcome, Sample


# =============================================================================
# Report Generation Result Types
# =============================================================================

@dataclass
class ReportSuccess:
    """Returned when PDF generation succeeds."""
    path: Path
    samples_listed: int


# =============================================================================
# Color Palette - print-friendly
# =============================================================================

class Palette:
    """Charcoal text on white, with muted status colours."""
    CHARCOAL = colors.Color(0.2, 0.2, 0.22)
    SLATE = colors.Color(0.35, 0.38, 0.42)
    GRAY = colors.Color(0.5, 0.5, 0.5)
    LIGHT_GRAY = colors.Color(0.85, 0.85, 0.85)
    PALE_GRAY = colors.Color(0.95, 0.95, 0.95)
    WHITE = colors.white

    ACCENT = colors.Color(0.15, 0.25, 0.4)

    SUCCESS = colors.Color(0.15, 0.4, 0.25)
    INFO = colors.Color(0.15, 0.3, 0.5)
    WARNING = colors.Color(0.5, 0.4, 0.15)


CONFIDENCE_COLOURS = {
    Confidence.HIGH: Palette.SUCCESS,
    Confidence.NOTE: Palette.INFO,
    Confidence.LOW: Palette.WARNING,
}


def get_report_styles():
    """Paragraph styles for the estimate sheet."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='SheetTitle',
        parent=styles['Normal'],
        fontSize=18,
        leading=22,
        textColor=Palette.CHARCOAL,
        alignment=TA_LEFT,
        fontName='Helvetica-Bold',
        spaceAfter=6*mm,
    ))

    styles.add(ParagraphStyle(
        name='SectionTitle',
        parent=styles['Normal'],
        fontSize=11,
        leading=14,
        textColor=Palette.SLATE,
        fontName='Helvetica-Bold',
        spaceBefore=12,
        spaceAfter=6,
    ))

    styles.add(ParagraphStyle(
        name='MetricValue',
        parent=styles['Normal'],
        fontSize=26,
        leading=30,
        textColor=Palette.ACCENT,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold',
    ))

    styles.add(ParagraphStyle(
        name='MetricLabel',
        parent=styles['Normal'],
        fontSize=8,
        leading=10,
        textColor=Palette.SLATE,
        alignment=TA_CENTER,
        fontName='Helvetica',
    ))

    styles['BodyText'].fontSize = 9.5
    styles['BodyText'].leading = 14
    styles['BodyText'].textColor = Palette.CHARCOAL
    styles['BodyText'].fontName = 'Helvetica'

    styles.add(ParagraphStyle(
        name='TableHeader',
        parent=styles['Normal'],
        fontSize=8,
        leading=10,
        textColor=Palette.WHITE,
        fontName='Helvetica-Bold',
    ))

    styles.add(ParagraphStyle(
        name='TableCell',
        parent=styles['Normal'],
        fontSize=8.5,
        leading=11,
        textColor=Palette.CHARCOAL,
        fontName='Helvetica',
    ))

    return styles


# =============================================================================
# Report Generator Class
# =============================================================================

class EstimateReportGenerator:
    """
    Generates title number estimate sheets.

    Usage:
        generator = EstimateReportGenerator()
        pdf_bytes = generator.generate_to_buffer(outcome)
    """

    PAGE_WIDTH, PAGE_HEIGHT = A4
    MARGIN = 20 * mm

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = Path(output_dir) if output_dir else Path("reports")
        self.styles = get_report_styles()

    def generate_report(self, outcome: PredictionOutcome) -> ReportSuccess:
        """Write the estimate sheet to output_dir/TITLE-<house>.pdf."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"TITLE-{outcome.target_house_number}.pdf"
        output_path.write_bytes(self.generate_to_buffer(outcome))
        return ReportSuccess(path=output_path, samples_listed=len(outcome.samples))

    def generate_to_buffer(self, outcome: PredictionOutcome) -> bytes:
        """Generate PDF and return as bytes (for testing or streaming)."""
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.MARGIN,
            rightMargin=self.MARGIN,
            topMargin=self.MARGIN,
            bottomMargin=self.MARGIN,
            title=f"Title Number Estimate - House {outcome.target_house_number}",
            author="Title Number Engine",
            invariant=1,
        )

        story = []
        story.extend(self._build_headline(outcome))
        story.extend(self._build_method(outcome))
        story.extend(self._build_confidence(outcome))
        story.extend(self._build_samples_table(outcome.samples, outcome.excluded_sample))

        doc.build(story, onFirstPage=self._draw_footer, onLaterPages=self._draw_footer)
        return buffer.getvalue()

    # =========================================================================
    # Page Drawing
    # =========================================================================

    def _draw_footer(self, canvas_obj: canvas.Canvas, doc):
        canvas_obj.saveState()
        canvas_obj.setFont('Helvetica', 7)
        canvas_obj.setFillColor(Palette.GRAY)
        canvas_obj.drawString(self.MARGIN, self.MARGIN - 10*mm, "TITLE NUMBER ENGINE")
        canvas_obj.drawRightString(
            self.PAGE_WIDTH - self.MARGIN,
            self.MARGIN - 10*mm,
            f"{doc.page}",
        )
        canvas_obj.restoreState()

    # =========================================================================
    # Sections
    # =========================================================================

    def _build_headline(self, outcome: PredictionOutcome) -> list:
        elements = [
            Paragraph("Title Number Estimate", self.styles['SheetTitle']),
            Paragraph(
                f"House Number: <b>{outcome.target_house_number}</b> "
                f"({outcome.parity.value} side)",
                self.styles['BodyText'],
            ),
            Paragraph(
                f"Title types: {escape(outcome.filter_description)}",
                self.styles['BodyText'],
            ),
            Spacer(1, 8*mm),
            Paragraph(str(outcome.predicted_title_number), self.styles['MetricValue']),
            Paragraph("CALCULATED TITLE NUMBER", self.styles['MetricLabel']),
            Spacer(1, 6*mm),
            HRFlowable(width="100%", thickness=0.5, color=Palette.LIGHT_GRAY),
        ]
        return elements

    def _build_method(self, outcome: PredictionOutcome) -> list:
        return [
            Paragraph("Formula", self.styles['SectionTitle']),
            Paragraph(f"Let <b>n = {outcome.transform_description}</b>", self.styles['BodyText']),
            Paragraph(f"<b>{outcome.formula_text}</b>", self.styles['BodyText']),
            Paragraph(
                f"Based on {outcome.samples_used} matching {outcome.parity.value} "
                f"house numbers.",
                self.styles['BodyText'],
            ),
        ]

    def _build_confidence(self, outcome: PredictionOutcome) -> list:
        colour = CONFIDENCE_COLOURS[outcome.confidence]
        label_style = ParagraphStyle(
            name='ConfidenceLabel',
            parent=self.styles['BodyText'],
            fontName='Helvetica-Bold',
            textColor=colour,
        )
        return [
            Paragraph("Confidence", self.styles['SectionTitle']),
            Paragraph(outcome.confidence_label, label_style),
            Paragraph(outcome.message, self.styles['BodyText']),
        ]

    def _build_samples_table(
        self,
        samples: Sequence[Sample],
        excluded: Optional[Sample],
    ) -> list:
        if not samples:
            return []

        header = [
            Paragraph(text, self.styles['TableHeader'])
            for text in ("House No.", "Title No.", "Title Type", "Status")
        ]
        rows: List[list] = [header]
        for sample in samples:
            status = "Ignored (outlier)" if sample is excluded else "Used"
            rows.append([
                Paragraph(str(sample.house_number), self.styles['TableCell']),
                Paragraph(str(sample.title_number), self.styles['TableCell']),
                Paragraph(escape(sample.category_label) or "-", self.styles['TableCell']),
                Paragraph(status, self.styles['TableCell']),
            ])

        table = Table(rows, colWidths=[28*mm, 35*mm, 65*mm, 40*mm], repeatRows=1)
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), Palette.ACCENT),
            ('ROWBACKGROUNDS', (0, 1), (-1, -1), [Palette.WHITE, Palette.PALE_GRAY]),
            ('GRID', (0, 0), (-1, -1), 0.25, Palette.LIGHT_GRAY),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))

        return [
            Paragraph("Samples", self.styles['SectionTitle']),
            table,
        ]


def generate_estimate_pdf(outcome: PredictionOutcome) -> bytes:
    """Generate an estimate sheet as PDF bytes."""
    return EstimateReportGenerator().generate_to_buffer(outcome)
