"""
Title Number Engine - Core Business Logic

This module provides the canonical prediction pipeline:
1. Ingestion (survey workbook -> Samples)
2. Title-type filtering (SampleSession)
3. Parity partition and sequence transform
4. Least-squares fit with R² confidence
5. Single-outlier correction
6. Output classification (High / Note / Low)
"""

from .title_engine import (
    TitleEngineError,
    InvalidTargetError,
    InsufficientDataError,
    DegenerateInputError,
    Parity,
    Confidence,
    Sample,
    TargetQuery,
    FitResult,
    OutlierCandidate,
    PredictionOutcome,
    TitlePredictor,
    predict_title_number,
)

from .ingestion import (
    CellParser,
    SampleSession,
    WorkbookImport,
    WorkbookError,
    load_samples,
)

__all__ = [
    # Title Engine
    "TitleEngineError",
    "InvalidTargetError",
    "InsufficientDataError",
    "DegenerateInputError",
    "Parity",
    "Confidence",
    "Sample",
    "TargetQuery",
    "FitResult",
    "OutlierCandidate",
    "PredictionOutcome",
    "TitlePredictor",
    "predict_title_number",
    # Ingestion
    "CellParser",
    "SampleSession",
    "WorkbookImport",
    "WorkbookError",
    "load_samples",
]
