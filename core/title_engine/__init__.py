"""
Title Engine v1.0

Infers the linear pattern between house numbers and land-registry title
numbers on a street, and predicts the title number for a new house.
"""

from .errors import (
    TitleEngineError,
    InvalidTargetError,
    InsufficientDataError,
    DegenerateInputError,
)
from .models import (
    Parity,
    Confidence,
    Sample,
    TargetQuery,
    FitResult,
    OutlierCandidate,
    PredictionOutcome,
)
from .partition import partition_by_parity, transform_house_number, describe_transform
from .regression import fit_line, coefficient_of_determination
from .outliers import find_worst_residual
from .prediction import (
    TitlePredictor,
    predict_title_number,
    parse_target,
    round_half_up,
)

__all__ = [
    # Errors
    "TitleEngineError",
    "InvalidTargetError",
    "InsufficientDataError",
    "DegenerateInputError",
    # Models
    "Parity",
    "Confidence",
    "Sample",
    "TargetQuery",
    "FitResult",
    "OutlierCandidate",
    "PredictionOutcome",
    # Pipeline
    "partition_by_parity",
    "transform_house_number",
    "describe_transform",
    "fit_line",
    "coefficient_of_determination",
    "find_worst_residual",
    "TitlePredictor",
    "predict_title_number",
    "parse_target",
    "round_half_up",
]

__version__ = "1.0"
