"""
Data models for the Title Engine.

Defines sample pairs, fit results and the prediction outcome returned to
presentation layers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from utils.formatting import format_formula, format_percent


class Parity(Enum):
    """House number parity. Odd and even sides are numbered independently."""
    EVEN = "even"
    ODD = "odd"

    @classmethod
    def of(cls, house_number: int) -> "Parity":
        """Parity of a house number."""
        return cls.EVEN if house_number % 2 == 0 else cls.ODD


class Confidence(Enum):
    """
    Confidence classification for a prediction.

    High: R² >= 90% on all matching samples
    Note: R² >= 90% only after ignoring one outlier
    Low: R² < 90% (inconsistent data, or too few samples to correct)
    """
    HIGH = "High"
    NOTE = "Note"
    LOW = "Low"


@dataclass(frozen=True)
class Sample:
    """
    A single (house number, title number) pair.

    Produced by ingestion, consumed read-only by the engine.
    """
    house_number: int
    title_number: int
    category_label: str = ""  # e.g. "Freehold", text preceding the title number

    def __post_init__(self) -> None:
        if isinstance(self.house_number, bool) or not isinstance(self.house_number, int):
            raise ValueError("house_number must be an integer")
        if isinstance(self.title_number, bool) or not isinstance(self.title_number, int):
            raise ValueError("title_number must be an integer")
        if self.house_number <= 0:
            raise ValueError("house_number must be positive")
        if self.title_number <= 0:
            raise ValueError("title_number must be positive")

    @property
    def normalised_category(self) -> str:
        """Category label lower-cased with whitespace removed."""
        return "".join(self.category_label.lower().split())

    def to_dict(self) -> dict:
        return {
            "house_number": self.house_number,
            "title_number": self.title_number,
            "category_label": self.category_label,
        }


@dataclass(frozen=True)
class TargetQuery:
    """House number to predict a title number for."""
    house_number: int

    @property
    def parity(self) -> Parity:
        return Parity.of(self.house_number)


@dataclass(frozen=True)
class FitResult:
    """Least-squares line with its coefficient of determination."""
    slope: float
    intercept: float
    r_squared: float

    @property
    def r_squared_percent(self) -> float:
        return self.r_squared * 100

    def predict(self, x: float) -> float:
        """Evaluate the fitted line at x."""
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class OutlierCandidate:
    """The sample with the largest squared residual under a fit."""
    index: int
    house_number: int
    squared_residual: float


@dataclass(frozen=True)
class PredictionOutcome:
    """
    Terminal result of a prediction.

    Carries everything needed to explain the result (formula, confidence,
    excluded sample) without re-deriving any math.
    """
    target_house_number: int
    predicted_title_number: int
    raw_prediction: float
    parity: Parity
    transform_description: str
    fit: FitResult  # Final fit used for the prediction
    initial_fit: FitResult  # Fit over all matching samples
    confidence: Confidence
    message: str
    samples_used: int
    excluded_sample: Optional[Sample] = None
    filter_description: str = "All"
    samples: tuple = field(default_factory=tuple)  # Matching-parity samples

    @property
    def r_squared_percent(self) -> float:
        return self.fit.r_squared_percent

    @property
    def initial_r_squared_percent(self) -> float:
        return self.initial_fit.r_squared_percent

    @property
    def confidence_label(self) -> str:
        """Headline confidence, e.g. 'High Confidence (97.3%)'."""
        percent = format_percent(self.r_squared_percent)
        if self.confidence == Confidence.LOW:
            return f"Low Confidence ({percent})"
        return f"High Confidence ({percent})"

    @property
    def formula_text(self) -> str:
        """Human-readable fitted formula, e.g. 'Title = (2.0000 * n) + 98.00'."""
        return format_formula(self.fit.slope, self.fit.intercept)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "target_house_number": self.target_house_number,
            "predicted_title_number": self.predicted_title_number,
            "raw_prediction": self.raw_prediction,
            "parity": self.parity.value,
            "transform": self.transform_description,
            "slope": self.fit.slope,
            "intercept": self.fit.intercept,
            "formula": self.formula_text,
            "confidence": self.confidence.value,
            "confidence_label": self.confidence_label,
            "r_squared_percent": round(self.r_squared_percent, 2),
            "initial_r_squared_percent": round(self.initial_r_squared_percent, 2),
            "message": self.message,
            "samples_used": self.samples_used,
            "excluded_sample": (
                self.excluded_sample.to_dict() if self.excluded_sample else None
            ),
            "filter": self.filter_description,
        }
