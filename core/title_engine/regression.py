"""
Regression Engine for the Title Engine

Plain ordinary least squares over (n, title) pairs:

    slope     = Σ((x - x̄)(y - ȳ)) / Σ((x - x̄)²)
    intercept = ȳ - slope * x̄
    R²        = 1 - SS_residual / SS_total

No smoothing or regularisation. Deterministic for the same input.
"""

from typing import Sequence

from .errors import DegenerateInputError, InsufficientDataError
from .models import FitResult


def fit_line(xs: Sequence[float], ys: Sequence[float]) -> FitResult:
    """
    Fit a least-squares line through paired points.

    Args:
        xs: Transformed house numbers
        ys: Title numbers, paired with xs by index

    Returns:
        FitResult with slope, intercept and R²

    Raises:
        ValueError: xs and ys differ in length
        InsufficientDataError: fewer than 2 points
        DegenerateInputError: all xs are identical (zero variance)
    """
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys must be the same length ({len(xs)} != {len(ys)})")

    n = len(xs)
    if n < 2:
        raise InsufficientDataError(found=n, required=2)

    x_mean = sum(xs) / n
    y_mean = sum(ys) / n

    numerator = 0.0
    denominator = 0.0
    for x, y in zip(xs, ys):
        numerator += (x - x_mean) * (y - y_mean)
        denominator += (x - x_mean) ** 2

    if denominator == 0:
        raise DegenerateInputError()

    slope = numerator / denominator
    intercept = y_mean - slope * x_mean

    predicted = [slope * x + intercept for x in xs]

    return FitResult(
        slope=slope,
        intercept=intercept,
        r_squared=coefficient_of_determination(ys, predicted),
    )


def coefficient_of_determination(
    ys: Sequence[float],
    predicted: Sequence[float],
) -> float:
    """
    Calculate R² for observed values against predictions.

    When every observed value is identical (SS_total = 0), R² is 1 if the
    predictions reproduce them exactly, otherwise 0.

    Args:
        ys: Observed values
        predicted: Predicted values, paired by index

    Returns:
        R² (1.0 is a perfect fit; can be negative for a poor external line)
    """
    if not ys:
        raise ValueError("Cannot calculate R² for an empty sample set")

    y_mean = sum(ys) / len(ys)

    ss_total = 0.0
    ss_residual = 0.0
    for y, y_hat in zip(ys, predicted):
        ss_total += (y - y_mean) ** 2
        ss_residual += (y - y_hat) ** 2

    if ss_total == 0:
        return 1.0 if ss_residual == 0 else 0.0

    return 1 - ss_residual / ss_total
