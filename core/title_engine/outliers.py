"""
Single-outlier detection by squared residual.
"""

from typing import Sequence

from .models import OutlierCandidate


def find_worst_residual(
    xs: Sequence[float],
    ys: Sequence[float],
    house_numbers: Sequence[int],
    slope: float,
    intercept: float,
) -> OutlierCandidate:
    """
    Find the point furthest from the fitted line.

    Only one candidate is returned per call. Comparison is strict, so the
    first index wins when residuals tie.

    Args:
        xs: Transformed house numbers
        ys: Title numbers
        house_numbers: Original house numbers, paired by index
        slope: Fitted slope
        intercept: Fitted intercept

    Returns:
        OutlierCandidate for the worst point
    """
    if not xs:
        raise ValueError("Cannot find an outlier in an empty sample set")

    worst_index = -1
    worst_residual_sq = -1.0

    for i, (x, y) in enumerate(zip(xs, ys)):
        residual_sq = (y - (slope * x + intercept)) ** 2
        if residual_sq > worst_residual_sq:
            worst_residual_sq = residual_sq
            worst_index = i

    return OutlierCandidate(
        index=worst_index,
        house_number=house_numbers[worst_index],
        squared_residual=worst_residual_sq,
    )
