"""
Formatting utilities.
"""


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a number as a percentage.

    Args:
        value: The percentage value.
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string.
    """
    return f"{value:.{decimals}f}%"


def format_signed(value: float, decimals: int = 2) -> str:
    """
    Format a term with an explicit operator, e.g. "+ 98.00" or "- 3.50".
    """
    if value >= 0:
        return f"+ {value:.{decimals}f}"
    return f"- {abs(value):.{decimals}f}"


def format_formula(slope: float, intercept: float) -> str:
    """
    Format a fitted line over the sequence index n.

    Args:
        slope: Title numbers per house step.
        intercept: Title number at n = 0.

    Returns:
        Formula string, e.g. "Title = (2.0000 * n) + 98.00".
    """
    return f"Title = ({slope:.4f} * n) {format_signed(intercept)}"
