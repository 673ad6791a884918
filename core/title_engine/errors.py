"""
Errors raised by the Title Engine.

All errors are recoverable and abort a single prediction with no partial
result. Low confidence is NOT an error - see Confidence.LOW.
"""

from typing import Optional


class TitleEngineError(Exception):
    """Base class for prediction failures surfaced to the caller."""

    kind = "title_engine_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidTargetError(TitleEngineError):
    """Raised when the target house number is not a valid positive integer."""

    kind = "invalid_target"

    def __init__(self, value: object):
        self.value = value
        super().__init__("Please enter a Target House Number (a positive whole number).")


class InsufficientDataError(TitleEngineError):
    """
    Raised when fewer than the minimum number of matching samples remain.

    Carries the parity required so the user can correct their input.
    """

    kind = "insufficient_data"

    def __init__(self, found: int, required: int, parity: Optional[str] = None):
        self.found = found
        self.required = required
        self.parity = parity
        if parity:
            message = (
                f"Not enough matching data. Found {found}, need at least "
                f"{required} {parity} house numbers."
            )
        else:
            message = f"Not enough data points. Found {found}, need at least {required}."
        super().__init__(message)


class DegenerateInputError(TitleEngineError):
    """Raised when every regression input coordinate is identical."""

    kind = "degenerate_input"

    def __init__(self):
        super().__init__(
            "Cannot calculate a pattern: all entered House Numbers are identical."
        )
