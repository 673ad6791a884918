"""
Utility modules for the title engine.
"""

from .formatting import format_formula, format_percent, format_signed
from .config import Config

__all__ = ["format_formula", "format_percent", "format_signed", "Config"]
