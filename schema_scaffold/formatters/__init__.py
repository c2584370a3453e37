"""
Post-processing formatters for rendered templates.
"""

from __future__ import annotations

from .base import Formatter
from .prettier_formatter import PARSERS, PrettierFormatter, parser_for_filename

__all__ = [
    "Formatter",
    "PrettierFormatter",
    "PARSERS",
    "parser_for_filename",
]
