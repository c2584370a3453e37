"""
Base class for code formatters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class Formatter(ABC):
    """Abstract base class for code formatters."""

    @abstractmethod
    def format(self, code: str, parser: str, config_path: Path | None = None) -> str:
        """
        Format the given code.

        Args:
            code: The source code to format
            parser: Syntax dialect of the code ("css", "babel" or "babel-ts")
            config_path: Optional formatter configuration file

        Returns:
            Formatted code
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the formatter is available (dependencies installed).

        Returns:
            True if the formatter can be used
        """
