"""
Prettier formatter for style sheets and scripts.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)

# Prettier parser for each file extension we format
PARSERS = {
    ".css": "css",
    ".js": "babel",
    ".ts": "babel-ts",
}

TEMPLATE_SUFFIX = ".template"


def parser_for_filename(filename: str) -> str | None:
    """Return the prettier parser for a (template) file name, or None if it is not formatted."""
    if filename.endswith(TEMPLATE_SUFFIX):
        filename = filename[: -len(TEMPLATE_SUFFIX)]
    return PARSERS.get(Path(filename).suffix)


class PrettierFormatter(Formatter):
    """Formatter piping code through the prettier command line."""

    def __init__(self, config: FormatterConfig | None = None):
        self.config = config or FormatterConfig()
        self._available = None

    def is_available(self) -> bool:
        """Check if prettier can be run."""
        if self._available is None:
            try:
                result = subprocess.run(
                    [*self.config.command, "--version"],
                    capture_output=True,
                    text=True,
                    timeout=self.config.timeout,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
            if not self._available:
                logger.warning("prettier is not available, generated files will not be formatted")
        return self._available

    def format(self, code: str, parser: str, config_path: Path | None = None) -> str:
        """
        Format code using prettier.

        Args:
            code: Source code to format
            parser: Prettier parser name
            config_path: Prettier config file; without one prettier's defaults apply

        Returns:
            Formatted code
        """
        if not self.config.enabled or not self.is_available():
            # Return unformatted code if prettier is disabled or missing
            return code

        cmd = [*self.config.command, "--parser", parser]
        if config_path is not None:
            cmd.extend(["--config", str(config_path)])
        else:
            cmd.append("--no-config")

        try:
            # prettier reads stdin when no file is given
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except subprocess.SubprocessError as e:
            logger.warning("prettier failed: %s", e)
            return code

        if result.returncode != 0:
            logger.warning("prettier exited with code %d: %s", result.returncode, result.stderr.strip())
            return code
        return result.stdout
