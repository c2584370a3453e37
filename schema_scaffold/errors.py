"""
Exceptions raised by the scaffolding helpers.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all scaffolding errors."""

    pass


class LookupNotFoundError(ScaffoldError, LookupError):
    """Raised when a model or enum is missing from the introspected schema."""

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class AlreadyExistsError(ScaffoldError, FileExistsError):
    """Raised when a write target exists and overwriting is not permitted."""

    def __init__(self, target: str):
        super().__init__(f"{target} already exists.")
        self.target = target


class ProjectResolutionError(ScaffoldError):
    """Raised when the current directory is not inside a recognized project."""

    pass


class CommandExecutionError(ScaffoldError):
    """Raised when an external command exits with a non-zero status.

    Attributes:
        command: The command line that was run
        returncode: Exit status of the process
        stderr: Captured standard error (empty when output was streamed)
    """

    def __init__(self, command: str, returncode: int, stderr: str = ""):
        message = f"Command failed with exit code {returncode}: {command}"
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class NodeScriptError(ScaffoldError):
    """Raised when a helper script run under Node fails or Node is missing."""

    pass
