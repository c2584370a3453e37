"""
CLI utilities for command introspection.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import click

PROG_NAME = "schema_scaffold"


def get_default_args(click_command: click.Command) -> dict[str, Any]:
    """
    Extract the default value of every parameter of a Click command.

    Args:
        click_command: Click command object for introspection

    Returns:
        {parameter name: default value}
    """
    return {param.name: param.default for param in click_command.params}


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    # Try to get current Click context for parameter values
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return PROG_NAME

    cmd_parts = [PROG_NAME, *ctx.command_path.split()[1:]]
    if not cli_args:
        return " ".join(cmd_parts)

    arguments = []  # For positional arguments
    options = []  # For optional arguments

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        if isinstance(value, (list, tuple)):
            values = [_format_value(v) for v in value]
        else:
            values = [_format_value(value)]

        if isinstance(param, click.Argument):
            arguments.extend(values)

        elif isinstance(param, click.Option):
            # Skip if it's the default value
            if value == param.default:
                continue

            # Get the primary option name (first in opts list)
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                for v in values:
                    options.extend([flag, v])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)


def _format_value(value: Any) -> str:
    # Existing file paths are shown by name only for cleaner display
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        return path_obj.name if path_obj.exists() else str(value)
    return str(value)


def setup_logging(verbosity: int) -> None:
    """
    Configure the package logger based on verbosity level.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S"))

    root_logger = logging.getLogger(PROG_NAME)
    root_logger.setLevel(level)
    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False
