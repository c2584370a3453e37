"""
Console colour helpers for user-facing messages.
"""

from __future__ import annotations

import click


def error(message: str) -> str:
    return click.style(message, fg="red")


def warning(message: str) -> str:
    return click.style(message, fg="yellow")


def green(message: str) -> str:
    return click.style(message, fg="green")


def info(message: str) -> str:
    return click.style(message, fg="cyan")


def dim(message: str) -> str:
    return click.style(message, dim=True)
