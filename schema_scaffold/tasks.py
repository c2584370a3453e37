"""
Task lists for writing and deleting generated files.

Every file-system change is described by a task dataclass (``WriteTask``,
``DeleteTask``, ``CleanupTask``, ``CommandTask`` or a ``TaskGroup`` of
them). Building a task list performs no I/O; a ``TaskRunner`` then executes
the tasks one at a time, evaluating each skip condition right before the
task would run, and reports the outcome as a ``RunReport``.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Union

import click

from . import colors
from .config import RENDERERS
from .errors import CommandExecutionError, ScaffoldError
from .files import PathLike, base_file, delete_file, exists_any_extension, write_file
from .paths import ProjectPaths

logger = logging.getLogger(__name__)

# Errors a task may fail with; anything else is a bug and propagates
TASK_ERRORS = (ScaffoldError, OSError, ValueError, subprocess.SubprocessError)


def _display_path(path: PathLike, base: Path | None) -> str:
    if base is None:
        return os.fspath(path)
    return f"./{os.path.relpath(path, base)}"


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@dataclass
class WriteTask:
    """Write one generated file, failing if it exists and overwriting is not allowed."""

    path: str
    contents: str
    overwrite_existing: bool = False
    base: Path | None = None

    @property
    def title(self) -> str:
        return f"Writing `{_display_path(self.path, self.base)}`..."

    def skip_reason(self) -> str | bool:
        return False

    def run(self) -> None:
        write_file(self.path, self.contents, overwrite_existing=self.overwrite_existing)


@dataclass
class DeleteTask:
    """Delete one generated file under every supported source extension."""

    path: str
    base: Path | None = None

    @property
    def title(self) -> str:
        return f"Destroying `{_display_path(base_file(self.path), self.base)}`..."

    def skip_reason(self) -> str | bool:
        if not exists_any_extension(self.path):
            return "File doesn't exist"
        return False

    def run(self) -> None:
        delete_file(self.path)


@dataclass
class CleanupTask:
    """Remove a directory if it is empty (never recursive)."""

    directory: str
    base: Path | None = None

    @property
    def title(self) -> str:
        return f"Removing empty `{_display_path(self.directory, self.base)}`..."

    def skip_reason(self) -> str | bool:
        if not os.path.exists(self.directory):
            return "Doesn't exist"
        if os.listdir(self.directory):
            return "Not empty"
        return False

    def run(self) -> None:
        os.rmdir(self.directory)
        logger.info("Removed empty directory %s", self.directory)


@dataclass
class CommandTask:
    """Run one external command through the shell.

    Attributes:
        title: Title shown while the command runs
        cmd: Command to run
        args: Arguments appended to the command
        cwd: Working directory (None = the caller's default)
        verbose: Stream the command's output instead of capturing it
        env: Extra environment variables
    """

    title: str
    cmd: str
    args: list[str] = field(default_factory=list)
    cwd: Path | None = None
    verbose: bool = False
    env: dict[str, str] = field(default_factory=dict)

    @property
    def command_line(self) -> str:
        return " ".join([self.cmd, *self.args])

    def skip_reason(self) -> str | bool:
        return False

    def run(self) -> None:
        logger.debug("Running `%s` in %s", self.command_line, self.cwd)
        output = None if self.verbose else subprocess.PIPE
        result = subprocess.run(
            self.command_line,
            shell=True,
            cwd=str(self.cwd) if self.cwd else None,
            env={**os.environ, **self.env},
            stdout=output,
            stderr=output,
            text=True,
            errors="replace",
        )
        if result.returncode != 0:
            raise CommandExecutionError(self.command_line, result.returncode, result.stderr or "")


@dataclass
class TaskGroup:
    """A titled list of tasks run as one step."""

    title: str
    tasks: list[Task] = field(default_factory=list)

    def skip_reason(self) -> str | bool:
        return False


Task = Union[WriteTask, DeleteTask, CleanupTask, CommandTask, TaskGroup]


# ---------------------------------------------------------------------------
# Task list builders
# ---------------------------------------------------------------------------


def write_files_tasks(
    files: Mapping[str, str],
    overwrite_existing: bool = False,
    base: Path | None = None,
) -> list[WriteTask]:
    """
    Create a list of tasks that write files to the disk.

    Args:
        files: {filepath: contents}
        overwrite_existing: Replace files that already exist
        base: Project directory titles are shown relative to

    Returns:
        One write task per file, in the mapping's order
    """
    return [WriteTask(path, contents, overwrite_existing=overwrite_existing, base=base) for path, contents in files.items()]


def cleanup_empty_dirs_tasks(files: Iterable[str], base: Path | None = None) -> list[CleanupTask]:
    """
    Create a list of tasks removing the parent directories of ``files`` that are empty.

    Args:
        files: File paths (a {filepath: contents} mapping works too)
        base: Project directory titles are shown relative to

    Returns:
        One cleanup task per unique parent directory, in first-seen order
    """
    unique_dirs = dict.fromkeys(os.path.dirname(os.fspath(file)) or "." for file in files)
    return [CleanupTask(directory, base=base) for directory in unique_dirs]


def delete_files_tasks(files: Iterable[str], base: Path | None = None) -> list[Task]:
    """
    Create a list of tasks that delete files from the disk.

    The directory cleanup step always runs last, so directories are only
    removed once every file in them has been deleted.

    Args:
        files: File paths (a {filepath: contents} mapping works too)
        base: Project directory titles are shown relative to

    Returns:
        One delete task per file followed by a directory cleanup group
    """
    files = list(files)
    return [
        *(DeleteTask(path, base=base) for path in files),
        TaskGroup("Cleaning up empty directories...", cleanup_empty_dirs_tasks(files, base=base)),
    ]


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


class TaskStatus(str, Enum):
    """Outcome of a single task."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"
    PENDING = "pending"  # Never reached because an earlier task failed


@dataclass
class TaskResult:
    """Outcome of one task (and of its children for a task group)."""

    title: str
    status: TaskStatus
    skip_reason: str | None = None
    error: BaseException | None = None
    children: list[TaskResult] = field(default_factory=list)


@dataclass
class RunReport:
    """Outcome of a whole task list."""

    results: list[TaskResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not any(result.status is TaskStatus.FAILED for result in self.results)

    @property
    def failures(self) -> list[TaskResult]:
        """Failed leaf tasks, in execution order."""
        failed = []
        stack = list(reversed(self.results))
        while stack:
            result = stack.pop()
            if result.children:
                stack.extend(reversed(result.children))
            elif result.status is TaskStatus.FAILED:
                failed.append(result)
        return failed

    @property
    def error(self) -> BaseException | None:
        """The error of the first failed task, if any."""
        failures = self.failures
        return failures[0].error if failures else None


class TaskRunner:
    """Runs tasks sequentially, one at a time, in order.

    Args:
        renderer: "default" prints one line per finished task, "verbose" prints
            start/finish events, "silent" prints nothing
        exit_on_error: Stop at the first failed task (remaining tasks are reported as pending)
        echo: Output function (defaults to ``click.echo``)
    """

    def __init__(
        self,
        renderer: str = "default",
        exit_on_error: bool = True,
        echo: Callable[[str], None] | None = None,
    ):
        if renderer not in RENDERERS:
            raise ValueError(f"Unknown renderer {renderer!r}, expected one of {', '.join(RENDERERS)}")
        self.renderer = renderer
        self.exit_on_error = exit_on_error
        self._echo = echo or click.echo

    def run(self, tasks: Sequence[Task]) -> RunReport:
        return RunReport(self._run_tasks(tasks, depth=0))

    def _run_tasks(self, tasks: Sequence[Task], depth: int) -> list[TaskResult]:
        results = []
        stopped = False
        for task in tasks:
            if stopped:
                results.append(TaskResult(task.title, TaskStatus.PENDING))
                continue
            result = self._run_task(task, depth)
            results.append(result)
            if result.status is TaskStatus.FAILED and self.exit_on_error:
                stopped = True
        return results

    def _run_task(self, task: Task, depth: int) -> TaskResult:
        try:
            reason = task.skip_reason()
        except TASK_ERRORS as e:
            logger.debug("Skip check of %r failed", task.title, exc_info=True)
            self._render_failed(task.title, e, depth)
            return TaskResult(task.title, TaskStatus.FAILED, error=e)

        if reason:
            self._render_skipped(task.title, reason, depth)
            return TaskResult(task.title, TaskStatus.SKIPPED, skip_reason=reason)

        self._render_started(task, depth)

        if isinstance(task, TaskGroup):
            children = self._run_tasks(task.tasks, depth + 1)
            failed = [child for child in children if child.status is TaskStatus.FAILED]
            if failed:
                self._render_failed(task.title, failed[0].error, depth)
                return TaskResult(task.title, TaskStatus.FAILED, error=failed[0].error, children=children)
            self._render_completed(task, depth)
            return TaskResult(task.title, TaskStatus.COMPLETED, children=children)

        try:
            task.run()
        except TASK_ERRORS as e:
            logger.debug("Task %r failed", task.title, exc_info=True)
            self._render_failed(task.title, e, depth)
            return TaskResult(task.title, TaskStatus.FAILED, error=e)

        self._render_completed(task, depth)
        return TaskResult(task.title, TaskStatus.COMPLETED)

    # -- rendering ----------------------------------------------------------

    def _render_started(self, task: Task, depth: int) -> None:
        if self.renderer == "verbose":
            self._echo(f"[started] {task.title}")
        elif self.renderer == "default" and isinstance(task, TaskGroup):
            self._echo(f"{'  ' * depth}{colors.info('❯')} {task.title}")

    def _render_completed(self, task: Task, depth: int) -> None:
        if self.renderer == "verbose":
            self._echo(f"[completed] {task.title}")
        elif self.renderer == "default" and not isinstance(task, TaskGroup):
            self._echo(f"{'  ' * depth}{colors.green('✔')} {task.title}")

    def _render_skipped(self, title: str, reason: str, depth: int) -> None:
        if self.renderer == "verbose":
            self._echo(f"[skipped] {title} ({reason})")
        elif self.renderer == "default":
            self._echo(f"{'  ' * depth}{colors.warning('↓')} {title} {colors.dim(f'[skipped: {reason}]')}")

    def _render_failed(self, title: str, error: BaseException | None, depth: int) -> None:
        if self.renderer == "verbose":
            self._echo(f"[failed] {title}")
            if error is not None:
                self._echo(f"[failed] {error}")
        elif self.renderer == "default":
            self._echo(f"{'  ' * depth}{colors.error('✖')} {title}")
            if error is not None:
                self._echo(f"{'  ' * (depth + 1)}{colors.error('→')} {error}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def run_command_tasks(
    commands: Sequence[CommandTask],
    paths: ProjectPaths,
    verbose: bool = False,
    echo: Callable[[str], None] | None = None,
) -> bool:
    """
    Run external commands in order, stopping at the first failure.

    Args:
        commands: Commands to run; those without a ``cwd`` run in the api directory
        paths: Project paths
        verbose: Stream command output and use the verbose renderer
        echo: Output function (defaults to ``click.echo``)

    Returns:
        True if every command succeeded
    """
    tasks = [replace(command, cwd=command.cwd or paths.api.base, verbose=verbose) for command in commands]
    runner = TaskRunner(renderer="verbose" if verbose else "default", echo=echo)
    report = runner.run(tasks)

    if not report.success:
        logger.debug("Command run failed: %s", report.error)
        (echo or click.echo)(colors.error(str(report.error)))
        return False
    return True
