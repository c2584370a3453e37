"""
Well-known paths of the project being scaffolded.

Paths are resolved once, from the working directory, and the resulting
``ProjectPaths`` value is passed to every helper that touches the project.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click

from . import colors
from .errors import ProjectResolutionError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "redwood.toml"
ROUTES_EXTENSIONS = (".js", ".tsx", ".ts")

# A missing project is reported, not treated as a failure
PROJECT_RESOLUTION_EXIT_CODE = 0


@dataclass(frozen=True)
class ApiPaths:
    base: Path
    db: Path
    src: Path
    services: Path
    graphql: Path


@dataclass(frozen=True)
class WebPaths:
    base: Path
    src: Path
    routes: Path
    pages: Path
    components: Path
    layouts: Path


@dataclass(frozen=True)
class ProjectPaths:
    """Absolute paths of one project."""

    base: Path
    api: ApiPaths
    web: WebPaths

    @property
    def schema_path(self) -> Path:
        return self.api.db / "schema.prisma"

    @staticmethod
    def from_base(base: Path) -> ProjectPaths:
        """Build the path layout for the project rooted at ``base``."""
        base = Path(base).resolve()
        api = base / "api"
        web = base / "web"
        web_src = web / "src"
        return ProjectPaths(
            base=base,
            api=ApiPaths(
                base=api,
                db=api / "prisma",
                src=api / "src",
                services=api / "src" / "services",
                graphql=api / "src" / "graphql",
            ),
            web=WebPaths(
                base=web,
                src=web_src,
                routes=_resolve_routes_file(web_src),
                pages=web_src / "pages",
                components=web_src / "components",
                layouts=web_src / "layouts",
            ),
        )


def _resolve_routes_file(web_src: Path) -> Path:
    for ext in ROUTES_EXTENSIONS:
        candidate = web_src / f"Routes{ext}"
        if candidate.exists():
            return candidate
    return web_src / f"Routes{ROUTES_EXTENSIONS[0]}"


def find_project_base(cwd: Path | None = None) -> Path:
    """Walk up from ``cwd`` to the directory holding the project config file.

    Raises:
        ProjectResolutionError: If no parent directory holds the config file
    """
    start = Path(cwd or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        if (directory / CONFIG_FILENAME).is_file():
            return directory
    raise ProjectResolutionError(f"Could not find a '{CONFIG_FILENAME}' file in {start} or any parent directory")


def resolve_project_paths(cwd: Path | None = None) -> ProjectPaths:
    """Resolve the paths of the project containing ``cwd``."""
    base = find_project_base(cwd)
    logger.debug("Resolved project base: %s", base)
    return ProjectPaths.from_base(base)


def get_paths(cwd: Path | None = None) -> ProjectPaths:
    """Resolve project paths, terminating the process with a message on failure.

    Nothing can be generated without valid project paths, so this is the one
    error reported directly to the user instead of being propagated.
    """
    try:
        return resolve_project_paths(cwd)
    except ProjectResolutionError as e:
        click.echo(colors.error(str(e)), err=True)
        sys.exit(PROJECT_RESOLUTION_EXIT_CODE)
