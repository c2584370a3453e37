"""
Adds and removes route declarations in the project's routes file.

The routes file is patched with plain text substitution, so every route
must be declared on a single line as a self-closing ``<Route ... />``
element inside the ``<Router>`` element.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from .files import read_file, write_file
from .paths import ProjectPaths

logger = logging.getLogger(__name__)

_ROUTER_OPEN_PATTERN = re.compile(r"(\s*)<Router>")


def _route_by_name_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf'\s*<Route[^>]*name="{re.escape(name)}"[^>]*/>')


def add_routes(content: str, routes: Sequence[str]) -> str:
    """
    Insert route declarations right after the opening ``<Router>`` tag.

    Routes are inserted last to first, so they end up in the given order.
    A route whose exact text is already present is left alone.

    Args:
        content: Routes file content
        routes: Route declarations, e.g. '<Route path="/posts" page={PostsPage} name="posts" />'

    Returns:
        The patched content
    """
    for route in reversed(routes):
        if route in content:
            logger.debug("Route already present: %s", route)
            continue
        content = _ROUTER_OPEN_PATTERN.sub(
            lambda match, route=route: f"{match.group(1)}<Router>{match.group(1)}  {route}",
            content,
            count=1,
        )
    return content


def remove_routes(content: str, names: Sequence[str]) -> str:
    """
    Remove the first route declared with each of the given names.

    Names without a matching route are ignored.

    Args:
        content: Routes file content
        names: Route names (the value of the ``name`` attribute)

    Returns:
        The patched content
    """
    for name in names:
        content = _route_by_name_pattern(name).sub("", content, count=1)
    return content


def add_routes_to_router(paths: ProjectPaths, routes: Sequence[str]) -> None:
    """Add route declarations to the project's routes file."""
    routes_file = paths.web.routes
    write_file(routes_file, add_routes(read_file(routes_file), routes), overwrite_existing=True)


def remove_routes_from_router(paths: ProjectPaths, names: Sequence[str]) -> None:
    """Remove named routes from the project's routes file."""
    routes_file = paths.web.routes
    write_file(routes_file, remove_routes(read_file(routes_file), names), overwrite_existing=True)
