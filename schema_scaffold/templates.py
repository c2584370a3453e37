"""
Template rendering for generated files.

Templates are Jinja2 files named after the file they produce plus a
``.template`` suffix (e.g. ``Page.js.template``). They are rendered with the
entity name, its name variants and any extra fields, then formatted
according to the produced file's extension.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

import jinja2

from .formatters import Formatter, PrettierFormatter, parser_for_filename
from .naming import name_variants
from .node import BABEL_TS_SCRIPT, run_node_script
from .paths import ProjectPaths

logger = logging.getLogger(__name__)

TEMPLATE_ROOT = Path(__file__).parent.resolve() / "templates"

PRETTIER_CONFIG_FILENAME = "prettier.config.js"

_TS_EXTENSION_PATTERN = re.compile(r"\.ts$")


def prettier_config_path(paths: ProjectPaths) -> Path | None:
    """Return the project's prettier config, or None to use prettier's defaults."""
    config_path = paths.base / PRETTIER_CONFIG_FILENAME
    if config_path.is_file():
        return config_path
    logger.debug("No %s in %s, using default formatting options", PRETTIER_CONFIG_FILENAME, paths.base)
    return None


def prettify(
    template_filename: str,
    rendered_template: str,
    formatter: Formatter | None = None,
    config_path: Path | None = None,
) -> str:
    """
    Format a rendered template according to the extension of the file it produces.

    Args:
        template_filename: Template (or output) file name, e.g. "Page.js.template"
        rendered_template: The rendered text
        formatter: Formatter to use (defaults to prettier)
        config_path: Optional formatter config file

    Returns:
        The formatted text, or the rendered text unchanged for extensions that are not formatted
    """
    parser = parser_for_filename(template_filename)
    if parser is None:
        return rendered_template

    formatter = formatter or PrettierFormatter()
    return formatter.format(rendered_template, parser, config_path)


def generate_template(
    template_filename: str,
    name: str,
    root: str | Path | None = None,
    formatter: Formatter | None = None,
    config_path: Path | None = None,
    **rest,
) -> str:
    """
    Render a template with the name variants of ``name`` and format the result.

    Args:
        template_filename: Path of the template, relative to ``root``
        name: Entity name the variants are derived from
        root: Template directory (defaults to the packaged templates)
        formatter: Formatter to use (defaults to prettier)
        config_path: Optional formatter config file
        **rest: Extra template fields; they override the name variants

    Returns:
        The rendered and formatted file contents
    """
    root = Path(root) if root else TEMPLATE_ROOT
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(root)),
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    template = env.get_template(Path(template_filename).as_posix())

    logger.debug("Rendering %s for %r", template_filename, name)
    rendered_template = template.render(
        name=name,
        **{**name_variants(name).to_dict(), **rest},
    )

    return prettify(template_filename, rendered_template, formatter, config_path)


def transform_ts_to_js(
    filename: str,
    content: str,
    cwd: Path | None = None,
    formatter: Formatter | None = None,
    config_path: Path | None = None,
) -> str:
    """
    Convert a generated TypeScript file into JavaScript.

    The type annotations are stripped with Babel (run under Node from ``cwd``)
    and the result is formatted as a ``.js`` file.
    """
    code = run_node_script(BABEL_TS_SCRIPT, json.dumps({"filename": filename, "code": content}), cwd=cwd)
    return prettify(_TS_EXTENSION_PATTERN.sub(".js", filename), code, formatter, config_path)
