import dataclasses
import json
from pathlib import Path

import click
import jinja2

from . import __version__, colors
from .cli_utils import PROG_NAME, reconstruct_command_line, setup_logging
from .config import ScaffoldConfig
from .errors import LookupNotFoundError, NodeScriptError
from .formatters import PrettierFormatter
from .naming import name_variants
from .paths import get_paths
from .routes import add_routes_to_router, remove_routes_from_router
from .schema import get_enum, get_schema
from .tasks import TASK_ERRORS, CommandTask, TaskRunner, delete_files_tasks, run_command_tasks, write_files_tasks
from .templates import generate_template, prettier_config_path


# Parameters of generate_template that cannot be passed as template fields
RESERVED_FIELDS = ("template_filename", "name", "root", "formatter", "config_path")


def _parse_fields(fields):
    parsed = {}
    for item in fields:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--field")
        if key in RESERVED_FIELDS:
            raise click.BadParameter(f"{key!r} is a reserved field name", param_hint="--field")
        parsed[key] = value
    return parsed


def _fail(ctx, message):
    click.echo(colors.error(message), err=True)
    ctx.exit(1)


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase verbosity (-v for INFO, -vv for DEBUG)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.version_option(__version__, prog_name=PROG_NAME)
@click.pass_context
def schema_scaffold(ctx, verbose, config):
    setup_logging(verbose)

    if config is not None:
        with open(config) as f:
            config = ScaffoldConfig.from_dict(json.load(f))
    else:
        config = ScaffoldConfig()

    if verbose:
        config.renderer = "verbose"

    ctx.obj = config


@schema_scaffold.command()
@click.argument("name")
def variants(name):
    """Print the name variants templates are rendered with."""
    click.echo(json.dumps(name_variants(name).to_dict(), indent=2))


@schema_scaffold.command()
@click.option("--root", "-r", default=None, type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--field", "fields", multiple=True, help="Extra template field as KEY=VALUE")
@click.argument("template")
@click.argument("name")
@click.argument("output", type=click.Path(resolve_path=True))
@click.pass_context
def generate(ctx, root, force, fields, template, name, output):
    """Render TEMPLATE for NAME and write it to OUTPUT."""
    config = ctx.obj
    paths = get_paths()

    extra = _parse_fields(fields)
    extra.setdefault("command_line", reconstruct_command_line(generate))

    try:
        contents = generate_template(
            template,
            name,
            root=root or config.template_root,
            formatter=PrettierFormatter(config.formatter),
            config_path=prettier_config_path(paths),
            **extra,
        )
    except (*TASK_ERRORS, jinja2.TemplateError) as e:
        _fail(ctx, str(e))

    tasks = write_files_tasks(
        {output: contents},
        overwrite_existing=force or config.output.overwrite_existing,
        base=paths.base,
    )
    report = TaskRunner(renderer=config.renderer).run(tasks)
    if not report.success:
        ctx.exit(1)


@schema_scaffold.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(resolve_path=True))
@click.pass_context
def destroy(ctx, files):
    """Delete generated FILES and the directories they leave empty."""
    paths = get_paths()
    report = TaskRunner(renderer=ctx.obj.renderer).run(delete_files_tasks(files, base=paths.base))
    if not report.success:
        ctx.exit(1)


@schema_scaffold.group()
def routes():
    """Add or remove routes in the project's routes file."""


@routes.command("add")
@click.argument("declarations", nargs=-1, required=True)
@click.pass_context
def add_routes_command(ctx, declarations):
    """Add route DECLARATIONS (one <Route ... /> element each)."""
    paths = get_paths()
    try:
        add_routes_to_router(paths, list(declarations))
    except TASK_ERRORS as e:
        _fail(ctx, str(e))
    click.echo(colors.green(f"Updated {paths.web.routes}"))


@routes.command("remove")
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def remove_routes_command(ctx, names):
    """Remove the routes called NAMES."""
    paths = get_paths()
    try:
        remove_routes_from_router(paths, list(names))
    except TASK_ERRORS as e:
        _fail(ctx, str(e))
    click.echo(colors.green(f"Updated {paths.web.routes}"))


@schema_scaffold.command()
@click.option("--enum", "is_enum", is_flag=True, default=False, help="Look up an enum instead of a model")
@click.argument("name", required=False)
@click.pass_context
def schema(ctx, is_enum, name):
    """Print a model (or enum) of the project's schema as JSON."""
    paths = get_paths()
    try:
        result = get_enum(paths, name) if is_enum else get_schema(paths, name)
    except (LookupNotFoundError, NodeScriptError, OSError) as e:
        _fail(ctx, str(e))

    if isinstance(result, list):
        data = [dataclasses.asdict(item) for item in result]
    else:
        data = dataclasses.asdict(result)
    click.echo(json.dumps(data, indent=2))


@schema_scaffold.command()
@click.option("--cwd", default=None, type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("commands", nargs=-1, required=True)
@click.pass_context
def run(ctx, cwd, commands):
    """Run shell COMMANDS in order (in the api directory by default)."""
    paths = get_paths()
    tasks = [CommandTask(title=f"Running `{command}`...", cmd=command, cwd=cwd) for command in commands]
    if not run_command_tasks(tasks, paths, verbose=ctx.obj.renderer == "verbose"):
        ctx.exit(1)
