"""Schema Scaffold

Helpers for generators that scaffold web-application source files from a
database schema: name variants, template rendering and formatting,
generated-file write/delete task lists, and routes file patching.
"""

__version__ = "1.0.0"
__author__ = "Schema Scaffold Developers"

from .config import FormatterConfig, OutputConfig, ScaffoldConfig
from .errors import (
    AlreadyExistsError,
    CommandExecutionError,
    LookupNotFoundError,
    NodeScriptError,
    ProjectResolutionError,
    ScaffoldError,
)
from .files import SUPPORTED_EXTENSIONS, base_file, byte_size, delete_file, exists_any_extension, read_file, write_file
from .naming import NameVariants, name_variants
from .paths import ProjectPaths, get_paths, resolve_project_paths
from .routes import add_routes, add_routes_to_router, remove_routes, remove_routes_from_router
from .schema import get_enum, get_schema
from .tasks import (
    RunReport,
    TaskRunner,
    TaskStatus,
    cleanup_empty_dirs_tasks,
    delete_files_tasks,
    run_command_tasks,
    write_files_tasks,
)
from .templates import generate_template, prettify, transform_ts_to_js

__all__ = [
    "ScaffoldConfig",
    "FormatterConfig",
    "OutputConfig",
    "ScaffoldError",
    "AlreadyExistsError",
    "CommandExecutionError",
    "LookupNotFoundError",
    "NodeScriptError",
    "ProjectResolutionError",
    "SUPPORTED_EXTENSIONS",
    "base_file",
    "byte_size",
    "delete_file",
    "exists_any_extension",
    "read_file",
    "write_file",
    "NameVariants",
    "name_variants",
    "ProjectPaths",
    "get_paths",
    "resolve_project_paths",
    "add_routes",
    "add_routes_to_router",
    "remove_routes",
    "remove_routes_from_router",
    "get_enum",
    "get_schema",
    "RunReport",
    "TaskRunner",
    "TaskStatus",
    "cleanup_empty_dirs_tasks",
    "delete_files_tasks",
    "run_command_tasks",
    "write_files_tasks",
    "generate_template",
    "prettify",
    "transform_ts_to_js",
]
