"""
File-system helpers for generated files.

Generators may emit ``.ts`` where a previous run (or the project itself)
has ``.js`` or ``.tsx``, so existence checks and deletion treat every
supported source extension of a file as the same logical file.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from .errors import AlreadyExistsError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".js", ".ts", ".tsx")

_EXTENSION_PATTERN = re.compile(r"\.\w*$")

PathLike = str | os.PathLike


def base_file(file: PathLike) -> str:
    """Strip the trailing extension: "a/b/Thing.tsx" -> "a/b/Thing"."""
    return _EXTENSION_PATTERN.sub("", os.fspath(file), count=1)


def _source_variants(file: PathLike) -> list[str] | None:
    """Return every supported-extension variant of ``file``, or None for other extensions."""
    if os.path.splitext(os.fspath(file))[1] not in SUPPORTED_EXTENSIONS:
        return None
    base = base_file(file)
    return [base + ext for ext in SUPPORTED_EXTENSIONS]


def exists_any_extension(file: PathLike) -> bool:
    """Check whether ``file`` exists under any supported source extension.

    For files without a supported extension only the exact path is checked.
    """
    variants = _source_variants(file)
    if variants is None:
        return os.path.exists(file)
    return any(os.path.exists(variant) for variant in variants)


def delete_file(file: PathLike) -> None:
    """Delete ``file``, including every existing supported-extension variant of it.

    Raises:
        FileNotFoundError: If ``file`` has another extension and does not exist
    """
    variants = _source_variants(file)
    if variants is None:
        os.unlink(file)
        logger.info("Deleted %s", file)
        return

    for variant in variants:
        if os.path.exists(variant):
            os.unlink(variant)
            logger.info("Deleted %s", variant)


def read_file(target: PathLike) -> str:
    with open(target, encoding="utf-8") as f:
        return f.read()


def write_file(target: PathLike, contents: str, overwrite_existing: bool = False) -> None:
    """Write ``contents`` to ``target`` atomically.

    The content is written to a temporary file in the target directory which
    then replaces the target, so an interrupted write never leaves a partial
    file behind.

    Args:
        target: File to write
        contents: Text to write
        overwrite_existing: Replace the file if it already exists

    Raises:
        AlreadyExistsError: If the file exists and ``overwrite_existing`` is False
        OSError: If file operations fail
    """
    path = Path(target)
    if not overwrite_existing and path.exists():
        raise AlreadyExistsError(os.fspath(target))

    # Ensure parent directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory ensures atomic rename on the same filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        text=True,
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding="utf-8") as f:
            f.write(contents)
        # mkstemp creates the file as 0600; generated files get the usual umask-based mode
        temp_path.chmod(0o666 & ~_current_umask())
        temp_path.replace(path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    logger.info("Wrote %s (%d bytes)", path, byte_size(contents))


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def byte_size(contents: str) -> int:
    """Size of ``contents`` in bytes once encoded as UTF-8."""
    return len(contents.encode("utf-8"))
