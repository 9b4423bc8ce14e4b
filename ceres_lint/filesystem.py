"""Filesystem helpers for ceres-lint."""

from __future__ import annotations

import glob
import os
import stat
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, DEFAULT_URL_DELAY

MAX_FILE_SIZE_ENV_VAR = "CERES_LINT_MAX_FILE_SIZE"
URL_DELAY_ENV_VAR = "CERES_LINT_URL_DELAY"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed document size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["CERES_LINT_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def get_url_delay(default: float = DEFAULT_URL_DELAY) -> float:
    """Resolve the pause between URL checks.

    Raises:
        ValueError: If the environment value is not a non-negative number.
    """
    env_value = os.environ.get(URL_DELAY_ENV_VAR)
    if env_value is None:
        return default

    try:
        delay = float(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {URL_DELAY_ENV_VAR}: {env_value} (expected non-negative number)"
        )
        raise ValueError(error_message) from error

    if delay < 0:
        error_message = f"{URL_DELAY_ENV_VAR} must not be negative, got {delay}."
        raise ValueError(error_message)

    return delay


def is_hidden(path: Path, root: Path | None = None) -> bool:
    """Check whether any component of `path` below `root` starts with a dot.

    Examples:
        is_hidden(Path("book/.drafts/ch1.ceres"))  # True
        is_hidden(Path("book/ch1.ceres"))  # False
    """
    if root is not None:
        try:
            path = path.relative_to(root)
        except ValueError:
            pass
    return any(part.startswith(".") and part not in (".", "..") for part in path.parts)


def _glob_root(pattern: Path) -> Path:
    """Return the leading components of a glob pattern that contain no wildcards.

    Examples:
        _glob_root(Path("~/.notes/**/*.ceres"))  # Path("~/.notes")
    """
    literal_parts = []
    for part in pattern.parts:
        if glob.has_magic(part):
            break
        literal_parts.append(part)
    return Path(*literal_parts) if literal_parts else Path()


def find_documents(
    pattern: str, include_hidden: bool = False, file_glob: str = "*.ceres"
) -> list[Path]:
    """List the documents selected by `pattern` in lexicographic order.

    A file path selects itself. A directory is searched recursively for names
    matching `file_glob`. Anything else is expanded as a recursive glob.
    Hidden components below the starting point are skipped unless
    `include_hidden` is set.

    Args:
        pattern: File, directory, or glob pattern.
        include_hidden: Whether to keep paths with hidden components.
        file_glob: Name pattern used when `pattern` is a directory.

    Returns:
        list[Path]: Matching regular files, sorted.

    Examples:
        find_documents("manuscript")
        find_documents("chapters/*.ceres", include_hidden=True)
    """
    start = Path(pattern).expanduser()

    if start.is_file():
        return [start]

    if start.is_dir():
        candidates = start.rglob(file_glob)
        root = start
    else:
        candidates = (
            Path(match)
            for match in glob.glob(str(start), recursive=True, include_hidden=include_hidden)
        )
        root = _glob_root(start)

    documents = [
        candidate
        for candidate in candidates
        if candidate.is_file() and (include_hidden or not is_hidden(candidate, root))
    ]
    return sorted(documents, key=str)


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a document.

    Raises:
        IOError: If the path is inaccessible or not a regular file.

    Examples:
        stat_result = collect_file_stat(Path("chapter1.ceres"))
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against documents that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("chapter1.ceres")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_document_lines(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> list[str]:
    """Read a document as a list of lines without terminators.

    Raises:
        IOError: If the file is not a readable regular file or is too large.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    enforce_file_size(collect_file_stat(filepath), max_size, filepath)
    with safe_read(filepath) as handle:
        # Only newlines end a line; form feeds and other separators stay in the text
        return [line.rstrip("\r\n") for line in handle]
