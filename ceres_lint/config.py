"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass(frozen=True)
class LintConfig:
    """Configuration for linting Ceres documents.

    Attributes:
        line_width: Maximum trimmed width of a line inside a code block, or None.
        line_count: Maximum number of content lines in a code block, or None.
        words_per_page: Words per page used to report counts as pages, or None.
        exclude_code: Whether lines inside code blocks are left out of word counts.
        check_urls: Whether URLs found in documents are fetched.
        include_hidden: Whether hidden files and directories are scanned.
        file_glob: Pattern matched against file names when scanning directories.
        open_marker: Token that opens a code block at column 0.
        close_marker: Token that closes a code block at column 0.
        language_tag: Annotation on the open marker declaring embedded PHP.
        embed_start: Marker that starts an embedded source segment.
        embed_end: Marker that ends an embedded source segment.
        lint_command: Command line of the external syntax checker.
        clean_marker: Phrase the linter prints when no errors are found.
        lint_timeout: Seconds to wait for the linter.
        url_delay: Seconds to pause after each URL check.
        url_timeout: Seconds to wait for a URL to respond.
        max_file_size: Maximum document size in bytes.

    Examples:
        LintConfig(line_width=60, line_count=40, exclude_code=True)
    """

    # Limits
    line_width: int | None = None
    line_count: int | None = None
    words_per_page: int | None = None

    # Switches
    exclude_code: bool = False
    check_urls: bool = False
    include_hidden: bool = False

    # Markup
    file_glob: str = "*.ceres"
    open_marker: str = "[code"
    close_marker: str = "[/code]"
    language_tag: str = "php"
    embed_start: str = "<?php"
    embed_end: str = "?>"

    # Collaborators
    lint_command: str = "php -l"
    clean_marker: str = "No syntax errors detected"
    lint_timeout: float = 30.0
    url_delay: float = 0.5
    url_timeout: float = 10.0
    max_file_size: int = 10 * 1024 * 1024


PRESETS: dict[str, dict[str, object]] = {
    "article": {"line_width": 80, "exclude_code": True},
    "book": {"line_width": 60, "line_count": 40, "words_per_page": 350, "exclude_code": True},
}


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`line_width` must be a positive integer")
    """


def load_config(search_path: Path) -> LintConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.ceres-lint]`` table from `pyproject.toml` and the
    ``[ceres-lint]`` or ``[tool.ceres-lint]`` table from `.ceres-lint.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        LintConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("manuscript"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "ceres-lint")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".ceres-lint.toml",
            table_paths=[("ceres-lint",), ("tool", "ceres-lint")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return LintConfig()


_MISSING = object()
_OPTIONAL_LIMITS = ("line_width", "line_count", "words_per_page")


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> LintConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> LintConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML has no null, so 0 in a file means "unset" for the optional limits
    raw_config = {
        key: (None if key in _OPTIONAL_LIMITS and value == 0 else value)
        for key, value in raw_config.items()
    }

    try:
        return LintConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def apply_preset(config: LintConfig, preset: str | None) -> LintConfig:
    """Apply a named preset (``"article"`` or ``"book"``) to a configuration.

    Raises:
        ConfigError: If the preset name is unknown.
    """
    if preset is None:
        return config
    try:
        values = PRESETS[preset]
    except KeyError as error:
        raise ConfigError(f"Unknown preset `{preset}`") from error
    return replace(config, **values)


def validate_config(config: LintConfig) -> None:
    """Validate a `LintConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If limits are not positive integers, switches are not
            booleans, markers are empty, or delays and timeouts are negative.

    Examples:
        validate_config(LintConfig(line_width=60))
    """
    limits = {
        key: getattr(config, key)
        for key in _OPTIONAL_LIMITS
        if getattr(config, key) is not None
    }
    _ensure_integers({**limits, "max_file_size": config.max_file_size})
    _ensure_positive({**limits, "max_file_size": config.max_file_size})

    for key in ("exclude_code", "check_urls", "include_hidden"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")

    for key in (
        "file_glob",
        "open_marker",
        "close_marker",
        "language_tag",
        "embed_start",
        "embed_end",
        "lint_command",
        "clean_marker",
    ):
        value = getattr(config, key)
        if not isinstance(value, str) or not value:
            raise ConfigError(f"`{key}` must not be empty")

    for key in ("lint_timeout", "url_delay", "url_timeout"):
        value = getattr(config, key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"`{key}` must be a number")
        if value < 0:
            raise ConfigError(f"`{key}` must not be negative")


def apply_overrides(config: LintConfig, **overrides: object) -> LintConfig:
    """Apply override values to a `LintConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        LintConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `LintConfig`.

    Examples:
        updated = apply_overrides(config, line_width=72, exclude_code=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, preset: str | None = None, **overrides: object) -> LintConfig:
    """Load, apply presets and overrides, and validate configuration.

    Explicit overrides win over the preset, which wins over file settings.

    Args:
        search_path: Directory where configuration files are resolved.
        preset: Optional preset name.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        LintConfig: Validated configuration ready for scanning.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), preset="book", check_urls=True)
    """
    config = load_config(search_path)
    config = apply_preset(config, preset)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
