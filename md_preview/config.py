"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class PreviewConfig:
    """Configuration for the md-preview command line shell.

    The markdown grammar itself is fixed; these settings only control how
    documents are found, read and exported.

    Attributes:
        autoload_filenames: Filenames tried, in order, in the working
            directory when no document is given.
        extensions: File extensions accepted as previewable documents.
        export_filename: Default target of ``--export``.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        PreviewConfig(autoload_filenames=("notes.txt",), export_filename="out.html")
    """

    autoload_filenames: tuple[str, ...] = (
        "[document_to_display_name].txt",
        "example.txt",
        "critical.txt",
        "sample.txt",
    )
    extensions: tuple[str, ...] = (".txt", ".md", ".markdown")
    export_filename: str = "exported-content.html"
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`export_filename` must not be empty")
    """


def load_config(search_path: Path) -> PreviewConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-preview]`` table from `pyproject.toml` and the
    ``[md-preview]`` or ``[tool.md-preview]`` table from `.md-preview.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        PreviewConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "md-preview")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".md-preview.toml",
            table_paths=[("md-preview",), ("tool", "md-preview")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return PreviewConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> PreviewConfig | None:
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
) -> PreviewConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return PreviewConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return PreviewConfig()

    try:
        return PreviewConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: PreviewConfig) -> PreviewConfig:
    """Coerce TOML lists to tuples and extensions to lowercase ``.ext`` form."""
    autoload_filenames = config.autoload_filenames
    if isinstance(autoload_filenames, list):
        autoload_filenames = tuple(autoload_filenames)

    extensions = config.extensions
    if isinstance(extensions, (list, tuple)):
        extensions = tuple(_normalize_extension(extension) for extension in extensions)

    return replace(config, autoload_filenames=autoload_filenames, extensions=extensions)


def _normalize_extension(extension: object) -> object:
    if not isinstance(extension, str) or not extension:
        return extension
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


def validate_config(config: PreviewConfig) -> None:
    """Validate a `PreviewConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If filename lists are malformed, the export filename is
            empty or the file size limit is not a positive integer.

    Examples:
        validate_config(PreviewConfig(max_file_size=1024))
    """
    config = normalize_config(config)

    _ensure_string_tuple("autoload_filenames", config.autoload_filenames)
    _ensure_string_tuple("extensions", config.extensions)
    if not config.extensions:
        raise ConfigError("`extensions` must not be empty")

    if not isinstance(config.export_filename, str) or not config.export_filename:
        raise ConfigError("`export_filename` must not be empty")

    if isinstance(config.max_file_size, bool) or not isinstance(config.max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: PreviewConfig, **overrides: object) -> PreviewConfig:
    """Apply override values to a `PreviewConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        PreviewConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `PreviewConfig`.

    Examples:
        updated = apply_overrides(config, export_filename="preview.html")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> PreviewConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        PreviewConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), export_filename="preview.html")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_string_tuple(key: str, values: object) -> None:
    if not isinstance(values, tuple) or not all(
        isinstance(value, str) and value for value in values
    ):
        raise ConfigError(f"`{key}` must be a list of non-empty strings")
