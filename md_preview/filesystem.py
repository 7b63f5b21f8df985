"""Locating, reading and exporting preview documents."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from .constants import PREVIEW_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "MD_PREVIEW_MAX_FILE_SIZE"


def resolve_max_file_size(configured: int) -> int:
    """Return the document size limit in bytes.

    ``MD_PREVIEW_MAX_FILE_SIZE`` takes precedence over the configured value
    when it is set to a non-empty string.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        resolve_max_file_size(10 * 1024 * 1024)
    """
    raw = os.environ.get(MAX_FILE_SIZE_ENV_VAR, "").strip()
    if not raw:
        return configured
    if not raw.isdecimal() or int(raw) == 0:
        raise ValueError(
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {raw!r} (expected positive integer)"
        )
    return int(raw)


def first_symlink(path: Path) -> Path | None:
    """Return the first symlink among `path` and its parents, if any.

    Entries that cannot be inspected are treated as regular entries.
    """
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return candidate
        except OSError:
            continue
    return None


def resolve_document(
    raw_path: str, base_dir: Path, extensions: Iterable[str] = PREVIEW_EXTENSIONS
) -> Path:
    """Turn a user-supplied path into the absolute path of a previewable document.

    Args:
        raw_path: Absolute or relative path, ``~`` allowed.
        base_dir: Working directory the document must live under.
        extensions: Accepted extensions, lowercase with a leading dot.

    Returns:
        Path: Resolved document path.

    Raises:
        ValueError: If the path traverses a symlink, does not exist, is not a
            regular file, lies outside `base_dir` or has another extension.

    Examples:
        resolve_document("notes/today.md", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    link = first_symlink(path)
    if link is not None:
        raise ValueError(f"Symlinks are not supported for security reasons: {link}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    if not resolved.is_relative_to(base_dir):
        raise ValueError(f"{resolved} is outside of the working directory {base_dir}.")

    allowed = tuple(extensions)
    if resolved.suffix.lower() not in allowed:
        raise ValueError(
            f"{resolved} is not a previewable text file.\n"
            f"Supported extensions are: {', '.join(allowed)}"
        )
    return resolved


def find_autoload_file(base_dir: Path, filenames: Iterable[str]) -> Path | None:
    """Return the first well-known document present in `base_dir`.

    Symlinks, directories and entries that cannot be inspected are skipped.

    Examples:
        find_autoload_file(Path.cwd(), ["example.txt", "sample.txt"])
    """
    for filename in filenames:
        candidate = base_dir / filename
        try:
            if candidate.is_symlink() or not candidate.is_file():
                continue
        except OSError:
            continue
        return candidate
    return None


def read_document(path: Path, max_size: int) -> str:
    """Read a document for preview.

    The entry is inspected without following symlinks, must be a regular
    file no larger than `max_size`, and must decode as UTF-8. At most
    ``max_size + 1`` bytes are read, so a file that grows after the size
    check is still refused.

    Args:
        path: Document path, usually from `resolve_document`.
        max_size: Size limit in bytes.

    Returns:
        str: Document text.

    Raises:
        IOError: If any of the checks fails or the file cannot be read.

    Examples:
        text = read_document(Path("notes.md"), 1024 * 1024)
    """
    try:
        info = path.lstat()
    except OSError as error:
        raise IOError(f"Error accessing {path}: {error}") from error

    if stat.S_ISLNK(info.st_mode):
        raise IOError(f"Symlinks are not supported: {path}")
    if not stat.S_ISREG(info.st_mode):
        raise IOError(f"{path} is not a regular file.")

    too_large = f"{path} exceeds the maximum allowed size of {max_size} bytes."
    if info.st_size > max_size:
        raise IOError(too_large)

    try:
        with open(path, "rb") as stream:
            data = stream.read(max_size + 1)
    except OSError as error:
        raise IOError(f"Error reading {path}: {error}") from error
    if len(data) > max_size:
        raise IOError(too_large)

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {path}: {error}") from error


def export_html(html: str, target: Path):
    """Write rendered HTML to `target` atomically.

    The HTML goes to a temporary file next to the target, is synced, and is
    moved into place with `os.replace`.

    Raises:
        IOError: If the target is a symlink or directory, or cannot be written.

    Examples:
        export_html("<h1>Title</h1>", Path("exported-content.html"))
    """
    link = first_symlink(target)
    if link is not None:
        raise IOError(f"Symlinks are not supported for security reasons: {link}")
    if target.is_dir():
        raise IOError(f"{target} is a directory.")

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=target.parent, suffix=".tmp"
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(html if html.endswith("\n") else f"{html}\n")
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(temp_path, target)
    except OSError as error:
        raise IOError(f"Error writing {target}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
