"""
Renders a markdown-like text file as preview HTML.
Without a file argument, the first well-known document found in the working
directory is rendered.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, PreviewConfig, build_config
from .converter import convert_document
from .filesystem import (
    export_html,
    find_autoload_file,
    read_document,
    resolve_document,
    resolve_max_file_size,
)

__all__ = ["cli"]

logger = logging.getLogger("md_preview")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _autoload_instructions(config: PreviewConfig) -> str:
    names = ", ".join(config.autoload_filenames)
    return (
        "No document given and none of the well-known files were found.\n"
        f"Place one of these files in the working directory: {names}\n"
        "Or pass the document to render: md-preview NOTES.md"
    )


def _resolve_document(
    filepath: str | None, base_dir: Path, config: PreviewConfig
) -> tuple[Path, bool]:
    if filepath is None:
        found = find_autoload_file(base_dir, config.autoload_filenames)
        if found is None:
            raise click.ClickException(_autoload_instructions(config))
        filepath = str(found)
        autoloaded = True
    else:
        autoloaded = False

    try:
        return resolve_document(filepath, base_dir, config.extensions), autoloaded
    except ValueError as error:
        raise click.BadParameter(str(error)) from error


@click.command()
@click.version_option()
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Write the rendered HTML to this file instead of stdout",
)
@click.option(
    "--export",
    "export",
    is_flag=True,
    help="Write the rendered HTML to the configured export filename",
)
@click.option("--export-filename", help="Override the configured export filename")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.argument("filepath", required=False, type=click.Path(dir_okay=False))
def cli(
    filepath: str | None = None,
    output: str | None = None,
    export: bool = False,
    export_filename: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for rendering a document as preview HTML.

    Args:
        filepath: Path to the document; when omitted, well-known filenames are
            tried in the working directory.
        output: Destination file for the HTML instead of stdout.
        export: Write the HTML to the configured export filename.
        export_filename: Override for the configured export filename.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the document path or configuration is invalid.
        click.ClickException: If no document can be found, read, or decoded,
            if filesystem safety checks fail, or if the export cannot be written.

    Examples:
        md-preview notes.md
        md-preview notes.md --export
        md-preview -o preview.html
    """
    _setup_logging(verbose)
    base_dir = Path.cwd().resolve()
    search_dir = Path(filepath).expanduser().parent if filepath else base_dir

    try:
        config = build_config(search_dir, export_filename=export_filename)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    document, autoloaded = _resolve_document(filepath, base_dir, config)
    if autoloaded:
        click.echo(f"{document.name} (auto-loaded)", err=True)

    try:
        max_file_size = resolve_max_file_size(config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        content = read_document(document, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    logger.debug("Rendering %s (%d characters)", document, len(content))
    result = convert_document(content)
    if not result.ok:
        click.echo(f"Warning: {result.diagnostic}", err=True)

    target = output or (config.export_filename if export else None)
    if target is None:
        click.echo(result.html)
        return

    target_path = Path(target).expanduser()
    if not target_path.is_absolute():
        target_path = base_dir / target_path
    try:
        export_html(result.html, target_path)
    except IOError as error:
        raise click.ClickException(str(error)) from error
    click.echo(f"Exported to {target_path}", err=True)


if __name__ == "__main__":
    cli()
