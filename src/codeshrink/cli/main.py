"""CodeShrink CLI - codeshrink command."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from codeshrink import __version__
from codeshrink.config import load_config
from codeshrink.core.errors import CodeShrinkError
from codeshrink.core.logging import configure_logging, get_log_file_path
from codeshrink.summarize import language_for_path, summarize, supported_languages
from codeshrink.summarize._internal.text import split_lines
from codeshrink.summarize.models import Summary


@click.group()
@click.version_option(version=__version__, prog_name="codeshrink")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """CodeShrink - Summarize source files down to their declarations."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


def _make_stats_table(result: Summary) -> Table:
    """Create original-vs-summary comparison table."""
    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("", style="cyan")
    table.add_column("original", justify="right")
    table.add_column("summary", justify="right")
    table.add_column("reduction", style="green", justify="right")
    table.add_row(
        "chars",
        str(result.original_chars),
        str(result.summary_chars),
        f"{result.char_reduction:.1f}%",
    )
    table.add_row(
        "lines",
        str(result.original_lines),
        str(result.summary_lines),
        f"{result.line_reduction:.1f}%",
    )
    return table


def _error_with_log_pointer(error: CodeShrinkError) -> click.ClickException:
    """Wrap an error for the terminal, pointing at the log file when one is configured."""
    log_file = get_log_file_path()
    if log_file:
        return click.ClickException(f"{error}. See {log_file} for details.")
    return click.ClickException(str(error))


@cli.command("summarize")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--lang", "language_id", default=None, help="Language id (default: from extension)")
@click.option("--stats", is_flag=True, help="Print size statistics to stderr")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--min-lines",
    type=click.IntRange(min=0),
    default=None,
    help="Echo files shorter than N lines unchanged",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file",
)
@click.pass_context
def summarize_command(
    ctx: click.Context,
    path: Path,
    language_id: str | None,
    stats: bool,
    as_json: bool,
    min_lines: int | None,
    config_path: Path | None,
) -> None:
    """Summarize a source file.

    PATH is the file to summarize. The language is detected from its
    extension unless --lang is given.
    """
    try:
        config = load_config(config_path)
    except CodeShrinkError as e:
        raise click.ClickException(str(e)) from e
    if not ctx.obj.get("verbose"):
        configure_logging(config=config.logging)

    language_id = language_id or language_for_path(path)
    if language_id is None:
        raise click.ClickException(
            f"Cannot detect language for '{path}'. Pass --lang (see 'codeshrink languages')."
        )

    content = path.read_text(encoding="utf-8", errors="replace")

    if min_lines is not None and len(split_lines(content)) < min_lines:
        result = Summary(
            summary=content,
            original_lines=len(split_lines(content)),
            language_id=language_id,
            original_chars=len(content),
            success=False,
        )
    else:
        try:
            result = summarize(content, language_id, config=config.summarizer)
        except CodeShrinkError as e:
            raise _error_with_log_pointer(e) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        click.echo(result.summary, nl=not result.summary.endswith("\n"))

    if stats:
        Console(stderr=True).print(_make_stats_table(result))


@cli.command("languages")
def languages_command() -> None:
    """List supported language ids."""
    for language_id in supported_languages():
        click.echo(language_id)


if __name__ == "__main__":
    cli()
