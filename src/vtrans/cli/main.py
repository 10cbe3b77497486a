"""CLI entry point for vtrans.

Invoked as::

    vtrans [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m vtrans.cli.main

Commands
--------
translate   Translate a validator between formats
validate    Check that a translation preserves meaning
roundtrip   Translate to a format and back, scoring what survived
formats     List the supported formats
version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from vtrans.convenience import TranslationEngine

console = Console()
err_console = Console(stderr=True)

_FORMAT_CHOICES = ["gherkin", "natural_language", "pytest", "json"]

_SYNTAX_LEXERS = {
    "gherkin": "gherkin",
    "pytest": "python",
    "json": "json",
}


def _read_source(path: str) -> str:
    """Read an input file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)


def _resolve(value: str, is_path: bool) -> str:
    return _read_source(value) if is_path else value


def _build_engine(provider_name: str, config_path: str | None) -> "TranslationEngine":
    """Create the engine, exiting on a bad config file."""
    from vtrans.config import load_config
    from vtrans.convenience import TranslationEngine
    from vtrans.errors import ConfigError

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    if provider_name == "llm":
        err_console.print(
            "[yellow]Warning:[/yellow] No language model is configured. "
            "Falling back to heuristic translation. "
            "Pass a LanguageModel to TranslationEngine programmatically "
            "to use a real model.",
        )
    return TranslationEngine(config=config)


def _render_content(content: str, fmt: str) -> Syntax | str:
    lexer = _SYNTAX_LEXERS.get(fmt)
    if lexer is None:
        return content
    return Syntax(content, lexer, word_wrap=True)


def _print_warnings(warnings: list[str], title: str = "Warnings") -> None:
    if not warnings:
        return
    console.print(f"[bold]{title}:[/bold]")
    for warning in warnings:
        console.print(f"  [yellow]•[/yellow] {warning}")


def _emit_json(data: dict[str, object]) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _provider_option(func):  # type: ignore[no-untyped-def]
    return click.option(
        "--provider",
        "provider_name",
        type=click.Choice(["heuristic", "llm"], case_sensitive=False),
        default="heuristic",
        help="Translation back-end to use (default: heuristic).",
    )(func)


def _config_option(func):  # type: ignore[no-untyped-def]
    return click.option(
        "--config",
        "config_path",
        type=click.Path(exists=False),
        default=None,
        help="YAML file overriding engine thresholds and model options.",
    )(func)


def _format_options(func):  # type: ignore[no-untyped-def]
    func = click.option(
        "--to",
        "-t",
        "target",
        type=click.Choice(_FORMAT_CHOICES, case_sensitive=False),
        required=True,
        help="Target format.",
    )(func)
    return click.option(
        "--from",
        "-f",
        "source",
        type=click.Choice(_FORMAT_CHOICES, case_sensitive=False),
        required=True,
        help="Source format.",
    )(func)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="vtrans")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log engine activity.")
def cli(verbose: bool) -> None:
    """Translate validators between scenario, prose, test code and JSON."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from vtrans import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]vtrans[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# formats command
# ---------------------------------------------------------------------------


@cli.command(name="formats")
def formats_command() -> None:
    """List the supported validator formats."""
    from vtrans.formats import FORMAT_DESCRIPTIONS, Format

    table = Table(title="Validator formats")
    table.add_column("Value", style="bold")
    table.add_column("Name")
    table.add_column("Description")
    for fmt in Format:
        table.add_row(fmt.value, fmt.label, FORMAT_DESCRIPTIONS[fmt])
    console.print(table)


# ---------------------------------------------------------------------------
# translate command
# ---------------------------------------------------------------------------


@cli.command(name="translate")
@click.argument("source_text")
@_format_options
@click.option("--file", "is_path", is_flag=True, default=False, help="Treat SOURCE_TEXT as a file path.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit the full result as JSON.")
@_provider_option
@_config_option
def translate_command(
    source_text: str,
    source: str,
    target: str,
    is_path: bool,
    as_json: bool,
    provider_name: str,
    config_path: str | None,
) -> None:
    """Translate a validator from one format to another.

    SOURCE_TEXT is the validator content (or a path when --file is given).

    Examples:

    \b
        vtrans translate "Users must be able to reset their password" -f natural_language -t gherkin
        vtrans translate scenario.feature --file -f gherkin -t json --json
    """
    content = _resolve(source_text, is_path)
    engine = _build_engine(provider_name, config_path)
    result = engine.translate(content, source.lower(), target.lower())

    if as_json:
        _emit_json(result.to_dict())
        return

    console.print(
        Panel(
            _render_content(result.content, result.target_format.value),
            title=f"{result.source_format.value} → {result.target_format.value}",
            subtitle=f"confidence {result.confidence:.2f}",
        )
    )
    _print_warnings(result.warnings)


# ---------------------------------------------------------------------------
# validate command
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.argument("original")
@click.argument("translated")
@_format_options
@click.option("--files", "are_paths", is_flag=True, default=False, help="Treat ORIGINAL and TRANSLATED as file paths.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit the full result as JSON.")
@_provider_option
@_config_option
def validate_command(
    original: str,
    translated: str,
    source: str,
    target: str,
    are_paths: bool,
    as_json: bool,
    provider_name: str,
    config_path: str | None,
) -> None:
    """Check that TRANSLATED preserves the meaning of ORIGINAL.

    Exits with status 1 when the translation is not valid.
    """
    engine = _build_engine(provider_name, config_path)
    validation = engine.validate_translation(
        _resolve(original, are_paths),
        _resolve(translated, are_paths),
        source.lower(),
        target.lower(),
    )

    if as_json:
        _emit_json(validation.to_dict())
    else:
        verdict = "[green]VALID[/green]" if validation.is_valid else "[red]INVALID[/red]"
        console.print(f"{verdict} equivalence {validation.equivalence:.2f}")
        _print_warnings(validation.warnings)
        _print_warnings(validation.suggestions, title="Suggestions")

    if not validation.is_valid:
        sys.exit(1)


# ---------------------------------------------------------------------------
# roundtrip command
# ---------------------------------------------------------------------------


@cli.command(name="roundtrip")
@click.argument("source_text")
@_format_options
@click.option("--file", "is_path", is_flag=True, default=False, help="Treat SOURCE_TEXT as a file path.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit the full result as JSON.")
@_provider_option
@_config_option
def roundtrip_command(
    source_text: str,
    source: str,
    target: str,
    is_path: bool,
    as_json: bool,
    provider_name: str,
    config_path: str | None,
) -> None:
    """Translate SOURCE_TEXT to the target format and back, then score it.

    Exits with status 1 when the preservation score is below the
    round-trip threshold.
    """
    content = _resolve(source_text, is_path)
    engine = _build_engine(provider_name, config_path)
    report = engine.test_round_trip(content, source.lower(), target.lower())

    if as_json:
        _emit_json(report.to_dict())
    else:
        table = Table(title=f"Round trip: {source} → {target} → {source}", show_lines=True)
        table.add_column("Stage", style="bold", min_width=12)
        table.add_column("Content")
        table.add_row("Original", report.original_content)
        table.add_row("Intermediate", report.intermediate_content)
        table.add_row("Round trip", report.round_trip_content)
        console.print(table)
        color = "green" if report.acceptable else "red"
        console.print(
            f"\n[bold]Preservation:[/bold] [{color}]{report.preservation_score:.2f}[/{color}]"
        )
        _print_warnings(report.differences, title="Differences")

    if not report.acceptable:
        sys.exit(1)


def main() -> None:
    """Console-script entry point."""
    cli()


if __name__ == "__main__":
    main()
