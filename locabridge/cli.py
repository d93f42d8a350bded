"""Command-line interface for the localization pipeline."""

import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import SERVICES, config
from .errors import LocalizationError
from .extraction.chinese_keys import ChineseKeyExtractor
from .models.catalog import PlatformType
from .models.conversion_result import ConversionResult
from .pipeline.converter import Converter
from .pipeline.path_router import ConversionRequest
from .translation.clients import create_client
from .translation.translator import CatalogTranslator

console = Console()
err_console = Console(stderr=True)

PLATFORM_CHOICE = click.Choice([p.value for p in PlatformType], case_sensitive=False)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Convert localization files and fill in machine translations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _split_languages(languages: str) -> List[str]:
    return [lang.strip() for lang in languages.split(",") if lang.strip()]


@cli.command()
@click.option("--platform", "-p", required=True, type=PLATFORM_CHOICE, help="Target platform")
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to input .strings/.xcstrings/.arb/.json file"
)
@click.option(
    "--output", "-o",
    "output_path",
    required=True,
    type=click.Path(),
    help="Output .xcstrings file, or directory for per-language files"
)
@click.option(
    "--languages", "-l",
    required=True,
    help="Comma-separated list of target language codes"
)
@click.option("--source-language", "-s", default=None, help="Language of single-language input files")
@click.option(
    "--service",
    type=click.Choice(SERVICES, case_sensitive=False),
    default=None,
    help="Translation service (defaults to LOCABRIDGE_AI_SERVICE)"
)
@click.option("--keys-as-source", is_flag=True, help="Translate Chinese keys instead of values")
@click.option("--only-missing", is_flag=True, help="Keep existing translations, fill gaps only")
@click.option("--sync-to-source", is_flag=True, help="Also write results next to the input file")
@click.option("--export", "export_format", type=click.Choice(["csv"]), default=None, help="Also export a table")
@click.option("--dry-run", is_flag=True, help="Translate without writing any file")
@click.pass_context
def convert(
    ctx: click.Context,
    platform: str,
    input_path: str,
    output_path: str,
    languages: str,
    source_language: Optional[str],
    service: Optional[str],
    keys_as_source: bool,
    only_missing: bool,
    sync_to_source: bool,
    export_format: Optional[str],
    dry_run: bool,
):
    """Translate a localization file into target languages."""
    service = (service or config.ai_service).lower()
    errors = config.validate(service)
    if errors:
        err_console.print("[red]Configuration errors:[/red]")
        for error in errors:
            err_console.print(f"  - {error}")
        ctx.exit(1)

    request = ConversionRequest(
        platform=PlatformType(platform.lower()),
        input_path=input_path,
        output_path=output_path,
        languages=_split_languages(languages),
        source_language=source_language or config.source_language,
        keys_as_source=keys_as_source,
        only_missing=only_missing,
        sync_to_source=sync_to_source,
        export=export_format,
        dry_run=dry_run,
    )

    translator = CatalogTranslator(create_client(service, config), batch_size=config.batch_size)
    converter = Converter(translator=translator, default_language=config.source_language)

    console.print(f"[blue]Reading:[/blue] {input_path}")
    console.print(f"[blue]Target languages:[/blue] {', '.join(request.languages)}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Translating with {service}", total=len(request.languages))

        def update_progress(current, total, lang):
            progress.update(task, completed=current, total=total, description=f"Translated {lang}")

        result = converter.convert(request, progress_callback=update_progress)

    _report(ctx, result)


@cli.command("extract-keys")
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to any JSON file"
)
@click.option("--output", "-o", "output_path", required=True, type=click.Path(), help="Text file to write")
@click.pass_context
def extract_keys(ctx: click.Context, input_path: str, output_path: str):
    """Extract Chinese keys from a JSON file, one per line."""
    extractor = ChineseKeyExtractor()
    try:
        keys = extractor.write_keys(extractor.extract_file(input_path), output_path)
    except LocalizationError as e:
        _report(ctx, ConversionResult.failed(e.stage, str(e)))
        return
    _report(ctx, ConversionResult(
        message=f"Extracted {len(keys)} Chinese keys to {output_path}",
        items=len(keys),
        written=[output_path],
    ))


@cli.command()
@click.option("--platform", "-p", required=True, type=PLATFORM_CHOICE, help="Platform of the input file")
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to localization file"
)
@click.option("--output", "-o", "output_path", required=True, type=click.Path(), help="CSV file to write")
@click.option("--source-language", "-s", default=None, help="Language of single-language input files")
@click.pass_context
def export(ctx: click.Context, platform: str, input_path: str, output_path: str, source_language: Optional[str]):
    """Export a localization file as CSV."""
    request = ConversionRequest(
        platform=PlatformType(platform.lower()),
        input_path=input_path,
        output_path=output_path,
        source_language=source_language or config.source_language,
    )
    _report(ctx, Converter(default_language=config.source_language).export(request))


@cli.command()
@click.option("--platform", "-p", required=True, type=PLATFORM_CHOICE, help="Platform of the input file")
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to localization file"
)
@click.pass_context
def stats(ctx: click.Context, platform: str, input_path: str):
    """Show statistics for a localization file."""
    request = ConversionRequest(
        platform=PlatformType(platform.lower()),
        input_path=input_path,
        output_path="",
        source_language=config.source_language,
    )
    try:
        catalog = Converter(default_language=config.source_language).load(request)
    except LocalizationError as e:
        _report(ctx, ConversionResult.failed(e.stage, str(e)))
        return

    table = Table(title=f"Statistics for {Path(input_path).name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    total = len(catalog.entries)
    table.add_row("Total strings", str(total))
    table.add_row("Source language", catalog.source_language)

    languages = catalog.languages()
    table.add_row("Languages", ", ".join(languages))

    # Translation coverage by language
    for lang in languages:
        if lang == catalog.source_language:
            continue
        translated = total - len(catalog.get_untranslated_keys(lang))
        coverage = (translated / total) * 100 if total else 0
        table.add_row(f"  {lang} coverage", f"{translated}/{total} ({coverage:.1f}%)")

    console.print(table)


def _report(ctx: click.Context, result: ConversionResult):
    """Print a result and set the exit status."""
    if result.stats:
        _print_stats(result.stats)

    if result.success:
        lines = [f"[green]{result.message}[/green]"]
        lines.extend(f"[dim]{path}[/dim]" for path in result.written)
        if result.export_path:
            lines.append(f"[blue]Export:[/blue] {result.export_path}")
        console.print(Panel("\n".join(lines), title="Done"))
        return

    err_console.print(f"[red]{result.message}[/red]")
    for failure in result.failures:
        err_console.print(f"  - {failure.language}: {failure.path} ({failure.reason})")
    ctx.exit(1)


def _print_stats(all_stats):
    """Print translation statistics."""
    table = Table(title="Translation Stats")
    table.add_column("Language", style="cyan")
    table.add_column("Strings", justify="right")
    table.add_column("Translated", justify="right")
    table.add_column("Copied", justify="right")
    table.add_column("Requests", justify="right")

    for s in all_stats:
        table.add_row(s.language, str(s.total), str(s.translated), str(s.skipped), str(s.requests))

    console.print(table)


def main():
    cli()


if __name__ == "__main__":
    main()
