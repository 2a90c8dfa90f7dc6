"""Click CLI for slidekit — render diagrams and QR codes for slide decks."""

from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from slidekit.config.hierarchy import load_config_hierarchy
from slidekit.errors.exceptions import SlidekitError
from slidekit.types import FailurePolicy, ImageFormat

if TYPE_CHECKING:
    from slidekit.cache.store import ArtifactCache
    from slidekit.types import PreprocessResult

console = Console()
error_console = Console(stderr=True)


def _setup_logging(verbosity: int, default_level: str = "WARNING") -> None:
    """Configure logging based on verbosity level."""
    level = logging.getLevelName(str(default_level).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="slidekit")
def cli() -> None:
    """slidekit — cached Mermaid and QR rendering for markdown slides."""


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file path.")
@click.option("--theme", type=str, default=None, help="Theme name used as the diagram variant.")
@click.option(
    "--on-error",
    type=click.Choice([p.value for p in FailurePolicy]),
    default=None,
    help="What to do when a diagram or QR code fails to render.",
)
@click.option(
    "--format",
    "image_format",
    type=click.Choice([f.value for f in ImageFormat]),
    default=None,
    help="Image format referenced in the rewritten document.",
)
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Artifact cache directory.")
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="Settings file."
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def preprocess(
    input_path: str,
    output: str | None,
    theme: str | None,
    on_error: str | None,
    image_format: str | None,
    cache_dir: str | None,
    config_file: str | None,
    verbose: int,
) -> None:
    """Replace diagram blocks and QR markers with cached image references."""
    config = load_config_hierarchy(
        config_file, cache_dir=cache_dir, on_error=on_error, image_format=image_format
    )
    _setup_logging(verbose, config["log_level"])

    from slidekit.core import create_cache
    from slidekit.core import preprocess as run_preprocess

    cache = create_cache(config)
    try:
        result = run_preprocess(
            input_path,
            output,
            theme=theme,
            on_error=on_error,
            cache_dir=cache_dir,
            image_format=image_format,
            config_file=config_file,
            cache=cache,
        )
    except (SlidekitError, OSError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if output:
        console.print(f"[green]Written to {output}[/green]")
    else:
        click.echo(result.markdown, nl=False)

    if verbose >= 1:
        _print_summary(result, cache)

    if result.failures:
        error_console.print(
            f"[red]Error:[/red] {len(result.failures)} artifact(s) failed to render"
        )
        sys.exit(1)


def _print_summary(result: PreprocessResult, cache: ArtifactCache) -> None:
    """Print a preprocessing summary."""
    stats = cache.stats()
    error_console.print()
    table = Table(title="Preprocess Summary", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Artifacts", str(len(result.artifacts)))
    table.add_row("Rendered", str(stats.renders))
    table.add_row("Cache hits", str(stats.hits))
    table.add_row("Hit rate", f"{stats.hit_rate:.1%}")
    if result.failures:
        table.add_row("Failures", f"[yellow]{len(result.failures)}[/yellow]")
    error_console.print(table)

    if result.failures:
        fail_table = Table(title="Failed Artifacts", show_header=True)
        fail_table.add_column("Kind")
        fail_table.add_column("Source")
        fail_table.add_column("Error")
        for failure in result.failures:
            fail_table.add_row(failure.kind.value, failure.excerpt, failure.message)
        error_console.print(fail_table)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--theme", "themes", multiple=True, help="Theme to export (repeatable).")
@click.option("--dist", "dist_dir", type=click.Path(file_okay=False), help="Output root.")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Artifact cache directory.")
@click.option(
    "--themes-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory holding {theme}.css stylesheets.",
)
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="Settings file."
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug).")
def bundle(
    input_path: str,
    themes: tuple[str, ...],
    dist_dir: str | None,
    cache_dir: str | None,
    themes_dir: str | None,
    config_file: str | None,
    verbose: int,
) -> None:
    """Build a self-contained export bundle per theme."""
    config = load_config_hierarchy(
        config_file,
        themes=list(themes) or None,
        dist_dir=dist_dir,
        cache_dir=cache_dir,
        themes_dir=themes_dir,
    )
    _setup_logging(verbose, config["log_level"])

    from slidekit.core import create_cache, export

    cache = create_cache(config)
    try:
        results = export(
            input_path,
            themes=list(themes) or None,
            dist_dir=dist_dir,
            cache_dir=cache_dir,
            themes_dir=themes_dir,
            config_file=config_file,
            cache=cache,
        )
    except (SlidekitError, OSError) as e:
        error_console.print(f"[red]Export failed:[/red] {e}")
        sys.exit(1)

    table = Table(title="Theme Bundles", show_header=True)
    table.add_column("Theme", style="cyan")
    table.add_column("Document")
    table.add_column("Artifacts")
    table.add_column("Files")
    for result in results:
        table.add_row(
            result.theme,
            str(result.presentation),
            str(result.artifacts),
            str(len(result.copied_files)),
        )
    console.print(table)


@cli.command("ascii")
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
def ascii_diagrams(input_path: str) -> None:
    """Suggest Mermaid conversions for ASCII diagrams."""
    from slidekit.transforms.ascii_diagrams import find_ascii_diagrams, suggest_mermaid

    content = Path(input_path).read_text(encoding="utf-8")
    diagrams = find_ascii_diagrams(content)
    console.print(f"Found {len(diagrams)} ASCII diagram(s)")

    for index, diagram in enumerate(diagrams, 1):
        console.rule(f"Diagram {index}")
        console.print(diagram.ascii, markup=False, highlight=False)
        suggestion = suggest_mermaid(diagram.ascii)
        if suggestion is None:
            console.print("[yellow]Could not auto-convert. Manual conversion recommended.[/yellow]")
            continue
        console.print(f"[green]Detected type:[/green] {suggestion.diagram_type}")
        console.print(suggestion.as_fence(), markup=False, highlight=False)


@cli.group()
def cache() -> None:
    """Cache management commands."""


@cache.command("stats")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Artifact cache directory.")
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="Settings file."
)
def cache_stats(cache_dir: str | None, config_file: str | None) -> None:
    """Show what the artifact cache holds."""
    from slidekit.cache.stats import scan_cache

    config = load_config_hierarchy(config_file, cache_dir=cache_dir)
    inventory = scan_cache(Path(config["cache_dir"]))

    table = Table(title="Cache Statistics", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Root", str(config["cache_dir"]))
    table.add_row("Entries", str(inventory.entries))
    table.add_row("Files", str(inventory.files))
    table.add_row("Size (MB)", f"{inventory.size_mb:.2f}")
    table.add_row("Variants", ", ".join(inventory.variants) or "-")
    console.print(table)


@cache.command("clear")
@click.option("--cache-dir", type=click.Path(file_okay=False), help="Artifact cache directory.")
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), help="Settings file."
)
@click.confirmation_option(prompt="Are you sure you want to clear the cache?")
def cache_clear(cache_dir: str | None, config_file: str | None) -> None:
    """Delete every cached diagram and QR code."""
    from slidekit.types import ArtifactKind

    config = load_config_hierarchy(config_file, cache_dir=cache_dir)
    root = Path(config["cache_dir"])
    for kind in ArtifactKind:
        kind_dir = root / kind.value
        if kind_dir.is_dir():
            shutil.rmtree(kind_dir)
    console.print("[green]Cache cleared.[/green]")


def main() -> None:
    """Entry point for the CLI."""
    cli()
