"""
CLI Interface
=============
Command-line interface for the character separator.

Usage:
    python -m separator analyze <image_path> [options]
    python -m separator batch <directory> [options]
    python -m separator visualize <image_path> [options]
    python -m separator info <image_path>
"""

from __future__ import annotations

import hashlib
import json
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from . import __version__
from .bitmap import ImageLoadError, image_size
from .engine import SeparationEngine, SeparatorConfig, parse_color
from .overlay import render_overlay

console = Console()


def _color_option(ctx, param, value):
    """click callback turning a color string into an int."""
    try:
        return parse_color(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="separator")
def cli():
    """Character Separator — whitespace row/column detection for text images."""
    pass


@cli.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default=None,
    help="Output directory for results (default: $SEPARATOR_OUTPUT_DIR or ./output)",
)
@click.option(
    "--whitespace", "-w",
    default="0xFFFFFFFF",
    callback=_color_option,
    help="Whitespace color as 0xAARRGGBB, #RRGGBB or decimal",
)
@click.option(
    "--overlay",
    is_flag=True,
    default=False,
    help="Also save an overlay image with the separators drawn in",
)
@click.option(
    "--no-json",
    is_flag=True,
    default=False,
    help="Skip saving the JSON result file",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON result to stdout (for programmatic use)",
)
def analyze(
    image_path: str,
    output: str,
    whitespace: int,
    overlay: bool,
    no_json: bool,
    log_level: str,
    log_file: str,
    json_output: bool,
):
    """Detect whitespace rows and columns in a single image."""

    if json_output:
        # Keep stdout clean for the JSON document
        log_level = "ERROR"

    config = SeparatorConfig(
        whitespace_color=whitespace,
        save_json=not no_json,
        save_overlay=overlay,
        log_level=log_level,
        log_file=log_file,
    )
    if output:
        config.output_dir = output

    try:
        engine = SeparationEngine(config)

        if json_output:
            result = engine.analyze(image_path)
            click.echo(json.dumps(result.model_dump(), indent=2, default=str))
            return

        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]Character Separator v{__version__}[/]\n"
                f"[dim]Analyzing: {os.path.basename(image_path)}[/]",
                border_style="cyan",
            )
        )
        console.print()

        with console.status("Running shortest-path sweeps..."):
            result = engine.analyze(image_path)

        _display_result(result)

    except (FileNotFoundError, ImageLoadError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--output", "-o", default=None, help="Output directory")
@click.option(
    "--pattern", "-p",
    multiple=True,
    default=("*.bmp", "*.png"),
    show_default=True,
    help="Glob pattern(s) selecting images",
)
@click.option(
    "--whitespace", "-w",
    default="0xFFFFFFFF",
    callback=_color_option,
    help="Whitespace color",
)
@click.option("--log-level", default="WARNING", help="Logging level")
def batch(
    directory: str,
    output: str,
    pattern: tuple[str, ...],
    whitespace: int,
    log_level: str,
):
    """Analyze every matching image in a directory."""

    image_files = sorted({
        path for glob in pattern for path in Path(directory).glob(glob)
    })

    if not image_files:
        console.print(f"[yellow]No images found in: {directory}[/]")
        return

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]Batch Separator[/]\n"
            f"[dim]Found {len(image_files)} images in: {directory}[/]",
            border_style="cyan",
        )
    )
    console.print()

    config = SeparatorConfig(whitespace_color=whitespace, log_level=log_level)
    if output:
        config.output_dir = output
    engine = SeparationEngine(config)

    results = []
    errors = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Processing images...", total=len(image_files))

        for image_file in image_files:
            progress.update(task, description=f"Analyzing: {image_file.name}")

            try:
                result = engine.analyze(str(image_file))
                results.append((image_file.name, result))
            except (FileNotFoundError, ImageLoadError) as e:
                errors.append((image_file.name, str(e)))

            progress.advance(task)

    _display_batch_summary(results, errors)


@cli.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default=None,
    help="Overlay file (default: <image>.new.png next to the input)",
)
@click.option(
    "--whitespace", "-w",
    default="0xFFFFFFFF",
    callback=_color_option,
    help="Whitespace color",
)
@click.option("--log-level", default="WARNING", help="Logging level")
def visualize(image_path: str, output: str, whitespace: int, log_level: str):
    """Draw detected rows (red) and columns (green) onto a copy of the image."""

    output = output or f"{image_path}.new.png"
    config = SeparatorConfig(
        whitespace_color=whitespace,
        save_json=False,
        log_level=log_level,
    )

    try:
        console.print(f"Loading image from: {image_path}")
        result = SeparationEngine(config).analyze(image_path)

        console.print(f"Found {result.row_count} row separations")
        console.print(f"Found {result.column_count} column separations")

        render_overlay(
            image_path,
            result.rows,
            result.columns,
            output,
            row_color=config.row_color,
            column_color=config.column_color,
        )
        console.print(f"Saving processed image as: {output}")

    except (FileNotFoundError, ImageLoadError) as e:
        console.print(f"[red]Error processing image:[/] {escape(str(e))}")
        sys.exit(1)


@cli.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False))
def info(image_path: str):
    """Display image file information."""

    try:
        width, height = image_size(image_path)
    except ImageLoadError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)

    with open(image_path, "rb") as f:
        digest = hashlib.sha256(f.read()).hexdigest()

    console.print()
    table = Table(title="Image Information", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value")

    table.add_row("File", os.path.basename(image_path))
    table.add_row("Dimensions", f"{width} x {height}")
    table.add_row("Pixels", str(width * height))
    table.add_row(
        "File Size",
        f"{os.path.getsize(image_path) / 1024:.1f} KB",
    )
    table.add_row("SHA-256", digest[:16] + "...")

    console.print(table)
    console.print()


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _format_runs(runs) -> str:
    if not runs:
        return "-"
    return ", ".join(
        str(start) if start == end else f"{start}-{end}"
        for start, end in runs
    )


def _display_result(result):
    """Display an analysis result as rich tables."""
    image = result.image

    table = Table(title="Image", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value")
    table.add_row("Source", os.path.basename(image.source_path))
    table.add_row("Dimensions", f"{image.width} x {image.height}")
    table.add_row("File Hash", image.file_hash[:16] + "...")
    console.print(table)
    console.print()

    table = Table(title="Separators", border_style="green")
    table.add_column("Axis", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Runs")
    table.add_row("Rows", str(result.row_count), _format_runs(result.row_runs))
    table.add_row(
        "Columns",
        str(result.column_count),
        _format_runs(result.column_runs),
    )
    console.print(table)
    console.print()

    version = result.version
    console.print(
        f"[dim]Separator v{version.separator_version} | "
        f"Vertices: {version.vertex_count} | "
        f"Edges: {version.edge_count} | "
        f"Timestamp: {version.analysis_timestamp}[/]"
    )
    console.print()


def _display_batch_summary(results, errors):
    """Display batch processing summary."""
    console.print()

    table = Table(title="Batch Processing Summary", border_style="cyan")
    table.add_column("Image", style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Rows", justify="right")
    table.add_column("Columns", justify="right")
    table.add_column("Status", justify="center")

    for name, result in results:
        table.add_row(
            name,
            f"{result.image.width}x{result.image.height}",
            str(result.row_count),
            str(result.column_count),
            "[green]✓[/]",
        )

    for name, error in errors:
        table.add_row(name, "-", "-", "-", "[red]✗ FAILED[/]")

    console.print(table)
    console.print()
    console.print(
        f"[bold]Total:[/] {len(results)} images analyzed, "
        f"{len(errors)} failures"
    )
    console.print()


# ─── Entry point (for python -m separator.cli) ────────────────────────────────


if __name__ == "__main__":
    cli()
