"""CLI entry point for viewdiff."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from viewdiff.errors import ViewdiffError
from viewdiff.models.config import ScreenshotConfig
from viewdiff.orchestrator import Pipeline

console = Console()

DEFAULT_CONFIG = "viewdiff.json"


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_pipeline(base_url: str, config: str) -> Pipeline:
    cfg = ScreenshotConfig(base_url=base_url)
    if Path(config).exists():
        cfg.load(config)
    else:
        console.print(f"[yellow]No config file at {config}, using defaults[/yellow]")
    return Pipeline(cfg)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Capture web pages at several widths and compare screenshot sets."""
    setup_logging(verbose)


@cli.command()
@click.option("--base-url", "-u", prompt="Base URL", help="Site to capture")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def init(base_url: str, config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config} already exists. Overwrite?"):
            return

    ScreenshotConfig(base_url=base_url).save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nCapture a baseline with:")
    console.print(f"  [blue]viewdiff capture base --base-url {base_url}[/blue]")


@cli.command()
@click.argument("label")
@click.option("--base-url", "-u", required=True, help="Site to capture")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
def capture(label: str, base_url: str, config: str) -> None:
    """Capture all pages and widths under LABEL."""
    try:
        pipeline = _load_pipeline(base_url, config)
        artifacts = pipeline.record_screenshot(label)
    except (ViewdiffError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)
    console.print(f"[green]Captured {len(artifacts)} screenshots[/green] as '{label}'")


@cli.command()
@click.argument("base")
@click.argument("new")
@click.option("--base-url", "-u", required=True, help="Site the screenshots were taken from")
@click.option("--config", "-c", default=DEFAULT_CONFIG, help="Config file path")
@click.option("--report-dir", "-r", default=".", help="Directory for log.json")
def compare(base: str, new: str, base_url: str, config: str, report_dir: str) -> None:
    """Compare screenshot sets BASE and NEW and write log.json."""
    try:
        pipeline = _load_pipeline(base_url, config)
        results = pipeline.compare(base, new)
        report_path = pipeline.save_report(report_dir)
    except ViewdiffError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)

    if not results:
        console.print("[bold green]No visual differences[/bold green]")
        console.print(f"  Report: [blue]{report_path}[/blue]")
        return

    table = Table(title=f"Differences: {base} vs {new}")
    table.add_column("Page", style="bold")
    table.add_column("Width", justify="right")
    table.add_column("Changed", justify="right")
    table.add_column("Diff image")
    for r in results:
        table.add_row(r.url, str(r.width), f"[red]{r.difference:.2f}%[/red]", r.difference_file or "")
    console.print(table)
    console.print(f"  Report: [blue]{report_path}[/blue]")
    sys.exit(1)


if __name__ == "__main__":
    cli()
