"""CLI entry point for page capture."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from playwright.sync_api import sync_playwright
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pagecapture.capture.capturer import PageCapturer
from pagecapture.driver.playwright_driver import PlaywrightDriver
from pagecapture.errors import CaptureError
from pagecapture.models.capture import raster_summary
from pagecapture.models.config import CaptureConfig
from pagecapture.session import CaptureSession
from pagecapture.viewport.negotiator import ViewportSizeNegotiator

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Full-page screenshot capture by scrolling and stitching."""
    setup_logging(verbose)


@cli.command()
@click.option("--target", "-t", prompt="Target URL", help="Page URL to capture")
@click.option("--config", "-c", default="capture-config.json", help="Config file path")
def init(target: str, config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    cfg = CaptureConfig(target_url=target)
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print("  [blue]pagecapture capture[/blue]")


@cli.command()
@click.option("--config", "-c", default="capture-config.json", help="Config file path")
@click.option("--url", "-u", default=None, help="Override the configured target URL")
@click.option("--full-page", is_flag=True, help="Stitch the entire page")
@click.option("--frame", "-f", "frames", multiple=True,
              help="Frame name/id to enter before capturing (repeat for nested frames)")
@click.option("--output", "-o", default=None, help="Override the output PNG path")
def capture(config: str, url: str | None, full_page: bool,
            frames: tuple[str, ...], output: str | None) -> None:
    """Open the target page and capture it."""
    try:
        cfg = CaptureConfig.load(config)
    except FileNotFoundError:
        if not url:
            console.print(f"[red]Config file not found: {config}[/red]")
            console.print("Run 'pagecapture init' or pass --url.")
            sys.exit(1)
        cfg = CaptureConfig(target_url=url)

    target_url = url or cfg.target_url
    if not target_url:
        console.print("[red]No target URL configured[/red]")
        sys.exit(1)
    if full_page:
        cfg.force_full_page = True
    output_path = Path(output or cfg.output_path)

    with sync_playwright() as p:
        browser = p.chromium.launch(headless=cfg.headless)
        try:
            page = browser.new_page(no_viewport=cfg.viewport is not None)
            session = CaptureSession(PlaywrightDriver(page), device=cfg.device)
            if cfg.viewport:
                ViewportSizeNegotiator(session, cfg.resize).set_viewport_size(cfg.viewport.to_size())
            session.navigate(target_url)

            for frame in frames:
                session.switch_to_frame(frame)

            capturer = PageCapturer(session, cfg)
            raster = capturer.capture_frame() if frames else capturer.capture()
            title = session.get_title()
        except CaptureError as e:
            console.print(f"[red]Capture failed:[/red] {e}")
            sys.exit(1)
        finally:
            browser.close()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    raster.image.save(output_path, format="PNG")

    table = Table(title="Capture Summary")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("URL", target_url)
    table.add_row("Title", title or "[yellow]<unavailable>[/yellow]")
    for key, value in raster_summary(raster).items():
        table.add_row(key.replace("_", " ").capitalize(), str(value))
    table.add_row("Output", f"[blue]{output_path}[/blue]")
    console.print(table)


if __name__ == "__main__":
    cli()
