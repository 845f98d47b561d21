#!/usr/bin/env python3
"""
Travel inquiry CLI
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from travel_inquiry.config import load_settings
from travel_inquiry.version import __version__

console = Console()


def version_callback(ctx, param, value):
    """Callback for --version option"""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"travel-inquiry [green]{__version__}[/green]")
    ctx.exit()


@click.group()
@click.option(
    '--version', '-v',
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help='Show version information'
)
def main():
    """Travel inquiry submission service"""
    pass


@main.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", "-p", default=8000, type=int, help="Port to listen on")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool):
    """Run the HTTP API locally"""
    from travel_inquiry.api.app import main as run_app

    run_app(host=host, port=port, reload=reload)


@main.command()
@click.option(
    "--config-file",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML settings file",
)
def config(config_file: Optional[Path]):
    """Show the resolved settings"""
    settings = load_settings(config_file=config_file)

    table = Table(title="Resolved Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for name, value in settings.model_dump().items():
        table.add_row(name, "[dim]not set[/dim]" if value is None else str(value))

    console.print(table)

    if not settings.customer_email_configured:
        console.print("[yellow]⚠ FROM_EMAIL is not set: no emails will be sent[/yellow]")
    elif not settings.business_email_configured:
        console.print("[yellow]⚠ BUSINESS_EMAIL is not set: business notifications are skipped[/yellow]")


@main.command()
@click.argument("payload_file", type=click.File("r"))
@click.option(
    "--config-file",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML settings file",
)
def submit(payload_file, config_file: Optional[Path]):
    """Run a JSON payload through the submission handler

    PAYLOAD_FILE is a JSON object with the form fields, or - for stdin.
    """
    from travel_inquiry.api.dependencies import build_handler

    settings = load_settings(config_file=config_file)
    handler = build_handler(settings)
    result = asyncio.run(handler.handle(payload_file.read()))

    style = "green" if result.ok else "red"
    console.print(f"[bold {style}]HTTP {result.status_code}[/bold {style}]")
    console.print_json(json.dumps(result.body.to_body()))

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
