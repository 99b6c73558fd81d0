"""CLI commands for execgram."""

import json
import sys
import time
from dataclasses import asdict
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from execgram import __version__, __logo__
from execgram.approvals import (
    ApprovalInfo,
    PendingApprovals,
    build_approval_keyboard,
    format_approval_html,
    parse_approval_text,
)
from execgram.config import load_config

app = typer.Typer(
    name="execgram",
    help=f"{__logo__} execgram - gateway exec approvals for Telegram",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} execgram v{__version__}")
        raise typer.Exit()


def _setup_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def _read_text(source: str | None) -> str:
    """Read message text from a file, or stdin for None / '-'."""
    if source is None or source == "-":
        return sys.stdin.read()

    path = Path(source).expanduser()
    if not path.exists():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """execgram - gateway exec approvals for Telegram."""
    config = load_config()
    _setup_logging("DEBUG" if verbose else config.logging.level)


# ============================================================================
# Approval Commands
# ============================================================================


@app.command("parse")
def parse_cmd(
    source: str = typer.Argument(None, help="File with the gateway message (stdin if omitted or '-')"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed approval as JSON"),
    html: bool = typer.Option(False, "--html", help="Print the Telegram HTML rendering"),
):
    """Parse a gateway exec approval message."""
    text = _read_text(source)
    info = parse_approval_text(text)

    if info is None:
        logger.debug("Text is not an exec approval request")
        console.print("[yellow]Not an exec approval request.[/yellow]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(asdict(info), indent=2, ensure_ascii=False))
        return

    if html:
        config = load_config()
        typer.echo(format_approval_html(info, max_command_chars=config.approvals.max_command_chars))
        for row in build_approval_keyboard(info.id):
            typer.echo(" | ".join(f"[{label}] {data}" for label, data in row))
        return

    table = Table(title="Exec Approval")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for field_name, value in asdict(info).items():
        table.add_row(field_name, value)

    console.print(table)


def _pending_info(approval_id: str) -> ApprovalInfo:
    """Build the record for a bare pending id through the gateway format."""
    info = parse_approval_text(f"Exec approval required\nID: {approval_id}")
    if info is None or info.id != approval_id:
        console.print(f"[red]Not an approval id: {approval_id}[/red]")
        raise typer.Exit(1)
    return info


@app.command("detect")
def detect_cmd(
    text: str = typer.Argument(..., help="Follow-up message text"),
    pending: list[str] = typer.Option([], "--pending", "-p", help="Pending approval id (repeatable, oldest first)"),
    sent_ago: float = typer.Option(0, "--sent-ago", help="Seconds since the pending approvals were sent"),
    as_json: bool = typer.Option(False, "--json", help="Print the resolution as JSON"),
):
    """Check whether a message resolves one of the pending approvals."""
    config = load_config()
    store = PendingApprovals(
        max_pending=config.approvals.max_pending,
        stale_after_seconds=config.approvals.stale_after_seconds,
    )
    sent_at = time.time() - sent_ago
    for message_id, approval_id in enumerate(pending):
        store.track(_pending_info(approval_id), message_id=message_id, sent_at=sent_at)

    store.prune_stale()
    resolution = store.observe(text)

    if resolution is None:
        console.print("[yellow]No pending approval resolved.[/yellow]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(asdict(resolution)))
        return

    console.print(f"[green]✓[/green] {resolution.id}: [bold]{resolution.action}[/bold]")


@app.command("config")
def config_cmd():
    """Show the effective configuration."""
    config = load_config()
    typer.echo(json.dumps(config.model_dump(), indent=2))


if __name__ == "__main__":
    app()
