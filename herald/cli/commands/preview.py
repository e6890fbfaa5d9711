"""``herald preview PAYLOAD`` — show what would be sent, without sending."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from herald.config import config
from herald.core.decoder import DecodeError
from herald.core.enrichment import EnrichmentError
from herald.core.processor import NotificationProcessor
from herald.core.rules import derive_messages
from herald.models.events import EventKind
from herald.models.findings import Finding, ScanReport
from herald.cli.render import read_payload, render_messages

console = Console()


def load_report(path: Path) -> ScanReport:
    """Read findings from a JSON list or a registry ``imageScanFindings`` dump."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("imageScanFindings", data).get("findings", [])
    return ScanReport(findings=tuple(Finding.model_validate(item) for item in data))


def preview_cmd(
    payload: str = typer.Argument(
        ...,
        help="Path to the inbound payload JSON, or '-' to read stdin.",
    ),
    findings: Optional[Path] = typer.Option(
        None,
        "--findings",
        "-f",
        help="Local findings JSON to use instead of querying the registry.",
    ),
) -> None:
    """Run the rules for a payload and print the messages they produce."""
    raw = read_payload(payload)
    processor = NotificationProcessor.from_config(config)

    try:
        event = processor.decoder.decode(raw)
    except DecodeError as exc:
        console.print(f"[bold red]Decode failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if findings is not None:
        if event.kind is not EventKind.IMAGE_SCAN:
            console.print("[bold red]--findings only applies to image scan events.[/bold red]")
            raise typer.Exit(code=2)
        try:
            report = load_report(findings)
        except (OSError, ValueError, ValidationError) as exc:
            console.print(f"[bold red]Cannot load findings:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc
        messages = derive_messages(processor.rules_for(event), event, report)
    else:
        try:
            messages = asyncio.run(processor.derive(event))
        except EnrichmentError as exc:
            console.print(f"[bold red]Enrichment failed:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc

    console.print(f"[bold]Event kind:[/bold] {event.kind.value}")
    render_messages(messages, console)
