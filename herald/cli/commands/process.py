"""``herald process PAYLOAD`` — run the full notification pipeline."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from herald.config import config
from herald.core.config_guard import ConfigurationError
from herald.core.decoder import DecodeError
from herald.core.enrichment import EnrichmentError
from herald.core.processor import NotificationProcessor
from herald.routing.dispatcher import ChannelSendError
from herald.cli.render import read_payload, render_result

console = Console()


def process_cmd(
    payload: str = typer.Argument(
        ...,
        help="Path to the inbound payload JSON, or '-' to read stdin.",
    ),
) -> None:
    """Decode, enrich and dispatch one payload to every channel.

    Exits 1 when a channel failed and 2 when the payload could not be
    decoded or enriched.
    """
    raw = read_payload(payload)

    try:
        processor = NotificationProcessor.from_config(config)
    except ConfigurationError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=2) from exc

    try:
        result = processor.process(raw)
    except DecodeError as exc:
        console.print(f"[bold red]Decode failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except EnrichmentError as exc:
        console.print(f"[bold red]Enrichment failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except ChannelSendError as exc:
        if exc.result is not None:
            render_result(exc.result, console)
        console.print(f"[bold red]Dispatch failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    render_result(result, console)
