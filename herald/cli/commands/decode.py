"""``herald decode PAYLOAD`` — show the typed event a payload decodes to."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from herald.core.decoder import DecodeError, EventDecoder, format_path
from herald.cli.render import read_payload

console = Console()


def decode_cmd(
    payload: str = typer.Argument(
        ...,
        help="Path to the inbound payload JSON, or '-' to read stdin.",
    ),
) -> None:
    """Decode a payload and print the event as JSON."""
    raw = read_payload(payload)
    try:
        event = EventDecoder().decode(raw)
    except DecodeError as exc:
        console.print(f"[bold red]Decode failed:[/bold red] {escape(str(exc))}")
        for attempt in exc.attempts:
            console.print(
                f"  [dim]{attempt.decoder}[/dim] at {format_path(attempt.path)}: {escape(attempt.reason)}"
            )
        raise typer.Exit(code=2) from exc

    console.print(f"[bold]Event kind:[/bold] {event.kind.value}")
    console.print_json(event.model_dump_json())
