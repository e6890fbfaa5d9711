"""Rich rendering of dispatch results and derived messages."""

from __future__ import annotations

import sys

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from herald.models.messages import ChatMessage, EmailMessage, MessageSet
from herald.models.results import ChannelStatus, DispatchResult

_STATUS_STYLE = {
    ChannelStatus.SENT: "[green]sent[/green]",
    ChannelStatus.SKIPPED: "[dim]skipped[/dim]",
    ChannelStatus.FAILED: "[bold red]failed[/bold red]",
}


def read_payload(source: str) -> bytes:
    """Read the raw payload from a file path, or stdin when *source* is ``-``."""
    if source == "-":
        return typer.get_binary_stream("stdin").read()
    try:
        with open(source, "rb") as fh:
            return fh.read()
    except OSError as exc:
        Console(file=sys.stderr).print(f"[bold red]Cannot read payload:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def render_result(result: DispatchResult, console: Console) -> None:
    if result.nothing_sent:
        console.print(f"[dim]{result.summary()}[/dim]")
        return

    table = Table(title="Dispatch Result")
    table.add_column("Channel", style="cyan")
    table.add_column("Status")
    table.add_column("Destination")
    table.add_column("Message ID / Error")

    for outcome in result.outcomes:
        detail = outcome.message_id if outcome.status == ChannelStatus.SENT else outcome.error
        table.add_row(
            outcome.channel.value,
            _STATUS_STYLE[outcome.status],
            outcome.destination or "",
            detail or "",
        )
    console.print(table)


def render_messages(messages: MessageSet, console: Console) -> None:
    if messages.is_empty:
        console.print("[dim]No messages would be sent.[/dim]")
        return

    for channel, message in messages.items():
        if isinstance(message, ChatMessage):
            body = "\n\n".join(message.texts)
        elif isinstance(message, EmailMessage):
            body = (
                f"From: {message.sender}\nTo: {message.to}\n"
                f"Subject: {message.subject}\n\n{message.html_body}"
            )
        else:
            body = message.body
        console.print(Panel(body, title=channel.value, expand=False))
