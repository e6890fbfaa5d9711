"""``herald check-config`` — validate destinations before deploying."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from herald.config import config
from herald.core.config_guard import PRODUCTION_REQUIRED_TOPIC_KEYS, find_violations

console = Console()


def _configured(value: str) -> str:
    return "[green]Yes[/green]" if value else "[yellow]No[/yellow]"


def check_config_cmd() -> None:
    """List the configured destinations and run the startup guard."""
    table = Table(title=f"Destinations ({config.environment})")
    table.add_column("Channel", style="cyan")
    table.add_column("Key")
    table.add_column("Configured", justify="center")

    for destination, url in config.chat_webhooks.items():
        table.add_row("chat", destination.value, _configured(url))
    table.add_row("email", "recipient", _configured(config.email_to))
    for key, url in sorted(config.queue_urls.items()):
        table.add_row("queue", key, _configured(url))
    for key in sorted(set(config.topic_arns) | set(PRODUCTION_REQUIRED_TOPIC_KEYS)):
        table.add_row("topic", key, _configured(config.topic_arns.get(key, "")))
    console.print(table)

    violations = find_violations(config)
    if violations:
        console.print("[bold red]Configuration guard failed:[/bold red]")
        for violation in violations:
            console.print(f"  - {violation}")
        raise typer.Exit(code=1)

    console.print("[green]Configuration OK.[/green]")
