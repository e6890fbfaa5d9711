"""Main Typer application — imports and registers all CLI commands.

Entry point: ``herald`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from herald.config import config
from herald.cli.commands.check_config import check_config_cmd
from herald.cli.commands.decode import decode_cmd
from herald.cli.commands.preview import preview_cmd
from herald.cli.commands.process import process_cmd

app = typer.Typer(
    name="herald",
    help="Herald: event-driven notification dispatcher.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def configure_logging(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (defaults to HERALD_LOG_LEVEL).",
    ),
) -> None:
    """Install the Rich log handler on stderr."""
    logging.basicConfig(
        level=(log_level or config.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# Register subcommands
app.command(name="process", help="Process a payload and send its notifications.")(process_cmd)
app.command(name="decode", help="Decode a payload and print the event.")(decode_cmd)
app.command(name="preview", help="Show the messages a payload would produce.")(preview_cmd)
app.command(name="check-config", help="Validate the configured destinations.")(check_config_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
