"""Herald CLI — Typer-based command-line interface.

Provides the ``herald`` command with subcommands for processing a payload
end to end, decoding it, previewing the messages it would produce, and
checking the configured destinations.

All output uses Rich for formatted terminal display.
"""
