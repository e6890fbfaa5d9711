"""Herald CLI subcommands."""
