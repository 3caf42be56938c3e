"""CLI subcommands for sequoia."""
