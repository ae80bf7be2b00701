"""Subcommands for the cmdline CLI."""
