"""
Main CLI entry point for cmdline.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import logging
from typing import Optional

import typer
import yaml

from cmdline import __version__
from cmdline.commands import config, render, run
from cmdline.config import ConfigError, load_config

app = typer.Typer(
    name="cmdline",
    help="Build, inspect and run shell command lines from YAML recipes",
    no_args_is_help=True,
)

app.add_typer(render.app, name="render")
app.add_typer(run.app, name="run")
app.add_typer(config.app, name="config")


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/cmdline.yml or ./cmdline.yml)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be executed without running commands",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
):
    """
    cmdline: assemble shell command lines from named recipes.

    Recipes are defined under 'commands' in a YAML config file.
    """
    state = {"config": {}, "dry_run": dry_run, "verbose": verbose}

    # Setup logging
    setup_logging(verbose)

    # Every command except version needs a config
    commands_without_config = ["version"]
    if ctx.invoked_subcommand and ctx.invoked_subcommand not in commands_without_config:
        try:
            state["config"] = load_config(config_path)
            logging.debug(f"Loaded config from: {config_path or 'default location'}")
        except (FileNotFoundError, yaml.YAMLError, ConfigError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    # Store state in context for subcommands
    ctx.obj = state


@app.command()
def version():
    """Show version information."""
    typer.echo(f"cmdline version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
