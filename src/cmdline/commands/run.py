"""
Run command for cmdline.

Executes one or more recipes' command lines through the shell.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import logging
import subprocess
from typing import List, Optional

import typer

from cmdline.commands._recipe import resolve_command_line
from cmdline.runner import CommandRunner, ExecutionResult

app = typer.Typer(help="Run recipes by name", invoke_without_command=True)
logger = logging.getLogger(__name__)


def _print_result(command: str, result: Optional[ExecutionResult]) -> None:
    if result is None:
        typer.echo(f"[DRY RUN] {command}")
        return
    if result.stdout:
        typer.echo(result.stdout)
    if result.stderr:
        typer.echo(result.stderr, err=True)


@app.callback(invoke_without_command=True)
def run_command(
    ctx: typer.Context,
    names: Optional[List[str]] = typer.Argument(None, help="Recipe names (from config), run in order"),
    var: Optional[List[str]] = typer.Option(
        None,
        "--var",
        "-V",
        help="Variable in KEY=VALUE format (can be repeated)",
    ),
):
    """Execute recipes in order and print their output.

    Standard output goes to stdout, standard error to stderr. Execution
    stops at the first failing recipe, which sets the exit code.

    Examples:
        cmdline run greet
        cmdline run build test
        cmdline run --var name=World greet
        cmdline --dry-run run greet
    """
    if not names:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    dry_run = ctx.obj.get("dry_run", False) if ctx.obj else False
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False

    runner = CommandRunner(dry_run=dry_run, verbose=verbose)

    # Resolve every recipe before running any of them
    commands = [resolve_command_line(ctx, name, var, runner) for name in names]

    try:
        runner.run_multiple(commands, on_result=_print_result)
    except subprocess.CalledProcessError as e:
        failed = names[commands.index(e.cmd)] if e.cmd in commands else e.cmd
        if e.stdout:
            typer.echo(e.stdout.strip())
        if e.stderr:
            typer.echo(e.stderr.strip(), err=True)
        typer.echo(f"Error: '{failed}' failed with exit code {e.returncode}", err=True)
        raise typer.Exit(e.returncode)
    except OSError as e:
        logger.exception("Command could not be launched")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

