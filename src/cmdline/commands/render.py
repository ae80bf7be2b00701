"""
Render command for cmdline.

Prints the command line a recipe produces without running it.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from typing import List, Optional

import typer

from cmdline.commands._recipe import resolve_command_line
from cmdline.runner import CommandRunner

app = typer.Typer(help="Print the command line for a recipe", invoke_without_command=True)


@app.callback(invoke_without_command=True)
def render_command(
    ctx: typer.Context,
    name: str = typer.Argument(None, help="Recipe name (from config)"),
    var: Optional[List[str]] = typer.Option(
        None,
        "--var",
        "-V",
        help="Variable in KEY=VALUE format (can be repeated)",
    ),
):
    """Render a recipe to a shell command line.

    Examples:
        cmdline render greet
        cmdline render --var name=World greet
    """
    if name is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)

    runner = CommandRunner()
    typer.echo(resolve_command_line(ctx, name, var, runner))
