"""
Shared recipe resolution for the render and run commands.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

from typing import Dict, List, Optional

import typer

from cmdline.config import RecipeError, build_command, get_recipe
from cmdline.runner import CommandRunner


def parse_variables(var: Optional[List[str]]) -> Dict[str, str]:
    """Parse repeated KEY=VALUE options into a dict."""
    variables = {}
    for v in var or []:
        if "=" not in v:
            typer.echo(f"Error: Invalid variable format '{v}'. Use KEY=VALUE", err=True)
            raise typer.Exit(1)
        key, value = v.split("=", 1)
        variables[key] = value
    return variables


def resolve_command_line(
    ctx: typer.Context,
    name: str,
    var: Optional[List[str]],
    runner: CommandRunner,
) -> str:
    """Build the named recipe and substitute its variables.

    Variables from --var override those declared in the recipe.
    """
    config = ctx.obj.get("config", {}) if ctx.obj else {}

    try:
        recipe = get_recipe(config, name)
        command_line = build_command(recipe, name)
    except (KeyError, RecipeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    variables = {}
    recipe_vars = recipe.get("variables")
    if isinstance(recipe_vars, dict):
        variables.update({k: str(v) for k, v in recipe_vars.items()})
    variables.update(parse_variables(var))

    # {{ and }} collapse even when no variables are defined
    return runner.substitute_variables(command_line.render(), variables)
