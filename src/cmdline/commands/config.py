# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Config command for cmdline.

Provides configuration validation, application checking, and recipe listing.
"""

import logging

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmdline.config import RecipeError, build_command, get_recipes
from cmdline.validation import check_applications, validate_config

app = typer.Typer(help="Manage and validate configuration")
console = Console()
logger = logging.getLogger(__name__)


def _report_applications(results) -> bool:
    all_installed = True
    for name, application, installed in results:
        if installed:
            typer.echo(f"  ✓ {name}: {application}")
        else:
            typer.echo(f"  ✗ {name}: {application} not found on PATH")
            all_installed = False
    return all_installed


@app.command()
def validate(ctx: typer.Context):
    """
    Validate configuration structure and application availability.

    Performs full validation:
    - YAML structure and required fields
    - Application availability (checks if binaries exist on PATH)
    """
    config = ctx.obj.get("config", {})

    typer.echo("Validating configuration...")
    typer.echo()

    structure_issues = validate_config(config)
    if structure_issues:
        typer.echo("Structure Issues:")
        for issue in structure_issues:
            typer.echo(f"  ⚠️  {issue}")
        typer.echo()
    else:
        typer.echo("✓ Configuration structure is valid")
        typer.echo()

    results = check_applications(config)
    if results:
        typer.echo("Application Availability:")
        all_installed = _report_applications(results)
        typer.echo()
        if not all_installed:
            typer.echo("Some applications are not installed.")
            raise typer.Exit(1)
        typer.echo("✓ All applications are installed")
    else:
        typer.echo("No recipes found in configuration")

    if structure_issues:
        raise typer.Exit(1)

    typer.echo()
    typer.echo("Configuration validation complete!")


@app.command()
def check(ctx: typer.Context):
    """
    Check if every recipe's application is installed.

    Quick check for application availability without full validation.
    """
    config = ctx.obj.get("config", {})

    typer.echo("Checking application availability...")
    typer.echo()

    results = check_applications(config)
    if not results:
        typer.echo("No recipes found in configuration")
        return

    all_installed = _report_applications(results)

    typer.echo()
    if all_installed:
        typer.echo("✓ All applications are available")
    else:
        typer.echo("✗ Some applications are missing")
        raise typer.Exit(1)


@app.command("list")
def list_recipes(ctx: typer.Context):
    """
    List all configured recipes with their rendered command lines.
    """
    config = ctx.obj.get("config", {})
    recipes = get_recipes(config)

    if not recipes:
        typer.echo("No recipes configured")
        return

    table = Table(title="Configured Commands")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Command line", style="cyan")

    for name, recipe in recipes.items():
        try:
            rendered = escape(build_command(recipe, name).render())
        except RecipeError as e:
            logger.debug(f"Skipping render of {name}: {e}")
            rendered = "[red]invalid[/red]"
        description = recipe.get("description", "") if isinstance(recipe, dict) else ""
        table.add_row(escape(str(name)), escape(str(description or "-")), rendered)

    console.print(table)
