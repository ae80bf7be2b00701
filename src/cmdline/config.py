"""
Configuration loader for cmdline.

Loads YAML recipe files and turns named recipes into CommandLine builders.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from cmdline.builder import CommandLine

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cmdline.yml"


class ConfigError(ValueError):
    """Raised when a config file has the wrong overall shape."""

    pass


class RecipeError(ValueError):
    """Raised when a recipe cannot be turned into a command line."""

    pass


def to_fragment(value: Any) -> str:
    """
    Convert a YAML scalar to command-line text.

    YAML booleans render the way shells and most tools spell them
    (``true``/``false``) rather than Python's ``True``/``False``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, tries ~/cmdline.yml then ./cmdline.yml

    Returns:
        Dictionary containing configuration

    Raises:
        FileNotFoundError: If config file not found
        yaml.YAMLError: If config file is invalid YAML
        ConfigError: If the file does not hold a mapping at the top level
    """
    if config_path:
        path = Path(config_path).expanduser()
    else:
        home_config = Path.home() / CONFIG_FILENAME
        local_config = Path.cwd() / CONFIG_FILENAME

        if home_config.exists():
            path = home_config
        elif local_config.exists():
            path = local_config
        else:
            raise FileNotFoundError(
                "No config file found. Tried:\n"
                f"  - {home_config}\n"
                f"  - {local_config}\n"
                "Use --config to specify a custom location."
            )

    # Load YAML
    try:
        with open(path, "r") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error parsing config file {path}: {e}")

    # An empty file is an empty config
    if config is None:
        config = {}

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file {path} must contain a mapping, got {type(config).__name__}"
        )

    # Structural problems are warnings; recipes are checked again when built
    from cmdline.validation import validate_config
    issues = validate_config(config)
    if issues:
        logger.warning("Configuration validation warnings:")
        for issue in issues:
            logger.warning(f"  - {issue}")

    return config


def get_recipes(config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Return the recipe mapping from config (empty if none)."""
    if not isinstance(config, dict):
        return {}
    recipes = config.get("commands") or {}
    if not isinstance(recipes, dict):
        return {}
    return recipes


def get_recipe(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """
    Get a single recipe by name.

    Raises KeyError if the recipe is not defined.
    """
    recipes = get_recipes(config)
    if name not in recipes:
        raise KeyError(f"Command not found: {name}. Available: {sorted(recipes.keys())}")
    return recipes[name]


def _environment_entries(env: Any, name: str) -> List[tuple]:
    # A mapping cannot hold duplicate keys, a list of {key, value} can
    if isinstance(env, dict):
        return [(str(k), to_fragment(v)) for k, v in env.items()]
    if isinstance(env, list):
        entries = []
        for entry in env:
            if not isinstance(entry, dict) or "key" not in entry or "value" not in entry:
                raise RecipeError(f"{name}: env entries must have 'key' and 'value', got {entry!r}")
            entries.append((str(entry["key"]), to_fragment(entry["value"])))
        return entries
    raise RecipeError(f"{name}: 'env' must be a mapping or a list, got {type(env).__name__}")


def build_command(recipe: Dict[str, Any], name: str = "<recipe>") -> CommandLine:
    """
    Build a CommandLine from a recipe definition.

    Args:
        recipe: Recipe dictionary (application, env, flags, options, arguments)
        name: Recipe name, used in error messages

    Returns:
        Configured CommandLine

    Raises:
        RecipeError: If the recipe is missing its application or has malformed entries
    """
    if not isinstance(recipe, dict):
        raise RecipeError(f"{name}: recipe must be a dictionary, got {type(recipe).__name__}")

    application = recipe.get("application")
    if not application:
        raise RecipeError(f"{name}: missing required field 'application'")

    command = CommandLine.for_command(str(application))

    # Default separator for options that do not set their own
    if "option_separator" in recipe:
        command.with_option_separator(str(recipe["option_separator"]))

    for key, value in _environment_entries(recipe.get("env") or {}, name):
        command.with_environment_variable(key, value)

    for flag in recipe.get("flags") or []:
        command.with_flag(to_fragment(flag))

    for option in recipe.get("options") or []:
        if not isinstance(option, dict) or "key" not in option or "value" not in option:
            raise RecipeError(f"{name}: options must have 'key' and 'value', got {option!r}")
        separator = option.get("separator")
        command.with_option(
            str(option["key"]),
            to_fragment(option["value"]),
            separator=None if separator is None else str(separator),
        )

    for argument in recipe.get("arguments") or []:
        if isinstance(argument, dict):
            if "value" not in argument:
                raise RecipeError(f"{name}: argument entries need a 'value', got {argument!r}")
            command.with_argument(to_fragment(argument["value"]), wrap=bool(argument.get("wrap", False)))
        else:
            command.with_argument(to_fragment(argument))

    logger.debug(f"Built {name}: {command}")
    return command
