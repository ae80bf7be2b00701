# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Configuration validation for cmdline.

Validates YAML recipe structure and provides helpful error messages.
"""

import logging
import shutil
from typing import Any, Dict, List, Set, Tuple

logger = logging.getLogger(__name__)

# Valid top-level keys in config
VALID_TOP_LEVEL_KEYS = {"commands"}

RECIPE_REQUIRED_FIELDS = {"application"}

RECIPE_OPTIONAL_FIELDS = {
    "description",
    "option_separator",
    "env",
    "flags",
    "options",
    "arguments",
    "variables",
}

# Expected container type per field
RECIPE_LIST_FIELDS = {"flags", "options", "arguments"}


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration structure and return list of warnings/errors.

    Args:
        config: Configuration dictionary loaded from YAML

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    if not isinstance(config, dict):
        return [f"Config must be a dictionary, got {type(config).__name__}"]

    unknown_keys = set(config.keys()) - VALID_TOP_LEVEL_KEYS
    if unknown_keys:
        issues.append(
            f"Unknown top-level config keys: {', '.join(sorted(unknown_keys))}. "
            f"Valid keys are: {', '.join(sorted(VALID_TOP_LEVEL_KEYS))}"
        )

    recipes = config.get("commands")
    if recipes is None:
        return issues

    if not isinstance(recipes, dict):
        issues.append(f"'commands' must be a dictionary, got {type(recipes).__name__}")
        return issues

    for name, recipe in recipes.items():
        if not isinstance(recipe, dict):
            issues.append(
                f"commands.{name}: Recipe must be a dictionary, got {type(recipe).__name__}"
            )
            continue
        issues.extend(_validate_recipe(f"commands.{name}", recipe))

    return issues


def _validate_recipe(recipe_path: str, recipe: Dict[str, Any]) -> List[str]:
    """
    Validate a single recipe.

    Args:
        recipe_path: Dotted path to recipe (e.g. "commands.greet")
        recipe: Recipe dictionary

    Returns:
        List of validation issues for this recipe
    """
    issues = []

    for field in sorted(RECIPE_REQUIRED_FIELDS):
        if not recipe.get(field):
            issues.append(f"{recipe_path}: Missing required field '{field}'")

    for field in sorted(RECIPE_LIST_FIELDS):
        if field in recipe and not isinstance(recipe[field], list):
            issues.append(
                f"{recipe_path}: '{field}' must be a list, got {type(recipe[field]).__name__}"
            )

    # Entry-level checks mirror what build_command rejects
    for index, option in enumerate(recipe.get("options") or []):
        if not isinstance(option, dict) or "key" not in option or "value" not in option:
            issues.append(f"{recipe_path}.options[{index}]: Needs 'key' and 'value'")

    for index, argument in enumerate(recipe.get("arguments") or []):
        if isinstance(argument, dict) and "value" not in argument:
            issues.append(f"{recipe_path}.arguments[{index}]: Needs 'value'")

    env = recipe.get("env")
    if env is not None and not isinstance(env, (dict, list)):
        issues.append(f"{recipe_path}: 'env' must be a mapping or a list, got {type(env).__name__}")

    variables = recipe.get("variables")
    if variables is not None and not isinstance(variables, dict):
        issues.append(
            f"{recipe_path}: 'variables' must be a dictionary, got {type(variables).__name__}"
        )

    # Unknown fields are reported only when they look like a typo
    known_fields = RECIPE_REQUIRED_FIELDS | RECIPE_OPTIONAL_FIELDS
    for field in sorted(set(recipe.keys()) - known_fields):
        suggestion = suggest_fix(field, known_fields)
        if suggestion:
            issues.append(f"{recipe_path}: Unknown field '{field}' (did you mean '{suggestion}'?)")
        else:
            logger.debug(f"{recipe_path}: Unrecognized field '{field}' will be ignored")

    return issues


def check_applications(config: Dict[str, Any]) -> List[Tuple[str, str, bool]]:
    """
    Check whether each recipe's application is available on PATH.

    Args:
        config: Configuration dictionary

    Returns:
        List of (recipe name, application, installed) tuples
    """
    results = []
    if not isinstance(config, dict):
        return results

    recipes = config.get("commands") or {}
    if not isinstance(recipes, dict):
        return results

    for name, recipe in recipes.items():
        if not isinstance(recipe, dict) or not recipe.get("application"):
            continue
        application = str(recipe["application"])
        results.append((name, application, shutil.which(application) is not None))

    return results


# Largest edit distance still offered as a suggestion
MAX_SUGGESTION_DISTANCE = 2


def _edit_distance(left: str, right: str) -> int:
    """Levenshtein distance, computed one row at a time."""
    previous = list(range(len(right) + 1))
    for row, left_char in enumerate(left, 1):
        current = [row]
        for column, right_char in enumerate(right, 1):
            current.append(
                min(
                    previous[column] + 1,
                    current[column - 1] + 1,
                    previous[column - 1] + (left_char != right_char),
                )
            )
        previous = current
    return previous[-1]


def suggest_fix(typo: str, valid_options: Set[str]) -> str:
    """
    Suggest the closest valid name for a misspelled key.

    Comparison ignores case. Ties go to the alphabetically first option.

    Returns:
        Suggested correction or empty string if nothing is close enough
    """
    if not valid_options:
        return ""

    distance, best_match = min(
        (_edit_distance(typo.lower(), option.lower()), option) for option in valid_options
    )
    return best_match if distance <= MAX_SUGGESTION_DISTANCE else ""
