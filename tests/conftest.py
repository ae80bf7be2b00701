# Copyright 2024 Life-CLI Contributors
# SPDX-License-Identifier: Apache-2.0

"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Sample configuration for testing."""
    return {
        "commands": {
            "greet": {
                "description": "Say hello",
                "application": "echo",
                "arguments": [{"value": "Hello, {name}!", "wrap": True}],
                "variables": {"name": "world"},
            },
            "complex": {
                "description": "Every fragment type",
                "application": "command-with-options",
                "env": {"LOCAL": "true"},
                "flags": ["-v"],
                "options": [{"key": "--opt1", "value": "val1"}],
                "arguments": ["path/to/file.txt"],
            },
            "mixed": {
                "application": "command-with-options",
                "option_separator": "=",
                "options": [
                    {"key": "--opt1", "value": "val1", "separator": " "},
                    {"key": "--opt2", "value": "val2"},
                ],
            },
            "fail": {
                "description": "Exits non-zero",
                "application": "sh",
                "flags": ["-c"],
                "arguments": [{"value": "echo broken >&2; exit 3", "wrap": True}],
            },
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config):
    """Create a temporary config file."""
    config_path = temp_dir / "cmdline.yml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path
