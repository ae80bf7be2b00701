# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Fluent command-line builder.

Assembles a shell command line from environment variables, flags, options
and positional arguments. Nothing here is escaped or validated: the output is
handed to a POSIX shell as-is.

Example:
    >>> str(
    ...     CommandLine.for_command("command-with-options")
    ...     .with_environment_variable("LOCAL", "true")
    ...     .with_flag("-v")
    ...     .with_option("--opt1", "val1")
    ...     .with_argument("path/to/file.txt")
    ... )
    'LOCAL=true command-with-options -v --opt1 val1 path/to/file.txt'
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from cmdline.runner import CommandRunner, ExecutionResult, Executor

logger = logging.getLogger(__name__)

DEFAULT_OPTION_SEPARATOR = " "


@dataclass
class EnvironmentVariable:
    """A KEY=value assignment placed before the application."""

    key: str
    value: str


@dataclass
class Option:
    """A key/value option. An unset or empty separator defers to the builder default."""

    key: str
    value: str
    separator: Optional[str] = None


class CommandLine:
    """Builds a shell command line one fragment at a time.

    Every ``with_*`` method mutates the builder and returns it, so calls can
    be chained. Rendering always emits, in order: environment variables,
    application, flags, options, arguments.
    """

    def __init__(self, application: str):
        self.application = application
        self.environment_variables: List[EnvironmentVariable] = []
        self.flags: List[str] = []
        self.options: List[Option] = []
        self.arguments: List[str] = []
        self.option_separator = DEFAULT_OPTION_SEPARATOR

    @classmethod
    def for_command(cls, application: str) -> "CommandLine":
        """Start a new command line for ``application``."""
        return cls(application)

    def with_environment_variable(self, key: str, value: str) -> "CommandLine":
        self.environment_variables.append(EnvironmentVariable(key, value))
        return self

    def with_flag(self, flag: str) -> "CommandLine":
        self.flags.append(flag)
        return self

    def with_option(
        self, key: str, value: str, *, separator: Optional[str] = None
    ) -> "CommandLine":
        """
        Add a key/value option.

        Args:
            key: Option name, e.g. "--output"
            value: Option value
            separator: Joins key and value for this option only. When omitted
                or empty, the builder's option separator at render time is used.
        """
        self.options.append(Option(key, value, separator))
        return self

    def with_option_separator(self, separator: str) -> "CommandLine":
        """Set the separator used by every option added without its own."""
        self.option_separator = separator
        return self

    def with_argument(self, argument: str, *, wrap: bool = False) -> "CommandLine":
        """
        Add a positional argument.

        Args:
            argument: Argument text
            wrap: Store the argument enclosed in double quotes
        """
        self.arguments.append(f'"{argument}"' if wrap else argument)
        return self

    def _render_option(self, option: Option) -> str:
        # An empty separator counts as unset
        separator = option.separator or self.option_separator
        return f"{option.key}{separator}{option.value}"

    def render(self) -> str:
        """Render the command line as a single string."""
        segments = [
            " ".join(f"{env.key}={env.value}" for env in self.environment_variables),
            self.application,
            " ".join(self.flags),
            " ".join(self._render_option(option) for option in self.options),
            " ".join(self.arguments),
        ]
        return " ".join(segment for segment in segments if segment)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"CommandLine({self.render()!r})"

    def execute(self, runner: Optional[Executor] = None) -> Optional[ExecutionResult]:
        """
        Run the rendered command line through the shell.

        Args:
            runner: Executor to use (default: a new CommandRunner)

        Returns:
            ExecutionResult with trimmed stdout/stderr, None if the runner
            is in dry-run mode

        Raises:
            subprocess.CalledProcessError: If the command exits non-zero
            OSError: If the shell cannot be launched
        """
        if runner is None:
            runner = CommandRunner()

        command = self.render()
        logger.debug(f"Executing command line for {self.application!r}")
        return runner.run(command)
