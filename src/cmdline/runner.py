"""
Command runner for cmdline.

Executes shell command lines with variable substitution and error handling.

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Sequence

# Matches an escaped brace pair or a {name} placeholder
PLACEHOLDER_PATTERN = re.compile(r"\{\{|\}\}|\{(\w+)\}")

# Longest command echoed in full to the log
MAX_LOGGED_COMMAND = 100


@dataclass(frozen=True)
class ExecutionResult:
    """Captured output of a finished command (whitespace-trimmed)."""

    stdout: str
    stderr: str
    returncode: int = 0


class Executor(Protocol):
    """Anything that can run a rendered command line."""

    def run(self, command: str) -> Optional[ExecutionResult]:
        ...


class CommandRunner:
    """Runs command lines through the shell and captures their output."""

    def __init__(self, dry_run: bool = False, verbose: bool = False):
        """
        Args:
            dry_run: Log the command line instead of executing it
            verbose: Also log captured stdout at DEBUG
        """
        self.dry_run = dry_run
        self.verbose = verbose
        self.logger = logging.getLogger(__name__)

    def substitute_variables(self, command: str, variables: Dict[str, str]) -> str:
        """
        Fill {name} placeholders from ``variables`` in a single pass.

        ``{{`` and ``}}`` always collapse to literal braces, whether or not
        any variable is defined. Placeholders without a value are left in
        place and reported as a warning.

        Example:
            >>> CommandRunner().substitute_variables("echo {name} {{x}}", {"name": "Alice"})
            'echo Alice {x}'
        """
        missing: List[str] = []

        def replace(match: "re.Match") -> str:
            token = match.group(0)
            if token == "{{":
                return "{"
            if token == "}}":
                return "}"
            name = match.group(1)
            if name in variables:
                self.logger.debug(f"Substituted {token} -> {variables[name]}")
                return str(variables[name])
            missing.append(name)
            return token

        result = PLACEHOLDER_PATTERN.sub(replace, command)
        if missing:
            self.logger.warning(f"Unsubstituted variables: {missing}")
        return result

    def run(
        self,
        command: str,
        variables: Optional[Dict[str, str]] = None,
        check: bool = True,
    ) -> Optional[ExecutionResult]:
        """
        Execute a command line through the shell.

        Args:
            command: Command to execute
            variables: When given (even empty), placeholders and brace
                escapes in ``command`` are resolved first
            check: Raise exception on non-zero exit code

        Returns:
            ExecutionResult with trimmed stdout/stderr, None if dry_run

        Raises:
            subprocess.CalledProcessError: If command fails and check=True
            OSError: If the shell itself cannot be started
        """
        # Without variables the command line is passed through untouched
        if variables is not None:
            command = self.substitute_variables(command, variables)

        if self.dry_run:
            self.logger.info("[DRY RUN] Would execute:")
            self.logger.info(f"  {command}")
            return None

        if len(command) > MAX_LOGGED_COMMAND:
            self.logger.info(f"Executing: {command[:MAX_LOGGED_COMMAND]}...")
        else:
            self.logger.info(f"Executing: {command}")

        try:
            completed = subprocess.run(
                command,
                shell=True,
                check=check,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as e:
            # Log what the command printed before handing the error back
            self.logger.error(f"Command failed with exit code {e.returncode}")
            if e.stdout:
                self.logger.error(f"STDOUT:\n{e.stdout}")
            if e.stderr:
                self.logger.error(f"STDERR:\n{e.stderr}")
            raise

        if self.verbose and completed.stdout:
            self.logger.debug(f"STDOUT:\n{completed.stdout}")
        if completed.stderr:
            self.logger.warning(f"STDERR:\n{completed.stderr}")

        return ExecutionResult(
            stdout=completed.stdout.strip(),
            stderr=completed.stderr.strip(),
            returncode=completed.returncode,
        )

    def run_multiple(
        self,
        commands: Sequence[str],
        on_result: Optional[Callable[[str, Optional[ExecutionResult]], None]] = None,
    ) -> List[Optional[ExecutionResult]]:
        """
        Run command lines one after another.

        Stops at the first failure; the CalledProcessError propagates and
        later commands are never started. ``on_result`` is called with each
        command and its result as soon as that command finishes.

        Returns:
            One ExecutionResult per command (None entries in dry-run mode)
        """
        total = len(commands)
        results: List[Optional[ExecutionResult]] = []
        for position, command in enumerate(commands, 1):
            self.logger.info(f"Command {position}/{total}")
            result = self.run(command)
            if on_result is not None:
                on_result(command, result)
            results.append(result)
        return results
