# Copyright 2024 Life-CLI Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for runner.py module."""

import logging
import subprocess

import pytest

from cmdline.runner import CommandRunner, ExecutionResult


class TestCommandRunner:
    """Test command execution functionality."""

    def test_init_creates_runner(self):
        """Test CommandRunner initialization."""
        runner = CommandRunner(dry_run=False)
        assert runner.dry_run is False
        assert runner.logger is not None

    def test_substitute_variables_simple(self):
        """Test basic variable substitution."""
        runner = CommandRunner()

        result = runner.substitute_variables("echo {name} {value}", {"name": "test", "value": "123"})

        assert result == "echo test 123"

    def test_substitute_variables_converts_to_string(self):
        """Test non-string values are converted."""
        runner = CommandRunner()

        result = runner.substitute_variables("echo {number} {boolean}", {"number": 42, "boolean": True})

        assert result == "echo 42 True"

    def test_substitute_variables_missing_variable(self, caplog):
        """Test warning for unsubstituted variables."""
        runner = CommandRunner()

        with caplog.at_level(logging.WARNING):
            result = runner.substitute_variables("echo {name} {missing}", {"name": "test"})

        assert result == "echo test {missing}"
        assert "Unsubstituted variables" in caplog.text
        assert "missing" in caplog.text

    def test_substitute_variables_with_escaping(self):
        """Test variable escaping with double braces."""
        runner = CommandRunner()

        result = runner.substitute_variables("echo {{literal}} and {var}", {"var": "substituted"})

        assert result == "echo {literal} and substituted"

    def test_substitute_variables_escapes_without_variables(self):
        """Test double braces collapse even when no variables are given."""
        runner = CommandRunner()

        assert runner.substitute_variables("echo {{x}}", {}) == "echo {x}"
        assert runner.substitute_variables("echo {{x}}", {"y": "1"}) == "echo {x}"

    def test_substitute_variables_no_rescan(self):
        """Test substituted values are not themselves substituted."""
        runner = CommandRunner()

        result = runner.substitute_variables("echo {a}", {"a": "{b}", "b": "nope"})

        assert result == "echo {b}"

    def test_run_with_empty_variables_collapses_escapes(self):
        """An empty variables dict still resolves escapes."""
        runner = CommandRunner()

        result = runner.run("echo '{{x}}'", {})

        assert result.stdout == "{x}"

    def test_run_command_dry_run(self, caplog):
        """Test command execution in dry-run mode."""
        runner = CommandRunner(dry_run=True)

        with caplog.at_level(logging.INFO):
            result = runner.run("echo hello")

        assert result is None
        assert "[DRY RUN]" in caplog.text
        assert "echo hello" in caplog.text

    def test_run_command_success(self, caplog):
        """Test successful command execution."""
        runner = CommandRunner(dry_run=False)

        with caplog.at_level(logging.INFO):
            result = runner.run("echo 'test output'")

        assert "Executing:" in caplog.text
        assert result == ExecutionResult(stdout="test output", stderr="", returncode=0)

    def test_run_trims_output(self):
        """Leading and trailing whitespace is removed from both streams."""
        runner = CommandRunner()

        result = runner.run("printf '  padded  \\n\\n'; printf '\\n err \\n' >&2")

        assert result.stdout == "padded"
        assert result.stderr == "err"

    def test_run_logs_long_commands_truncated(self, caplog):
        runner = CommandRunner()
        command = "echo " + "x" * 200

        with caplog.at_level(logging.INFO):
            runner.run(command)

        assert "..." in caplog.text
        assert command not in caplog.text

    def test_run_command_failure(self, caplog):
        """Test failed command raises CalledProcessError."""
        runner = CommandRunner(dry_run=False)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(subprocess.CalledProcessError) as exc_info:
                runner.run("echo oops >&2; exit 1")

        assert exc_info.value.returncode == 1
        assert "exit code 1" in caplog.text
        assert "oops" in caplog.text

    def test_run_command_not_found(self):
        """A missing program surfaces as the shell's exit status 127."""
        runner = CommandRunner()

        with pytest.raises(subprocess.CalledProcessError) as exc_info:
            runner.run("definitely-not-a-real-tool-xyz")

        assert exc_info.value.returncode == 127

    def test_run_without_check(self):
        """Test result is returned for non-zero exit when check=False."""
        runner = CommandRunner()

        result = runner.run("exit 2", check=False)

        assert result.returncode == 2

    def test_run_command_with_substitution(self):
        """Test command execution with variable substitution."""
        runner = CommandRunner(dry_run=False)

        result = runner.run("echo {message}", {"message": "hello world"})

        assert result.stdout == "hello world"

    def test_run_without_variables_keeps_braces(self):
        """Braces are left alone when no variables are given."""
        runner = CommandRunner()

        result = runner.run("echo '{{x}}'")

        assert result.stdout == "{{x}}"

    def test_run_multiple_commands_dry_run(self, caplog):
        """Test multiple command execution in dry-run mode."""
        runner = CommandRunner(dry_run=True)

        with caplog.at_level(logging.INFO):
            results = runner.run_multiple(["echo first", "echo second", "echo third"])

        assert results == [None, None, None]
        assert caplog.text.count("[DRY RUN]") == 3

    def test_run_multiple_commands_stops_on_error(self, temp_dir):
        """Test multiple commands stop on first error."""
        runner = CommandRunner(dry_run=False)
        marker = temp_dir / "third"

        commands = [
            "echo 'first'",
            "exit 1",
            f"touch {marker}",
        ]

        with pytest.raises(subprocess.CalledProcessError):
            runner.run_multiple(commands)

        assert not marker.exists()

    def test_run_multiple_reports_each_result(self):
        """Test on_result sees every command as it finishes."""
        runner = CommandRunner(dry_run=False)
        seen = []

        results = runner.run_multiple(
            ["echo first", "echo second"],
            on_result=lambda command, result: seen.append((command, result.stdout)),
        )

        assert [r.stdout for r in results] == ["first", "second"]
        assert seen == [("echo first", "first"), ("echo second", "second")]

    def test_run_multiple_leaves_braces_alone(self):
        """Commands are run as given, without placeholder handling."""
        runner = CommandRunner()

        results = runner.run_multiple(["echo '{{x}}'"])

        assert results[0].stdout == "{{x}}"

    def test_run_multiple_empty_list(self):
        """Test running empty command list."""
        runner = CommandRunner(dry_run=False)

        assert runner.run_multiple([]) == []
