"""
cmdline - Fluent builder for shell command lines.

Assemble environment variables, flags, options and arguments into a single
command line, and optionally run it through the shell:

    from cmdline import CommandLine

    result = (
        CommandLine.for_command("echo")
        .with_argument("Hello, world!", wrap=True)
        .execute()
    )

Copyright 2025 Ben Mensi
Licensed under the Apache License, Version 2.0
"""

__version__ = "0.1.0"

from cmdline.builder import CommandLine
from cmdline.runner import CommandRunner, ExecutionResult, Executor

__all__ = ["CommandLine", "CommandRunner", "ExecutionResult", "Executor", "__version__"]
