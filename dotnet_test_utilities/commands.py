"""Invocation of external commands with captured output."""

import logging
import os
import shlex
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path

from dotnet_test_utilities.models.result import CommandResult

log = logging.getLogger(__name__)


def escape_single_arg(arg: str | Path) -> str:
    """Quote one argument so that ``split_args`` returns it unchanged."""
    return shlex.quote(str(arg))


def split_args(args: str | Sequence[str]) -> Sequence[str]:
    """Split an argument string with shell rules; sequences pass through."""
    if isinstance(args, str):
        return shlex.split(args)
    return list(args)


@dataclass(frozen=True, kw_only=True)
class TestCommand:
    """An executable plus the settings it is launched with."""

    __test__ = False

    executable: str | Path
    prefix_args: Sequence[str] = ()
    working_directory: Path | None = None
    environment: Mapping[str, str] = field(default_factory=dict)

    def with_working_directory(self, working_directory: Path) -> "TestCommand":
        return replace(self, working_directory=working_directory)

    def with_environment_variable(self, name: str, value: str) -> "TestCommand":
        return replace(self, environment={**self.environment, name: value})

    def execute(self, args: str | Sequence[str] = ()) -> CommandResult:
        """Run the command to completion and capture its output.

        A non-zero exit code is reported in the result, not raised.
        """
        argv = [str(self.executable), *self.prefix_args, *split_args(args)]
        log.info(
            "Executing: %s (cwd=%s)", shlex.join(argv), self.working_directory or "."
        )

        completed = subprocess.run(
            argv,
            cwd=self.working_directory,
            env={**os.environ, **self.environment},
            capture_output=True,
            text=True,
            check=False,
        )

        log.info("Exited with code %d: %s", completed.returncode, argv[0])
        return CommandResult(
            args=tuple(argv),
            stdout=completed.stdout,
            stderr=completed.stderr,
            exit_code=completed.returncode,
        )


def new_command(
    dotnet: Path, environment: Mapping[str, str] | None = None
) -> TestCommand:
    """Command running the tool's project scaffolding verb."""
    return TestCommand(
        executable=dotnet, prefix_args=("new",), environment=dict(environment or {})
    )
