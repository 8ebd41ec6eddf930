"""Models for process execution results."""

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotnet_test_utilities.assertions import CommandResultAssertions


@dataclass(frozen=True, kw_only=True)
class CommandResult:
    """Captured outcome of a single process invocation."""

    args: Sequence[str]
    stdout: str
    stderr: str
    exit_code: int

    @property
    def command_line(self) -> str:
        """Command line as it would be typed in a shell."""
        return shlex.join(self.args)

    def should(self) -> "CommandResultAssertions":
        """Start a chain of assertions on this result."""
        from dotnet_test_utilities.assertions import CommandResultAssertions

        return CommandResultAssertions(result=self)
