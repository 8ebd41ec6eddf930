"""Assertions on captured command results."""

from dataclasses import dataclass

from dotnet_test_utilities.models.result import CommandResult


@dataclass(frozen=True, kw_only=True)
class CommandResultAssertions:
    """Chainable checks raising ``AssertionError`` with full diagnostics."""

    result: CommandResult

    def passes(self) -> "CommandResultAssertions":
        if self.result.exit_code != 0:
            self._fail("Expected command to pass but it did not.")
        return self

    def fails(self) -> "CommandResultAssertions":
        if self.result.exit_code == 0:
            self._fail("Expected command to fail but it did not.")
        return self

    def has_stdout(self, expected: str) -> "CommandResultAssertions":
        if self.result.stdout != expected:
            self._fail(f"Command did not output the expected stdout:\n{expected}")
        return self

    def has_stdout_containing(self, expected: str) -> "CommandResultAssertions":
        if expected not in self.result.stdout:
            self._fail(f"Command did not output stdout containing:\n{expected}")
        return self

    def has_no_stderr(self) -> "CommandResultAssertions":
        if self.result.stderr:
            self._fail("Expected command not to write to stderr but it did.")
        return self

    def _fail(self, reason: str) -> None:
        raise AssertionError(
            f"{reason}\n"
            f"Command: {self.result.command_line}\n"
            f"Exit code: {self.result.exit_code}\n"
            f"StdOut:\n{self.result.stdout}\n"
            f"StdErr:\n{self.result.stderr}"
        )
