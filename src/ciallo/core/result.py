"""Outcome of a single command invocation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionResult:
    """Immutable result of running one command.

    Created once by the process runner after the child is reaped and shared
    read-only with every notification backend.

    Attributes:
        success: Whether the child exited normally with code 0
        duration_seconds: Wall-clock time from spawn to exit
        exit_code: Child exit code, or None if it was terminated by a signal
        stdout: Captured stdout lines joined with newlines ("" when disabled)
        stderr: Captured stderr lines joined with newlines ("" when disabled)
    """

    success: bool
    duration_seconds: float
    exit_code: int | None
    stdout: str
    stderr: str

    @property
    def status_label(self) -> str:
        return "SUCCESS" if self.success else "FAILED"
