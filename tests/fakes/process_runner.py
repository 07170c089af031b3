"""Fake implementation of ProcessRunner for testing.

This fake enables testing the CLI flow without spawning real processes.
"""

from collections.abc import Sequence

from ciallo.core.config import Command
from ciallo.core.errors import CialloError
from ciallo.core.process_runner import ProcessRunner
from ciallo.core.result import ExecutionResult

SUCCESS_RESULT = ExecutionResult(
    success=True, duration_seconds=1.0, exit_code=0, stdout="", stderr=""
)


class FakeProcessRunner(ProcessRunner):
    """In-memory fake that returns a predetermined result.

    Constructor Injection:
    - All state is provided via constructor parameters
    - Only the call log changes after construction

    Examples:
        # Child that fails with exit code 2
        >>> runner = FakeProcessRunner(
        ...     result=ExecutionResult(
        ...         success=False, duration_seconds=0.5, exit_code=2, stdout="", stderr="boom"
        ...     )
        ... )

        # Spawn failure
        >>> runner = FakeProcessRunner(error=SpawnFailed("Failed to spawn command: nope"))
    """

    def __init__(
        self,
        *,
        result: ExecutionResult = SUCCESS_RESULT,
        error: CialloError | None = None,
    ) -> None:
        """Initialize fake with the outcome every execute() call produces.

        Args:
            result: Result returned from execute()
            error: If set, raised from execute() instead of returning result
        """
        self._result = result
        self._error = error
        self._execute_calls: list[tuple[Command, list[str]]] = []

    def execute(self, command: Command, extra_args: Sequence[str]) -> ExecutionResult:
        """Record the call and return (or raise) the configured outcome."""
        self._execute_calls.append((command, list(extra_args)))
        if self._error is not None:
            raise self._error
        return self._result

    @property
    def execute_calls(self) -> list[tuple[Command, list[str]]]:
        """Get the list of execute() calls that were made.

        Returns list of (command, extra_args) tuples.

        This property is for test assertions only.
        """
        return self._execute_calls.copy()
