"""Process execution abstraction.

This module provides abstraction over running a configured command, enabling
dependency injection for testing without mock.patch.
"""

import logging
import subprocess
import threading
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import IO

import click

from ciallo.core.config import Command
from ciallo.core.errors import CialloError, MalformedCommand, SpawnFailed, StreamDecodeError
from ciallo.core.result import ExecutionResult
from ciallo.core.time import RealTime, Time

logger = logging.getLogger(__name__)


class ProcessRunner(ABC):
    """Abstract interface for running a command and capturing its output."""

    @abstractmethod
    def execute(self, command: Command, extra_args: Sequence[str]) -> ExecutionResult:
        """Run the command, streaming its output live while capturing it.

        Args:
            command: Command definition from the project config
            extra_args: Already-split arguments appended verbatim after the
                command's own arguments (no shell re-parsing)

        Returns:
            ExecutionResult describing the finished child process

        Raises:
            MalformedCommand: If the command string contains no executable
            SpawnFailed: If the executable cannot be launched
            StreamDecodeError: If a captured line is not valid UTF-8
        """
        ...


class _StreamReader:
    """Drains one child output stream on its own thread.

    Each line is echoed to the matching local stream as soon as it is read and
    appended to ``lines``. The reader owns ``lines`` exclusively until it has
    been joined.
    """

    def __init__(self, name: str, pipe: IO[bytes], to_stderr: bool) -> None:
        self.name = name
        self.lines: list[str] = []
        self.error: Exception | None = None
        self._pipe = pipe
        self._to_stderr = to_stderr
        self._thread = threading.Thread(target=self._run, name=f"ciallo-{name}", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def join(self) -> None:
        self._thread.join()

    def _run(self) -> None:
        logger.debug("Reading %s", self.name)
        try:
            for raw in iter(self._pipe.readline, b""):
                line = raw.decode("utf-8")
                # Only a full "\r\n" terminator is stripped, never a lone "\r"
                if line.endswith("\n"):
                    line = line[:-1].removesuffix("\r")
                # color=True keeps the child's ANSI sequences when we are not on a tty
                click.echo(line, err=self._to_stderr, color=True)
                self.lines.append(line)
        except Exception as e:
            # Re-raised on the main thread by RealProcessRunner._collect()
            self.error = e
        finally:
            # Closing early on error makes a still-writing child fail fast instead of blocking
            self._pipe.close()
        logger.debug("Finished reading %s (%d lines)", self.name, len(self.lines))


class RealProcessRunner(ProcessRunner):
    """Production implementation using subprocess.Popen and reader threads."""

    def __init__(self, time: Time | None = None) -> None:
        self._time = time if time is not None else RealTime()

    def execute(self, command: Command, extra_args: Sequence[str]) -> ExecutionResult:
        """Run the command and block until it exits.

        Implementation details:
        - Enabled streams are piped and drained by one thread each, so a child
          filling one pipe never blocks on the other
        - Disabled streams go to DEVNULL and are never captured
        - Both readers are joined before the result is built; their errors are
          re-raised here
        """
        parts = command.command.split()
        if not parts:
            raise MalformedCommand(f"Command string is empty: {command.command!r}")

        argv = [*parts, *extra_args]
        start = self._time.monotonic()
        try:
            process = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE if command.stdout else subprocess.DEVNULL,
                stderr=subprocess.PIPE if command.stderr else subprocess.DEVNULL,
            )
        except OSError as e:
            raise SpawnFailed(f"Failed to spawn command: {' '.join(argv)}") from e

        logger.debug("Spawned pid=%d argv=%s", process.pid, argv)

        readers: list[_StreamReader] = []
        if process.stdout is not None:
            readers.append(_StreamReader("stdout", process.stdout, to_stderr=False))
        if process.stderr is not None:
            readers.append(_StreamReader("stderr", process.stderr, to_stderr=True))

        with process:
            for reader in readers:
                reader.start()
            returncode = process.wait()
            duration = self._time.monotonic() - start
            for reader in readers:
                reader.join()

        captured = self._collect(readers)
        return ExecutionResult(
            success=returncode == 0,
            duration_seconds=duration,
            # Popen reports death by signal N as -N
            exit_code=returncode if returncode >= 0 else None,
            stdout=captured.get("stdout", ""),
            stderr=captured.get("stderr", ""),
        )

    @staticmethod
    def _collect(readers: list[_StreamReader]) -> dict[str, str]:
        captured: dict[str, str] = {}
        for reader in readers:
            if isinstance(reader.error, UnicodeDecodeError):
                raise StreamDecodeError(reader.name) from reader.error
            if reader.error is not None:
                raise CialloError(f"Failed to read {reader.name} of command") from reader.error
            captured[reader.name] = "\n".join(reader.lines)
        return captured
