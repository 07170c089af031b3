"""Exception hierarchy for ciallo.

Configuration, spawn and stream errors are fatal and propagate to the CLI,
which renders the cause chain and exits 1. DeliveryError is the only error
that is handled below the CLI: the notification dispatcher logs it per hook.
"""

from pathlib import Path


class CialloError(Exception):
    """Base class for all errors raised by ciallo."""


class ConfigError(CialloError):
    """A configuration file is unreadable, malformed, or incomplete."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class CommandNotFound(ConfigError):
    """The requested command name is not defined in the project config."""

    def __init__(self, name: str, path: Path) -> None:
        super().__init__(f"Command '{name}' not found in {path}", path)
        self.name = name


class HookNotFound(ConfigError):
    """A command references a hook name the global config does not define."""

    def __init__(self, name: str, path: Path) -> None:
        super().__init__(f"Hook '{name}' not found in global config {path}", path)
        self.name = name


class MalformedCommand(CialloError):
    """The command string has no executable token."""


class SpawnFailed(CialloError):
    """The child process could not be launched."""


class StreamDecodeError(CialloError):
    """A line on a captured output stream was not valid UTF-8."""

    def __init__(self, stream_name: str) -> None:
        super().__init__(f"Failed to decode {stream_name} of command as UTF-8")
        self.stream_name = stream_name


class DeliveryError(CialloError):
    """A notification could not be delivered to its endpoint.

    Attributes:
        status_code: HTTP status returned by the endpoint, or None when the
            request never got a response (DNS, refused connection, timeout)
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
