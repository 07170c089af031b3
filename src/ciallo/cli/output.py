"""Output utilities for CLI commands with clear intent."""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Output informational message for human users.

    Routes to stderr so that stdout carries only the child's output.
    """
    click.echo(message, nl=nl, err=True)


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as a short human readable string.

    Examples:
        >>> format_duration(0.42)
        '0.4s'
        >>> format_duration(83)
        '1m 23s'
        >>> format_duration(7500)
        '2h 5m 0s'
    """
    if seconds < 60:
        return f"{seconds:.1f}s"

    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"
