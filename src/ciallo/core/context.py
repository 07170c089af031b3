"""Application context with dependency injection."""

import sys
from dataclasses import dataclass
from pathlib import Path

from ciallo.core.config import global_config_path
from ciallo.core.process_runner import ProcessRunner, RealProcessRunner
from ciallo.core.webhook import RealWebhookClient, WebhookClient


@dataclass(frozen=True)
class CialloContext:
    """Immutable context holding all dependencies for a ciallo run.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    process_runner: ProcessRunner
    webhook_client: WebhookClient
    cwd: Path  # Current working directory at CLI invocation
    global_config_path: Path
    argv: tuple[str, ...]  # Original invocation, used to detect a literal "--"


def create_context() -> CialloContext:
    """Create production context with real implementations.

    Called at CLI entry point when no context is provided by tests.
    """
    return CialloContext(
        process_runner=RealProcessRunner(),
        webhook_client=RealWebhookClient(),
        cwd=Path.cwd(),
        global_config_path=global_config_path(),
        argv=tuple(sys.argv[1:]),
    )
