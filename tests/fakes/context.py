"""Factory functions for creating test contexts."""

from pathlib import Path

from ciallo.core.context import CialloContext
from ciallo.core.process_runner import ProcessRunner
from ciallo.core.webhook import WebhookClient
from tests.fakes.process_runner import FakeProcessRunner
from tests.fakes.webhook_client import FakeWebhookClient


def create_test_context(
    process_runner: ProcessRunner | None = None,
    webhook_client: WebhookClient | None = None,
    cwd: Path | None = None,
    global_config_path: Path | None = None,
    argv: tuple[str, ...] = (),
) -> CialloContext:
    """Create test context with optional pre-configured dependencies.

    Args:
        process_runner: Optional ProcessRunner. If None, creates a
            FakeProcessRunner that reports success.
        webhook_client: Optional WebhookClient. If None, creates an empty
            FakeWebhookClient that answers 200.
        cwd: Optional current working directory. If None, uses
            Path("/test/default/cwd") to prevent accidental use of Path.cwd().
        global_config_path: Optional global config path. If None, points at a
            file that does not exist, which means "no hooks configured".
        argv: Original invocation arguments, used for "--" detection.

    Returns:
        CialloContext configured with provided values and test defaults
    """
    return CialloContext(
        process_runner=process_runner if process_runner is not None else FakeProcessRunner(),
        webhook_client=webhook_client if webhook_client is not None else FakeWebhookClient(),
        cwd=cwd if cwd is not None else Path("/test/default/cwd"),
        global_config_path=(
            global_config_path
            if global_config_path is not None
            else Path("/test/default/home/.config/ciallo/config.toml")
        ),
        argv=argv,
    )
