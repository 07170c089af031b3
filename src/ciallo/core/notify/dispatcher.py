"""Fan-out of one execution result to the command's hooks."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ciallo.core.config import FeishuHook
from ciallo.core.errors import DeliveryError
from ciallo.core.notify.feishu import send_feishu_notification
from ciallo.core.resolver import NamedHook
from ciallo.core.result import ExecutionResult
from ciallo.core.webhook import WebhookClient


@dataclass(frozen=True)
class DispatchOutcome:
    """Outcome of delivering to one hook.

    Attributes:
        hook_name: Name the hook is configured under
        success: Whether delivery succeeded
        error: Failure description, None on success
    """

    hook_name: str
    success: bool
    error: str | None = None


def _deliver(named: NamedHook, result: ExecutionResult, webhook_client: WebhookClient) -> None:
    hook = named.hook
    if isinstance(hook, FeishuHook):
        send_feishu_notification(webhook_client, hook, result)
        return
    raise TypeError(f"Unsupported hook type for '{named.name}': {type(hook).__name__}")


def dispatch_notifications(
    result: ExecutionResult,
    hooks: Sequence[NamedHook],
    webhook_client: WebhookClient,
    logger: logging.Logger,
) -> list[DispatchOutcome]:
    """Deliver ``result`` to every hook, in order.

    A DeliveryError is logged and recorded for that hook only; the remaining
    hooks are still attempted. Outcomes never affect the program exit code.

    Args:
        result: Finished execution to report
        hooks: Resolved hooks in the order the command lists them
        webhook_client: Transport used by webhook backends
        logger: Destination for per-hook outcome reports

    Returns:
        One DispatchOutcome per hook, in dispatch order
    """
    outcomes: list[DispatchOutcome] = []
    for named in hooks:
        logger.info("Sending notification to hook '%s'", named.name)
        try:
            _deliver(named, result, webhook_client)
        except DeliveryError as e:
            logger.error("✗ Failed to send notification to hook '%s': %s", named.name, e)
            outcomes.append(DispatchOutcome(hook_name=named.name, success=False, error=str(e)))
            continue
        logger.info("✓ Notification sent to hook '%s'", named.name)
        outcomes.append(DispatchOutcome(hook_name=named.name, success=True))
    return outcomes
