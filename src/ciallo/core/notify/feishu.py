"""Feishu-style webhook notification backend."""

from dataclasses import asdict, dataclass

from ciallo.cli.output import format_duration
from ciallo.core.config import FeishuHook
from ciallo.core.errors import DeliveryError
from ciallo.core.result import ExecutionResult
from ciallo.core.webhook import WebhookClient


@dataclass(frozen=True)
class FeishuMessage:
    """JSON body sent to a Feishu webhook: ``{"msg": "..."}``."""

    msg: str


def build_feishu_message(result: ExecutionResult) -> FeishuMessage:
    """Render the result as status line, captured stdout, then captured stderr."""
    status = "✅ success" if result.success else "❌ failure"
    duration = format_duration(result.duration_seconds)
    return FeishuMessage(msg=f"{status}({duration})\n{result.stdout}\n{result.stderr}")


def send_feishu_notification(
    client: WebhookClient,
    hook: FeishuHook,
    result: ExecutionResult,
) -> None:
    """POST the rendered result to the hook's webhook URL once.

    Raises:
        DeliveryError: If the endpoint is unreachable or answers with a
            non-2xx status
    """
    message = build_feishu_message(result)
    status_code = client.post_json(hook.webhook_url, asdict(message))
    if not 200 <= status_code < 300:
        raise DeliveryError(f"Webhook returned HTTP {status_code}", status_code=status_code)
