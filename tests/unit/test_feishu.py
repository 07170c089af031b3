"""Tests for the Feishu webhook backend."""

import pytest

from ciallo.core.config import FeishuHook
from ciallo.core.errors import DeliveryError
from ciallo.core.notify.feishu import (
    FeishuMessage,
    build_feishu_message,
    send_feishu_notification,
)
from ciallo.core.result import ExecutionResult
from tests.fakes.webhook_client import FakeWebhookClient

HOOK = FeishuHook(webhook_url="https://hook.test/team")


def _result(success: bool = True, **overrides: object) -> ExecutionResult:
    fields: dict[str, object] = {
        "success": success,
        "duration_seconds": 83.0,
        "exit_code": 0 if success else 1,
        "stdout": "built 3 crates",
        "stderr": "warning: unused import",
    }
    fields.update(overrides)
    return ExecutionResult(**fields)  # type: ignore[arg-type]


def test_build_feishu_message_success() -> None:
    message = build_feishu_message(_result(success=True))

    assert message == FeishuMessage(
        msg="✅ success(1m 23s)\nbuilt 3 crates\nwarning: unused import"
    )


def test_build_feishu_message_failure() -> None:
    message = build_feishu_message(_result(success=False, duration_seconds=0.42))

    assert message.msg.startswith("❌ failure(0.4s)\n")


def test_build_feishu_message_keeps_empty_segments() -> None:
    message = build_feishu_message(_result(stdout="", stderr=""))

    assert message.msg == "✅ success(1m 23s)\n\n"


def test_send_feishu_notification_posts_msg_json() -> None:
    client = FakeWebhookClient()

    send_feishu_notification(client, HOOK, _result())

    assert client.posts == [
        (
            "https://hook.test/team",
            {"msg": "✅ success(1m 23s)\nbuilt 3 crates\nwarning: unused import"},
        )
    ]


@pytest.mark.parametrize("status_code", [200, 201, 204])
def test_send_feishu_notification_accepts_2xx(status_code: int) -> None:
    client = FakeWebhookClient(status_codes={HOOK.webhook_url: status_code})

    send_feishu_notification(client, HOOK, _result())


@pytest.mark.parametrize("status_code", [302, 404, 500])
def test_send_feishu_notification_rejects_other_statuses(status_code: int) -> None:
    client = FakeWebhookClient(status_codes={HOOK.webhook_url: status_code})

    with pytest.raises(DeliveryError) as exc_info:
        send_feishu_notification(client, HOOK, _result())

    assert exc_info.value.status_code == status_code
    assert str(status_code) in str(exc_info.value)


def test_send_feishu_notification_transport_failure_propagates() -> None:
    client = FakeWebhookClient(unreachable={HOOK.webhook_url})

    with pytest.raises(DeliveryError) as exc_info:
        send_feishu_notification(client, HOOK, _result())

    assert exc_info.value.status_code is None
    # Exactly one attempt, no retries
    assert len(client.posts) == 1
