"""Tests for the webhook notifier."""

from unittest.mock import MagicMock

import pytest
import requests

from notifier.feishu import FeishuNotifier, NotifyError

URL = "https://open.feishu.cn/open-apis/bot/v2/hook/abc"


def test_send_posts_text_payload():
    session = MagicMock()
    session.post.return_value = MagicMock(ok=True, status_code=200)

    FeishuNotifier(URL, timeout=5, session=session).send("[RVC010] UP ETHUSDT @ 1.0000 TF=15m")

    session.post.assert_called_once_with(
        URL,
        json={"msg_type": "text", "content": {"text": "[RVC010] UP ETHUSDT @ 1.0000 TF=15m"}},
        timeout=5,
    )


def test_http_error_raises():
    session = MagicMock()
    session.post.return_value = MagicMock(ok=False, status_code=502)

    with pytest.raises(NotifyError, match="502"):
        FeishuNotifier(URL, session=session).send("hi")


def test_unreachable_webhook_raises():
    session = MagicMock()
    session.post.side_effect = requests.Timeout("read timed out")

    with pytest.raises(NotifyError):
        FeishuNotifier(URL, session=session).send("hi")


def test_webhook_required():
    with pytest.raises(ValueError):
        FeishuNotifier("")
