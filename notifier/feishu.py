"""
feishu.py – custom-bot webhook notifier
---------------------------------------
Posts a plain text message:

    {"msg_type": "text", "content": {"text": "<message>"}}

Only HTTP-level success is checked; the bot's own response body is not
inspected.
"""

from __future__ import annotations

from typing import Optional

import requests

from shared.logging import get_logger

log = get_logger("notifier.feishu")


class NotifyError(Exception):
    """Webhook unreachable or answered with a non-success status."""


class FeishuNotifier:

    def __init__(self, webhook_url: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None) -> None:
        if not webhook_url:
            raise ValueError("webhook_url is required")
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, text: str) -> None:
        payload = {"msg_type": "text", "content": {"text": text}}
        try:
            res = self.session.post(self.webhook_url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NotifyError(f"webhook unreachable: {exc}") from exc
        if not res.ok:
            raise NotifyError(f"webhook answered {res.status_code}")
        log.info("sent: %s", text)
