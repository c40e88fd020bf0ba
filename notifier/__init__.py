"""
notifier
========

Outbound alert delivery. `FeishuNotifier.send(text)` is the only operation
the scanner relies on; it raises `NotifyError` when delivery fails.
"""

from .feishu import FeishuNotifier, NotifyError

__all__ = ["FeishuNotifier", "NotifyError"]
