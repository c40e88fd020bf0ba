"""Shared test fixtures and in-memory collaborators."""

import time
from typing import Dict, List, Optional, Sequence, Union

import pytest

from market_data.base import Candle
from signal_scanner.config import ScanConfig

BASE_OPEN_MS = 1_700_000_000_000
STEP_MS = 15 * 60 * 1000


def make_candles(
    closes: Sequence[float],
    highs: Optional[Sequence[float]] = None,
    start: int = BASE_OPEN_MS,
    step: int = STEP_MS,
) -> List[Candle]:
    """Build consecutive candles; highs default to the closes."""
    highs = closes if highs is None else highs
    return [
        Candle(
            open_time=start + i * step,
            high=float(h),
            close=float(c),
            close_time=start + (i + 1) * step - 1,
        )
        for i, (h, c) in enumerate(zip(highs, closes))
    ]


def flat_then(last_close: float, n: int = 250, base: float = 100.0) -> List[Candle]:
    """`n` candles at `base`, with the last closed and the forming one at `last_close`.

    With the 50/200 windows:
      last_close < base  → red jumps above green  → UP
      last_close > base  → green jumps above red  → DOWN
      last_close == base → no cross
    """
    closes = [base] * (n - 2) + [last_close, last_close]
    return make_candles(closes)


class FakeStore:
    """Dict-backed dedup store that records every call."""

    def __init__(self, data: Optional[Dict[str, int]] = None):
        self.data: Dict[str, int] = dict(data or {})
        self.reads: List[str] = []
        self.writes: List[tuple] = []

    def get(self, key: str) -> Optional[int]:
        self.reads.append(key)
        return self.data.get(key)

    def set(self, key: str, value: int) -> None:
        self.writes.append((key, value))
        self.data[key] = value


class SlowStore(FakeStore):
    """FakeStore whose reads stall, widening the read → set window."""

    def __init__(self, delay: float = 0.2, data: Optional[Dict[str, int]] = None):
        super().__init__(data)
        self.delay = delay

    def get(self, key: str) -> Optional[int]:
        value = super().get(key)
        time.sleep(self.delay)
        return value


class FakeNotifier:
    """Collects messages instead of posting them."""

    def __init__(self, error: Optional[Exception] = None):
        self.sent: List[str] = []
        self.error = error

    def send(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(text)


class FakeSource:
    """Serves canned candles (or raises canned errors) per symbol."""

    def __init__(self, by_symbol: Dict[str, Union[List[Candle], Exception]]):
        self.by_symbol = by_symbol
        self.calls: List[tuple] = []

    def fetch_candles(self, symbol: str, timeframe: str, limit: int) -> List[Candle]:
        self.calls.append((symbol, timeframe, limit))
        result = self.by_symbol[symbol]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def scan_config():
    """Config with the production windows and a single symbol."""
    return ScanConfig(webhook_url="https://hooks.example/bot", symbols=["ETHUSDT"])


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def notifier():
    return FakeNotifier()
