"""Scan configuration, built once per invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from shared.config import env, env_list
from shared.constants import (
    BINANCE_BASE_URL, DEFAULT_SYMBOLS, DEFAULT_TIMEFRAME,
    HHV_WINDOW, LOOKBACK, LOOKBACK_MARGIN, MIN_BARS, SMA_WINDOW, STRATEGY_ID,
)


@dataclass
class ScanConfig:
    """Everything one scan pass needs; no process-wide state."""

    webhook_url: str
    symbols: List[str] = field(default_factory=lambda: [DEFAULT_SYMBOLS])
    timeframe: str = DEFAULT_TIMEFRAME
    lookback: int = LOOKBACK
    lookback_margin: int = LOOKBACK_MARGIN
    min_bars: int = MIN_BARS
    hhv_window: int = HHV_WINDOW
    sma_window: int = SMA_WINDOW
    strategy_id: str = STRATEGY_ID
    redis_url: str = "redis://redis:6379/0"
    request_timeout: float = 10.0
    binance_base_url: str = BINANCE_BASE_URL

    @property
    def fetch_limit(self) -> int:
        return self.lookback + self.lookback_margin

    @classmethod
    def from_env(cls) -> "ScanConfig":
        """Read FEISHU_WEBHOOK, SYMBOLS, TIMEFRAME, … from the environment."""
        return cls(
            webhook_url=env("FEISHU_WEBHOOK", ""),
            symbols=env_list("SYMBOLS", DEFAULT_SYMBOLS),
            timeframe=env("TIMEFRAME", DEFAULT_TIMEFRAME),
            lookback=env("LOOKBACK", LOOKBACK, int),
            min_bars=env("MIN_BARS", MIN_BARS, int),
            hhv_window=env("HHV_WINDOW", HHV_WINDOW, int),
            sma_window=env("SMA_WINDOW", SMA_WINDOW, int),
            strategy_id=env("STRATEGY_ID", STRATEGY_ID),
            redis_url=env("REDIS_URL", "redis://redis:6379/0"),
            request_timeout=env("REQUEST_TIMEOUT", 10.0, float),
            binance_base_url=env("BINANCE_BASE_URL", BINANCE_BASE_URL),
        )

    def validate(self) -> None:
        """Validate configuration."""
        if not self.webhook_url:
            raise ValueError("FEISHU_WEBHOOK is required")
        if not self.symbols:
            raise ValueError("SYMBOLS must list at least one symbol")
        if self.hhv_window < 1 or self.sma_window < 1:
            raise ValueError("HHV_WINDOW and SMA_WINDOW must be positive")
        if self.min_bars < self.sma_window:
            raise ValueError(
                f"MIN_BARS ({self.min_bars}) must be >= SMA_WINDOW ({self.sma_window})"
            )
        if self.fetch_limit < self.min_bars:
            raise ValueError(
                f"LOOKBACK + margin ({self.fetch_limit}) must be >= MIN_BARS ({self.min_bars})"
            )
        if self.request_timeout <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")

    def summary(self) -> dict:
        """Effective settings without the webhook secret."""
        return {
            "symbols": self.symbols,
            "timeframe": self.timeframe,
            "fetch_limit": self.fetch_limit,
            "min_bars": self.min_bars,
            "hhv_window": self.hhv_window,
            "sma_window": self.sma_window,
            "strategy_id": self.strategy_id,
        }
