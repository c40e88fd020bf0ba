"""Candle model and the candle-source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pandas as pd


class CandleSourceError(Exception):
    """Raised when the upstream feed answers with a non-success status."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class Candle:
    open_time: int      # epoch ms
    high: float
    close: float
    close_time: int     # epoch ms


class CandleSource(ABC):
    """Anything that can hand back the most recent candles, oldest first."""

    @abstractmethod
    def fetch_candles(self, symbol: str, timeframe: str, limit: int) -> List[Candle]:
        """Return up to `limit` candles for `symbol` at `timeframe`.

        Raises:
            CandleSourceError: If the upstream request does not succeed
        """


def candles_to_frame(candles: Sequence[Candle]) -> pd.DataFrame:
    """Candles → DataFrame (open_time, high, close, close_time), oldest→newest."""
    return pd.DataFrame(
        {
            "open_time":  [c.open_time for c in candles],
            "high":       [c.high for c in candles],
            "close":      [c.close for c in candles],
            "close_time": [c.close_time for c in candles],
        },
        columns=["open_time", "high", "close", "close_time"],
    ).astype({"open_time": "int64", "high": float, "close": float, "close_time": "int64"})
