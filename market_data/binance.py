"""
binance.py – spot klines over the public REST API
=================================================

GET /api/v3/klines?symbol=ETHUSDT&interval=15m&limit=305

Each kline is `[openTime, open, high, low, close, volume, closeTime, ...]`,
oldest first; the last one is the candle still forming. The timeframe string
is passed through untouched.
"""

from __future__ import annotations

from typing import Any, List, Optional

import requests

from shared.constants import BINANCE_BASE_URL
from shared.logging   import get_logger

from .base import Candle, CandleSource, CandleSourceError

log = get_logger("market_data.binance")


class BinanceKlineSource(CandleSource):

    def __init__(self, base_url: str = BINANCE_BASE_URL, timeout: float = 10.0,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_candles(self, symbol: str, timeframe: str, limit: int) -> List[Candle]:
        url = f"{self.base_url}/api/v3/klines"
        params = {"symbol": symbol, "interval": timeframe, "limit": limit}
        try:
            res = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise CandleSourceError(f"klines request failed for {symbol}: {exc}") from exc

        if not res.ok:
            raise CandleSourceError(f"klines fail: {res.status_code}", status=res.status_code)

        try:
            rows = res.json()
        except ValueError as exc:
            raise CandleSourceError(f"klines for {symbol}: invalid JSON", res.status_code) from exc

        candles = parse_klines(rows)
        log.debug("%s %s – %d klines", symbol, timeframe, len(candles))
        return candles


def parse_klines(rows: List[List[Any]]) -> List[Candle]:
    """Binance kline arrays → Candle objects (prices arrive as strings)."""
    try:
        return [
            Candle(
                open_time=int(k[0]),
                high=float(k[2]),
                close=float(k[4]),
                close_time=int(k[6]),
            )
            for k in rows
        ]
    except (TypeError, ValueError, IndexError) as exc:
        raise CandleSourceError(f"malformed kline payload: {exc}") from exc
