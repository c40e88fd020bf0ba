"""
market_data
===========

Pulls the recent candle window the scanner evaluates.

Modules
-------
base.py     – Candle model, CandleSource interface, CandleSourceError
binance.py  – Binance spot /api/v3/klines implementation
"""

from .base import Candle, CandleSource, CandleSourceError, candles_to_frame
from .binance import BinanceKlineSource, parse_klines

__all__ = [
    "BinanceKlineSource",
    "Candle",
    "CandleSource",
    "CandleSourceError",
    "candles_to_frame",
    "parse_klines",
]
