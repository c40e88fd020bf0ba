"""Tests for the Binance kline source; HTTP is mocked at the session."""

from unittest.mock import MagicMock

import pytest
import requests

from market_data.base import Candle, CandleSourceError, candles_to_frame
from market_data.binance import BinanceKlineSource, parse_klines

KLINES = [
    [1700000000000, "2000.10", "2010.50", "1995.00", "2005.25", "12.3",
     1700000899999, "24600.0", 42, "6.1", "12300.0", "0"],
    [1700000900000, "2005.25", "2020.00", "2001.00", "2018.75", "8.9",
     1700001799999, "17900.0", 37, "4.2", "8400.0", "0"],
]


def _response(status=200, payload=None):
    res = MagicMock()
    res.status_code = status
    res.ok = 200 <= status < 300
    res.json.return_value = payload
    return res


class TestBinanceKlineSource:

    def test_fetch_parses_klines(self):
        session = MagicMock()
        session.get.return_value = _response(payload=KLINES)
        source = BinanceKlineSource(session=session, timeout=4)

        candles = source.fetch_candles("ETHUSDT", "15m", 305)

        assert candles == [
            Candle(1700000000000, 2010.5, 2005.25, 1700000899999),
            Candle(1700000900000, 2020.0, 2018.75, 1700001799999),
        ]
        session.get.assert_called_once_with(
            "https://api.binance.com/api/v3/klines",
            params={"symbol": "ETHUSDT", "interval": "15m", "limit": 305},
            timeout=4,
        )

    def test_custom_base_url(self):
        session = MagicMock()
        session.get.return_value = _response(payload=[])
        source = BinanceKlineSource("https://testnet.binance.vision/", session=session)

        assert source.fetch_candles("BTCUSDT", "1h", 10) == []
        assert session.get.call_args[0][0] == "https://testnet.binance.vision/api/v3/klines"

    def test_non_success_status_raises(self):
        session = MagicMock()
        session.get.return_value = _response(status=400, payload={"code": -1121})
        source = BinanceKlineSource(session=session)

        with pytest.raises(CandleSourceError) as exc_info:
            source.fetch_candles("NOPE", "15m", 305)

        assert exc_info.value.status == 400
        assert "klines fail: 400" in str(exc_info.value)

    def test_transport_error_raises(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("dns failure")
        source = BinanceKlineSource(session=session)

        with pytest.raises(CandleSourceError) as exc_info:
            source.fetch_candles("ETHUSDT", "15m", 305)
        assert exc_info.value.status is None

    def test_invalid_json_raises(self):
        session = MagicMock()
        res = _response()
        res.json.side_effect = ValueError("no json")
        session.get.return_value = res

        with pytest.raises(CandleSourceError):
            BinanceKlineSource(session=session).fetch_candles("ETHUSDT", "15m", 305)


def test_parse_klines_rejects_malformed_rows():
    with pytest.raises(CandleSourceError):
        parse_klines([[1700000000000, "1", "not-a-price"]])


def test_candles_to_frame():
    frame = candles_to_frame(parse_klines(KLINES))

    assert list(frame.columns) == ["open_time", "high", "close", "close_time"]
    assert frame["close"].tolist() == [2005.25, 2018.75]
    assert frame["close_time"].dtype == "int64"
