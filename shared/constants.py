"""
constants.py – single source of hard-coded names and window sizes
"""

LOOKBACK        = 300         # candles the strategy wants
LOOKBACK_MARGIN = 5           # extra candles requested on top
MIN_BARS        = 210         # SMA window + margin before we evaluate

HHV_WINDOW = 50
SMA_WINDOW = 200

# index of the last *closed* candle; the source's tail is still forming
CLOSED_OFFSET = -2

STRATEGY_ID       = "rvc010"
DEFAULT_SYMBOLS   = "ETHUSDT"
DEFAULT_TIMEFRAME = "15m"

# Redis keys / templates
KEY_LAST_SENT = "{}:{}:{}:lastTs"     # strategy, symbol, timeframe

# upstream endpoints
BINANCE_BASE_URL = "https://api.binance.com"
SINA_QUOTE_URL   = "https://hq.sinajs.cn/list="
