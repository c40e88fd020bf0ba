"""
signal_scanner
==============

RVC010 crossover alerts: a rolling-high "red" series and a moving-average
"green" series are compared on the last two closed candles of every
configured symbol; a cross sends one webhook message per candle.

Data-flow
---------
candles → HHV / SMA → red, green → cross on rows -3/-2 → dedup → notify

Modules
-------
config.py      – ScanConfig (env → dataclass, validated per invocation)
indicators.py  – hhv(), sma(), compute_features()
rules.py       – detect_cross(), evaluate_closed(), format_alert()
scanner.py     – scan_symbol(), run_scan(), run_from_env(), CLI entry-point
"""

from .config import ScanConfig
from .indicators import compute_features, hhv, sma
from .rules import DOWN, UP, Signal, detect_cross, evaluate_closed, format_alert
from .scanner import ScanReport, SymbolResult, run_from_env, run_scan, scan_symbol

__all__ = [
    "DOWN",
    "UP",
    "ScanConfig",
    "ScanReport",
    "Signal",
    "SymbolResult",
    "compute_features",
    "detect_cross",
    "evaluate_closed",
    "format_alert",
    "hhv",
    "run_from_env",
    "run_scan",
    "scan_symbol",
    "sma",
]
