"""
rules.py – red/green cross detection on the last closed candles
================================================================
Pure-function utilities only; no Redis, no HTTP.

The feed's newest candle is still forming, so we look at
  last = row -2   (r0, g0)
  prev = row -3   (r1, g1)

UP   : r1 <= g1 and r0 > g0
DOWN : r1 >= g1 and r0 < g0
Both need r1 and g1 finite. The strict r0/g0 comparison makes the two
mutually exclusive.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from shared.constants import CLOSED_OFFSET

UP   = "UP"
DOWN = "DOWN"


@dataclass(frozen=True)
class Signal:
    direction: str          # UP / DOWN
    price: float            # close of the last closed candle
    close_time: int         # epoch ms of the last closed candle
    r0: float
    g0: float
    r1: float
    g1: float


def detect_cross(r1: float, g1: float, r0: float, g0: float) -> Optional[str]:
    """Return UP, DOWN or None for one (prev, last) pair of bars."""
    if not (math.isfinite(r1) and math.isfinite(g1)):
        return None
    if r1 <= g1 and r0 > g0:
        return UP
    if r1 >= g1 and r0 < g0:
        return DOWN
    return None


def evaluate_closed(features: pd.DataFrame) -> Optional[Signal]:
    """Check the two most recent closed rows of a `compute_features` frame."""
    if len(features) < 1 - CLOSED_OFFSET:           # need rows -3, -2, -1
        return None

    last = features.iloc[CLOSED_OFFSET]
    prev = features.iloc[CLOSED_OFFSET - 1]
    r0, g0 = float(last["red"]), float(last["green"])
    r1, g1 = float(prev["red"]), float(prev["green"])

    direction = detect_cross(r1, g1, r0, g0)
    if direction is None:
        return None
    return Signal(
        direction=direction,
        price=float(last["close"]),
        close_time=int(last["close_time"]),
        r0=r0, g0=g0, r1=r1, g1=g1,
    )


def format_alert(strategy: str, sig: Signal, symbol: str, timeframe: str) -> str:
    return f"[{strategy.upper()}] {sig.direction} {symbol} @ {sig.price:.4f} TF={timeframe}"
