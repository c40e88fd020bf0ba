"""
indicators.py – rolling HHV / SMA and the two derived series
=============================================================
Pure-function utilities only; no Redis, no HTTP.

Outputs are float arrays aligned with the input; every index before the
window fills is NaN (never 0).

    red   = HHV(high, 50) - close      distance below the rolling high
    green = close - SMA(close, 200)    distance from the moving average
"""

from __future__ import annotations
from collections import deque
from typing import Deque, Sequence

import numpy as np
import pandas as pd

from shared.constants import HHV_WINDOW, SMA_WINDOW


def _check_window(n: int) -> None:
    if n < 1:
        raise ValueError(f"window must be >= 1, got {n}")


def hhv(values: Sequence[float], n: int) -> np.ndarray:
    """Rolling maximum over the trailing `n` values (monotonic deque)."""
    _check_window(n)
    vals = np.asarray(values, dtype=float)
    out = np.full(len(vals), np.nan)
    dq: Deque[int] = deque()            # indices, values decreasing front→back

    for i in range(len(vals)):
        # "<=" so the most recent of equal highs stays resident
        while dq and vals[dq[-1]] <= vals[i]:
            dq.pop()
        dq.append(i)
        left = i - n + 1
        while dq[0] < left:
            dq.popleft()
        if left >= 0:
            out[i] = vals[dq[0]]
    return out


def sma(values: Sequence[float], n: int) -> np.ndarray:
    """Rolling arithmetic mean over the trailing `n` values (running sum)."""
    _check_window(n)
    vals = np.asarray(values, dtype=float)
    out = np.full(len(vals), np.nan)
    total = 0.0

    for i in range(len(vals)):
        total += vals[i]
        if i >= n:
            total -= vals[i - n]
        if i >= n - 1:
            out[i] = total / n
    return out


def compute_features(df: pd.DataFrame,
                     hhv_window: int = HHV_WINDOW,
                     sma_window: int = SMA_WINDOW) -> pd.DataFrame:
    """Add hhv / sma / red / green columns to a candle frame (high, close, …)."""
    out = df.copy()
    out["hhv"]   = hhv(out["high"].to_numpy(), hhv_window)
    out["sma"]   = sma(out["close"].to_numpy(), sma_window)
    out["red"]   = out["hhv"] - out["close"]
    out["green"] = out["close"] - out["sma"]
    return out
