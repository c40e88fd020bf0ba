#!/usr/bin/env python3
"""
scanner.py – one RVC010 scan pass over the configured symbols
=============================================================

Per symbol, sequentially:

1. fetch `lookback + margin` candles (newest one still forming)
2. skip quietly when fewer than `min_bars` came back
3. red = HHV(high, 50) - close, green = close - SMA(close, 200)
4. cross check on the last two *closed* candles (rows -3 → -2)
5. dedup against `<strategy>:<symbol>:<tf>:lastTs`; send, **then** persist

Step 5 holds a per-key lock (in-process, and a Redis lock when the store has
one) so overlapping passes cannot both alert on the same candle.

A failing symbol is logged and reported; the remaining symbols still run.
Redis errors and invalid configuration abort the whole pass.

Redis keys
----------
rvc010:<SYM>:<TF>:lastTs    STR   close time (ms) of the last alerted candle
"""

from __future__ import annotations
import json, sys, threading, time
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import redis

from market_data        import BinanceKlineSource, CandleSource, candles_to_frame
from notifier           import FeishuNotifier
from shared.logging     import get_logger
from shared.redis_client import DedupStore, LazyRedis, dedup_key

from .config     import ScanConfig
from .indicators import compute_features
from .rules      import evaluate_closed, format_alert

log = get_logger("signal_scanner")

# per-symbol outcomes
NOTIFIED     = "notified"
SUPPRESSED   = "suppressed"
NO_SIGNAL    = "no_signal"
INSUFFICIENT = "insufficient_history"
ERROR        = "error"


@dataclass
class SymbolResult:
    symbol: str
    status: str
    bars: int = 0
    direction: Optional[str] = None
    close_time: Optional[int] = None
    error: Optional[str] = None


@dataclass
class ScanReport:
    timeframe: str
    results: List[SymbolResult] = field(default_factory=list)
    execution_time_ms: int = 0

    @property
    def status(self) -> str:
        return "completed_with_errors" if self.errors else "success"

    @property
    def errors(self) -> List[str]:
        return [f"{r.symbol}: {r.error}" for r in self.results if r.status == ERROR]

    @property
    def notified(self) -> List[str]:
        return [r.symbol for r in self.results if r.status == NOTIFIED]

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "timeframe": self.timeframe,
            "symbols_processed": len(self.results),
            "notified": self.notified,
            "errors": self.errors,
            "execution_time_ms": self.execution_time_ms,
            "results": [asdict(r) for r in self.results],
        }


# ─── KEY LOCKS ────────────────────────────────────────────────────────
_locks_guard = threading.Lock()
_key_locks: Dict[str, threading.Lock] = {}


@contextmanager
def key_lock(store: Any, key: str) -> Iterator[None]:
    """Serialise one dedup key: in-process lock, plus the store's own lock if any."""
    with _locks_guard:
        local = _key_locks.setdefault(key, threading.Lock())
    with local:
        shared_lock = getattr(store, "lock", None)
        if shared_lock is None:
            yield
        else:
            with shared_lock(key):
                yield


# ─── PER-SYMBOL ───────────────────────────────────────────────────────
def scan_symbol(cfg: ScanConfig, symbol: str, source: CandleSource,
                store: DedupStore, notifier: Any) -> SymbolResult:
    """Evaluate one symbol; raises on fetch / notify failure."""
    candles = source.fetch_candles(symbol, cfg.timeframe, cfg.fetch_limit)
    if len(candles) < cfg.min_bars:
        log.info("%s – only %d bars (< %d), skipped", symbol, len(candles), cfg.min_bars)
        return SymbolResult(symbol, INSUFFICIENT, bars=len(candles))

    feats = compute_features(candles_to_frame(candles), cfg.hhv_window, cfg.sma_window)
    sig = evaluate_closed(feats)

    key = dedup_key(cfg.strategy_id, symbol, cfg.timeframe)
    # read → send → set must not interleave with another scan of the same key
    with key_lock(store, key):
        # read once per evaluated symbol, signal or not
        last_sent = store.get(key)

        if sig is None:
            return SymbolResult(symbol, NO_SIGNAL, bars=len(candles))

        if last_sent == sig.close_time:
            log.info("%s %s @ %d already sent", symbol, sig.direction, sig.close_time)
            return SymbolResult(symbol, SUPPRESSED, len(candles), sig.direction, sig.close_time)

        notifier.send(format_alert(cfg.strategy_id, sig, symbol, cfg.timeframe))
        # a crash between send and set re-sends next pass, never drops an alert
        store.set(key, sig.close_time)
    log.info("%s %s r0=%.4f g0=%.4f r1=%.4f g1=%.4f",
             symbol, sig.direction, sig.r0, sig.g0, sig.r1, sig.g1)
    return SymbolResult(symbol, NOTIFIED, len(candles), sig.direction, sig.close_time)


# ─── PASS ─────────────────────────────────────────────────────────────
def run_scan(cfg: ScanConfig, source: CandleSource,
             store: DedupStore, notifier: Any) -> ScanReport:
    t0 = time.monotonic()
    report = ScanReport(timeframe=cfg.timeframe)

    for sym in cfg.symbols:
        try:
            report.results.append(scan_symbol(cfg, sym, source, store, notifier))
        except redis.exceptions.LockError as exc:
            log.error("%s – dedup key busy (%s)", sym, exc)
            report.results.append(SymbolResult(sym, ERROR, error=f"dedup lock: {exc}"))
        except redis.RedisError:
            raise
        except Exception as exc:                            # noqa: BLE001
            log.error("%s – %s", sym, exc)
            report.results.append(SymbolResult(sym, ERROR, error=str(exc)))

    report.execution_time_ms = int((time.monotonic() - t0) * 1000)
    log.info("scan done – %d symbols, %d alert(s), %d error(s) in %d ms",
             len(report.results), len(report.notified),
             len(report.errors), report.execution_time_ms)
    return report


def run_from_env() -> ScanReport:
    """Build config + collaborators for this invocation and run one pass."""
    cfg = ScanConfig.from_env()
    cfg.validate()
    source   = BinanceKlineSource(cfg.binance_base_url, timeout=cfg.request_timeout)
    store    = DedupStore(LazyRedis(cfg.redis_url))
    notifier = FeishuNotifier(cfg.webhook_url, timeout=cfg.request_timeout)
    return run_scan(cfg, source, store, notifier)


# ─── CLI ──────────────────────────────────────────────────────────────
def main() -> int:
    try:
        report = run_from_env()
    except Exception as exc:                                # noqa: BLE001
        log.error("scan failed – %s", exc, exc_info=True)
        return 1
    print(json.dumps(report.to_dict(), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
