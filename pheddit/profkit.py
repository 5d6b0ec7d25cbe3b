# pheddit/profkit.py: per-scan timing stats, keyed by scan kind ("search", "candidates", ...)
# `with scan_stats("search", n_rows) as st: ...; st["matched"] = len(ids)`
# Toggle via env var: set PHEDDIT_PROF=1 to enable; otherwise every call is a no-op.

import os
import time
from collections import defaultdict
from contextlib import contextmanager

ENABLED = os.getenv("PHEDDIT_PROF", "0") == "1"

# kind -> {"calls", "rows", "matched", "ms", "max_ms"}
STATS = defaultdict(lambda: {"calls": 0, "rows": 0, "matched": 0, "ms": 0.0, "max_ms": 0.0})


@contextmanager
def scan_stats(kind: str, n_rows: int):
    """
    Time one full scan of n_rows posts. The caller sets st["matched"]
    before leaving the block. Disabled -> yields a throwaway dict.
    """
    st = {"matched": 0}
    if not ENABLED:
        yield st
        return
    t0 = time.perf_counter()
    try:
        yield st
    finally:
        ms = (time.perf_counter() - t0) * 1000.0
        agg = STATS[kind]
        agg["calls"] += 1
        agg["rows"] += n_rows
        agg["matched"] += st["matched"]
        agg["ms"] += ms
        agg["max_ms"] = max(agg["max_ms"], ms)


def reset():
    STATS.clear()


def summary(kind: str) -> dict:
    """Averages for one kind: avg_ms, max_ms, rows_per_s, hit_rate."""
    agg = STATS.get(kind)
    if not agg or not agg["calls"]:
        return {}
    secs = agg["ms"] / 1000.0
    return {
        "calls": agg["calls"],
        "avg_ms": agg["ms"] / agg["calls"],
        "max_ms": agg["max_ms"],
        "rows_per_s": agg["rows"] / secs if secs > 0 else float("inf"),
        "hit_rate": agg["matched"] / agg["rows"] if agg["rows"] else 0.0,
    }


def report() -> str:
    if not STATS:
        return "(no scan stats; set PHEDDIT_PROF=1)"
    lines = []
    for kind in sorted(STATS):
        s = summary(kind)
        lines.append(f"[prof] {kind:<10} calls={s['calls']}  avg={s['avg_ms']:.2f}ms  "
                     f"max={s['max_ms']:.2f}ms  rows/s={s['rows_per_s']:,.0f}  hit={s['hit_rate']:.1%}")
    return "\n".join(lines)
