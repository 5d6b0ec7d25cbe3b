# pheddit/scanner.py
"""
Parallel full scan of the post store.

Why processes, not threads?
- Regex matching over every post is CPU-bound.
- The Python GIL prevents true parallelism with threads for CPU-bound work.
- Processes sidestep the GIL and scale across cores.

Design:
- Parent flattens the store once into rows: (id, title, selftext).
- Rows are shipped to each worker exactly once, through the pool initializer.
- Per scan, the parent submits (groups, start, end) for contiguous row ranges:
    groups: list of word lists, OR over groups, AND within a group
  Each worker compiles the words (cached per process), filters its slice
  and returns only the matching ids.
- Parent maps ids back to its own post dicts. Result order follows
  completion order and is not stable between scans.

With workers <= 1 the same chunk function runs inline, no pool.
"""

from __future__ import annotations

import sys
import threading
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Sequence, Tuple

from pheddit.config import NUM_WORKERS, CHUNKS_PER_WORKER
from pheddit.matcher import compile_groups, post_matches_any
from pheddit.profkit import scan_stats
from pheddit.store import PostStore, get_str

Row = Tuple[str, str, str]

# worker-side copy of the rows, set by _init_worker
_ROWS: List[Row] = []


def _init_worker(rows: List[Row]) -> None:
    global _ROWS
    _ROWS = rows


def _scan_rows(rows: Sequence[Row], groups, start: int, end: int) -> List[str]:
    pats = compile_groups(groups)
    return [pid for pid, title, text in rows[start:end] if post_matches_any(pats, title, text)]


def _worker_scan(groups, start: int, end: int) -> List[str]:
    return _scan_rows(_ROWS, groups, start, end)


def _chunk_bounds(n: int, nchunks: int) -> List[Tuple[int, int]]:
    """Split range(n) into nchunks contiguous, size-balanced (start, end) pairs."""
    nchunks = max(1, min(n, nchunks))
    return [(i * n // nchunks, (i + 1) * n // nchunks) for i in range(nchunks)]


class Scanner:
    """
    Owns the process pool used for per-request scans.

    The pool is created by start(), or lazily on the first parallel scan,
    and shared by all callers (ProcessPoolExecutor.submit is thread-safe). Call close() or use
    as a context manager to shut it down.
    """

    def __init__(self, store: PostStore, workers: int = NUM_WORKERS,
                 chunks_per_worker: int = CHUNKS_PER_WORKER, verbose: bool = False):
        self.store = store
        self.workers = max(1, int(workers or 1))
        self.chunks_per_worker = max(1, int(chunks_per_worker))
        self.verbose = verbose
        self._rows: List[Row] = [
            (pid, get_str(post, "title"), get_str(post, "selftext"))
            for pid, post in store.items()
        ]
        self._pool: ProcessPoolExecutor | None = None
        self._pool_lock = threading.Lock()

    def _executor(self) -> ProcessPoolExecutor:
        with self._pool_lock:
            if self._pool is None:
                if self.verbose:
                    print(f"[scan] starting pool | workers={self.workers} | rows={len(self._rows):,}",
                          file=sys.stderr)
                self._pool = ProcessPoolExecutor(
                    max_workers=self.workers,
                    initializer=_init_worker,
                    initargs=(self._rows,),
                )
            return self._pool

    def start(self) -> None:
        """
        Bring the worker processes up now instead of on the first request.
        Call before starting a threaded server so workers are never forked
        from a request thread.
        """
        if self.workers <= 1 or not self._rows:
            return
        pool = self._executor()
        # one task per worker so each process gets spawned and initialised
        for fut in [pool.submit(_worker_scan, [], 0, 0) for _ in range(self.workers)]:
            fut.result()

    def scan_ids(self, groups: Sequence[Sequence[str]], kind: str = "scan") -> List[str]:
        """
        Return ids of every post for which at least one group has all of
        its words matching the title or the selftext.
        """
        groups = [list(g) for g in groups]
        n = len(self._rows)
        if n == 0:
            return []

        with scan_stats(kind, n) as st:
            if self.workers <= 1:
                ids = _scan_rows(self._rows, groups, 0, n)
            else:
                pool = self._executor()
                bounds = _chunk_bounds(n, self.workers * self.chunks_per_worker)
                futures = [pool.submit(_worker_scan, groups, s, e) for s, e in bounds]
                ids = []
                for fut in as_completed(futures):
                    ids.extend(fut.result())
            st["matched"] = len(ids)
        return ids

    def scan(self, groups: Sequence[Sequence[str]], kind: str = "scan") -> List[dict]:
        """Like scan_ids(), but returns the stored post dicts."""
        posts = self.store.map
        return [posts[pid] for pid in self.scan_ids(groups, kind)]

    def close(self):
        with self._pool_lock:
            if self._pool is not None:
                self._pool.shutdown(wait=True)
                self._pool = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
