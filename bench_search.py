"""
bench_search.py

Quick-and-dirty benchmark for the full-scan Searcher.
Measures latency of AND queries and of the candidate scan over a loaded corpus.

By default, queries are sampled from words in post titles and formed as 2-term queries.
You can also pass a file with one query per line.

Run examples:
  python bench_search.py data/
  python bench_search.py data/ --queries queries.txt --workers 8
  PHEDDIT_PROF=1 python bench_search.py data/ --num-queries 50
"""

import argparse
import random
import statistics
import sys
import time

from pheddit import profkit
from pheddit.candidates import Partitioner
from pheddit.config import NUM_WORKERS
from pheddit.loader import CorpusError, load_corpus
from pheddit.searcher import Searcher
from pheddit.store import get_str


def load_queries(path):
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def sample_queries(store, n=100, terms_per_q=2, seed=1234):
    vocab = sorted({w for _, post in store.items() for w in get_str(post, "title").split() if w.isalpha()})
    if len(vocab) < terms_per_q:
        return []
    rng = random.Random(seed)
    return [" ".join(rng.sample(vocab, terms_per_q)) for _ in range(n)]


def summarize(times):
    return {
        "n": len(times),
        "avg_ms": statistics.mean(times),
        "p50_ms": statistics.median(times),
        "p95_ms": statistics.quantiles(times, n=20)[18] if len(times) >= 20 else max(times),
        "max_ms": max(times),
    }


def bench(fn, items):
    times = []
    for item in items:
        t0 = time.perf_counter()
        fn(item)
        times.append((time.perf_counter() - t0) * 1000)  # ms
    return summarize(times)


def fmt(label, stats):
    return (f"{label}  n={stats['n']}  avg={stats['avg_ms']:.2f}ms  p50={stats['p50_ms']:.2f}ms  "
            f"p95={stats['p95_ms']:.2f}ms  max={stats['max_ms']:.2f}ms")


def main(args):
    try:
        store = load_corpus(args.dirs, workers=args.workers, verbose=True)
    except CorpusError as e:
        print(f"[loader] ERROR {e}", file=sys.stderr)
        sys.exit(1)

    if args.queries:
        queries = load_queries(args.queries)
    else:
        queries = sample_queries(store, n=args.num_queries, terms_per_q=args.terms_per_query)
    if not queries:
        print("[bench] no queries to run", file=sys.stderr)
        sys.exit(2)

    with Searcher(store, workers=args.workers) as s:
        # pool start-up stays out of the numbers
        s.scanner.start()
        print(fmt("[bench] search    ", bench(s.search, queries)))

        part = Partitioner(s.scanner)
        print(fmt("[bench] candidates", bench(part.candidates, [0, 1, 2] * args.candidate_rounds)))

    if profkit.ENABLED:
        print(profkit.report())


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("dirs", nargs="+", help="Directories holding *.json post dumps")
    ap.add_argument("--queries", type=str, default=None, help="file with one query per line")
    ap.add_argument("--num-queries", type=int, default=200, help="number of sampled queries if --queries not provided")
    ap.add_argument("--terms-per-query", type=int, default=2, help="how many terms per sampled query")
    ap.add_argument("--candidate-rounds", type=int, default=3, help="passes over buckets 0..2")
    ap.add_argument("--workers", type=int, default=NUM_WORKERS, help="scan processes; 1 = no pool")
    args = ap.parse_args()
    main(args)
