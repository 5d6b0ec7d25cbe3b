# pheddit/searcher.py
import argparse
import sys
from typing import List, Optional, Tuple

from pheddit.config import NUM_WORKERS
from pheddit.scanner import Scanner
from pheddit.store import PostStore, get_str


class Searcher:
    """
    Full-scan boolean searcher over an in-memory PostStore.

    - No index: every query scans all posts (in parallel when workers > 1).
    - A query is whitespace-split into words; a post matches when EVERY word
      occurs as a whole word (case-insensitive) in its title or selftext.
    - Result order is whatever order the scan produced; callers must not
      rely on it.
    """

    def __init__(self, store: PostStore, workers: int = NUM_WORKERS,
                 scanner: Optional[Scanner] = None, verbose: bool = False):
        self.store = store
        if scanner is None:
            scanner = Scanner(store, workers=workers, verbose=verbose)
        self.scanner = scanner

    def search(self, query: str) -> List[dict]:
        """
        Execute an AND query. An empty query (or one whose words all fail to
        compile) matches every post.
        """
        return self.scanner.scan([query.split()], kind="search")

    def search_counted(self, query: str) -> Tuple[int, List[dict]]:
        posts = self.search(query)
        return len(posts), posts

    def lookup(self, post_id: str) -> Optional[dict]:
        return self.store.get(post_id)

    def close(self):
        self.scanner.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def _print_posts(posts):
    for post in posts:
        print(f"{get_str(post, 'id')}\t{get_str(post, 'title')}")


def main(argv=None):
    # Run from project root:  python -m pheddit.searcher data/ --query "self taught"
    from pheddit.candidates import InvalidBucketError, Partitioner
    from pheddit.loader import CorpusError, load_corpus

    ap = argparse.ArgumentParser(description="Query a post corpus from the command line.")
    ap.add_argument("dirs", nargs="+", help="Directories holding *.json post dumps")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--query", help="Whitespace-separated words, all must match")
    group.add_argument("--candidates", type=int, metavar="N", help="Print candidate bucket N (0, 1 or 2)")
    ap.add_argument("--workers", type=int, default=NUM_WORKERS, help="Scan processes; 1 = no pool")
    ap.add_argument("--quiet", action="store_true", help="Less logging.")
    args = ap.parse_args(argv)

    try:
        store = load_corpus(args.dirs, workers=args.workers, verbose=not args.quiet)
    except CorpusError as e:
        print(f"[loader] ERROR {e}", file=sys.stderr)
        sys.exit(1)

    with Searcher(store, workers=args.workers, verbose=not args.quiet) as searcher:
        if args.query is not None:
            count, posts = searcher.search_counted(args.query)
            _print_posts(posts)
            print(f"{count} results for '{args.query}'", file=sys.stderr)
        else:
            try:
                bucket = Partitioner(searcher.scanner).candidates(args.candidates)
            except InvalidBucketError as e:
                print(f"ERROR {e}", file=sys.stderr)
                sys.exit(2)
            _print_posts(bucket.posts)
            print(f"Candidates {bucket.start}-{bucket.end} of {bucket.total}", file=sys.stderr)


if __name__ == "__main__":
    main()
