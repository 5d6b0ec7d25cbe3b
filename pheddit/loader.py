# pheddit/loader.py
"""
Load the post corpus from directories of newline-delimited JSON dumps.

Layout:
    <dir>/*.json     one JSON object per line (non-recursive)

Parsing is spread over a process pool, one file per task. Any failure
(unreadable directory, unopenable file, a line that isn't valid JSON) is
fatal: CorpusError is raised and no store is built, so a partial corpus is
never served.

Duplicate ids: the post from the file that comes later in sorted path order
wins (within a file, the later line wins).

How to use:
    store = load_corpus(["data/2019", "data/2020"], workers=4)
"""

from __future__ import annotations

import json
import os
import sys
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, List

from pheddit.config import CORPUS_SUFFIX, NUM_WORKERS
from pheddit.store import PostStore


class CorpusError(RuntimeError):
    """The corpus could not be loaded."""


def list_corpus_files(dirs: Iterable[str], suffix: str = CORPUS_SUFFIX) -> List[str]:
    """All regular files ending in `suffix` directly under each dir, sorted per dir."""
    paths: List[str] = []
    for d in dirs:
        try:
            names = sorted(os.listdir(d))
        except OSError as e:
            raise CorpusError(f"cannot read corpus directory {d}: {e}") from e
        for name in names:
            path = os.path.join(d, name)
            if name.endswith(suffix) and os.path.isfile(path):
                paths.append(path)
    return paths


def parse_file(path: str) -> List[dict]:
    """
    Parse one dump file. Returns the decoded objects in file order.
    Raises CorpusError with file:line on the first bad line.
    """
    posts = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, 1):
                try:
                    posts.append(json.loads(line))
                except json.JSONDecodeError as e:
                    raise CorpusError(f"{path}:{lineno}: invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusError(f"cannot read {path}: {e}") from e
    return posts


def load_corpus(dirs: Iterable[str], workers: int = NUM_WORKERS, verbose: bool = True) -> PostStore:
    paths = list_corpus_files(dirs)
    if verbose:
        print(f"[loader] {len(paths)} files | workers={workers}", file=sys.stderr)

    batches: List[List[dict]] = []
    if workers <= 1 or len(paths) <= 1:
        for p in paths:
            batches.append(parse_file(p))
    else:
        with ProcessPoolExecutor(max_workers=workers) as ex:
            # map() keeps path order, so duplicate resolution is reproducible
            for posts in ex.map(parse_file, paths):
                batches.append(posts)

    store = PostStore.from_posts(post for batch in batches for post in batch)
    if verbose:
        print(f"[loader] Loaded {len(store):,} posts from {len(paths)} files", file=sys.stderr)
    return store
