# pheddit/candidates.py
"""
Candidate posts for manual review, split into three fixed buckets.

A post is a candidate when ANY topic group matches it, where a group
matches when ALL of its words occur (whole word, case-insensitive) in the
title or the selftext.

Candidates are sorted by id before slicing, so bucket i is the same
set of posts, in the same order, on every call and every run, no matter
how the parallel scan interleaved. Reviewers can each take one bucket
without coordinating.

    start = i * total // 3
    end   = (i + 1) * total // 3
    bucket i = sorted_candidates[start:end]
"""

from typing import List, NamedTuple

from pheddit.config import NUM_BUCKETS
from pheddit.scanner import Scanner
from pheddit.store import get_str

# =========================
# Topic vocabulary
# =========================
TOPIC_QUERIES = (
    "degree",
    "career", "careers",
    "programming",
    "school",
    "learn", "learning",
    "switch", "switching",
    "change", "changing",
    "college", "university",
    "advice",
    "bootcamp", "bootcamps", "camp", "camps",
    "self taught",
)

TOPIC_GROUPS = tuple(tuple(q.split()) for q in TOPIC_QUERIES)
# =========================


class InvalidBucketError(ValueError):
    """Bucket index outside 0..NUM_BUCKETS-1."""


class CandidateBucket(NamedTuple):
    start: int
    end: int
    total: int
    posts: List[dict]


def check_index(index: int, nbuckets: int = NUM_BUCKETS) -> None:
    if not 0 <= index < nbuckets:
        raise InvalidBucketError(f"bucket index must be in 0..{nbuckets - 1}, got {index}")


def bucket_bounds(index: int, total: int, nbuckets: int = NUM_BUCKETS):
    """Half-open [start, end) of bucket `index` over `total` sorted items."""
    check_index(index, nbuckets)
    start = index * total // nbuckets
    end = (index + 1) * total // nbuckets
    if not 0 <= start <= end <= total:
        raise InvalidBucketError(f"bucket {index} out of range: [{start}, {end}) of {total}")
    return start, end


class Partitioner:
    def __init__(self, scanner: Scanner, groups=TOPIC_GROUPS):
        self.scanner = scanner
        self.groups = tuple(tuple(g) for g in groups)

    def all_candidates(self) -> List[dict]:
        """Every candidate post, sorted by id."""
        posts = self.scanner.scan(self.groups, kind="candidates")
        posts.sort(key=lambda p: get_str(p, "id"))
        return posts

    def candidates(self, index: int) -> CandidateBucket:
        check_index(index)  # before the scan
        posts = self.all_candidates()
        total = len(posts)
        start, end = bucket_bounds(index, total)
        return CandidateBucket(start, end, total, posts[start:end])
