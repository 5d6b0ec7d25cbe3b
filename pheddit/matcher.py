# pheddit/matcher.py
"""
Whole-word, case-insensitive term matching.

A query word becomes  \\b<escaped word>\\b  compiled with re.IGNORECASE.
Python str patterns are Unicode-aware, so \\b follows Unicode word
characters (e.g. "café" is a whole word in "un café noir").

A word that fails to compile is dropped. A query with no usable words
therefore has an empty matcher list, and all() over it is True: it matches
every post.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern, Sequence


@lru_cache(maxsize=4096)
def compile_term(word: str) -> Optional[Pattern]:
    """Compile one word into a whole-word matcher, or None if it can't be compiled."""
    try:
        return re.compile(r"\b" + re.escape(word) + r"\b", re.IGNORECASE)
    except re.error:
        return None


def compile_words(words: Iterable[str]) -> List[Pattern]:
    """Compile words, silently skipping any that fail."""
    out = []
    for w in words:
        pat = compile_term(w)
        if pat is not None:
            out.append(pat)
    return out


def compile_query(query: str) -> List[Pattern]:
    return compile_words(query.split())


def compile_groups(groups: Iterable[Sequence[str]]) -> List[List[Pattern]]:
    return [compile_words(g) for g in groups]


def matches(pattern: Pattern, text: str) -> bool:
    """True iff the pattern occurs anywhere in text."""
    return pattern.search(text) is not None


def post_matches(patterns: Sequence[Pattern], title: str, text: str) -> bool:
    """AND over patterns, OR over the two fields."""
    return all(matches(p, title) or matches(p, text) for p in patterns)


def post_matches_any(groups: Sequence[Sequence[Pattern]], title: str, text: str) -> bool:
    """OR over groups, each group an AND of patterns."""
    return any(post_matches(g, title, text) for g in groups)
