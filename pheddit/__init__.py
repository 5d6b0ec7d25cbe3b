"""
Pheddit: in-memory full-text search over a corpus of discussion posts.
"""

from pheddit.store import PostStore, get_str
from pheddit.searcher import Searcher
from pheddit.candidates import Partitioner, CandidateBucket, InvalidBucketError
from pheddit.loader import load_corpus, CorpusError

__all__ = [
    "PostStore", "get_str",
    "Searcher",
    "Partitioner", "CandidateBucket", "InvalidBucketError",
    "load_corpus", "CorpusError",
]
