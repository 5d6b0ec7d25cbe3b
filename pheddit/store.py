"""
pheddit/store.py

PostStore maps each post id to the post's JSON object.

Each post is the dict parsed from one line of the corpus, e.g.
    {
        "id": "abc123",
        "title": "Switching careers into programming",
        "selftext": "markdown body ...",
        ...                  # any other fields are carried along untouched
    }

The store is built once by the corpus loader and is read-only afterwards,
so it can be shared by any number of concurrent scans without locking.
"""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple


def get_str(post, key: str) -> str:
    """
    Return post[key] if it is a string, else "".
    Absent keys, non-string values and non-dict posts all read as empty,
    so a malformed post just fails to match instead of breaking a request.
    """
    if not isinstance(post, Mapping):
        return ""
    value = post.get(key)
    return value if isinstance(value, str) else ""


class PostStore:
    """
    Read-only mapping from post id -> post.

    Typical usage:
        store = PostStore.from_posts(posts)
        post = store.get("abc123")
        for post_id, post in store.items():
            ...
    """

    __slots__ = ("_map",)

    def __init__(self, posts: Mapping[str, dict]):
        self._map = MappingProxyType(dict(posts))

    @classmethod
    def from_posts(cls, posts: Iterable[dict]) -> "PostStore":
        """Key posts by their id. On duplicate ids the last one wins."""
        return cls({get_str(p, "id"): p for p in posts})

    @property
    def map(self) -> Mapping[str, dict]:
        return self._map

    def get(self, post_id: str) -> Optional[dict]:
        return self._map.get(post_id)

    def items(self) -> Iterator[Tuple[str, dict]]:
        return iter(self._map.items())

    def __len__(self):
        return len(self._map)

    def __contains__(self, post_id):
        return post_id in self._map

    def __iter__(self):
        return iter(self._map)

    def __repr__(self):
        return f"PostStore(n={len(self._map)})"
