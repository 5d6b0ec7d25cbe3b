# tests/conftest.py
import json

import pytest

from pheddit.store import PostStore

# the two-post example corpus
EXAMPLE_POSTS = [
    {"id": "1", "title": "Switching careers into programming", "selftext": ""},
    {"id": "2", "title": "Cat photos", "selftext": "cute cats"},
]

TOY_POSTS = [
    {"id": "a01", "title": "Is a CS degree worth it?", "selftext": "Thinking about **college** again."},
    {"id": "a02", "title": "Best pizza in town", "selftext": "Pepperoni or margherita?"},
    {"id": "a03", "title": "Self taught dev here", "selftext": "Landed a job after two years."},
    {"id": "a04", "title": "Taught myself Rust", "selftext": "It was fun, no self-doubt."},
    {"id": "a05", "title": "Bootcamp review", "selftext": "Would not recommend this camp."},
    {"id": "a06", "title": "Weekend hiking", "selftext": "Photos from the trail."},
    {"id": "a07", "title": "Need advice", "selftext": "Should I switch teams?"},
    {"id": "a08", "title": "Python vs Go", "selftext": "For backend programming, which one?"},
    {"id": "a09", "title": "Un café noir", "selftext": "Le CAFÉ est prêt."},
    {"id": "a10", "title": "Changelog for v2", "selftext": "Changes: lots of them."},
    {"id": "a11", "title": "Learning to cook", "selftext": "Started with eggs."},
    {"id": "a12", "selftext": "No title on this one, but a university story."},
    {"id": "a13", "title": None, "selftext": 42},
    {"id": "a14", "title": "pi is 3.14", "selftext": "roughly"},
]


def write_jsonl(path, posts):
    with open(path, "w", encoding="utf-8") as f:
        for p in posts:
            f.write(json.dumps(p) + "\n")
    return path


@pytest.fixture
def example_store():
    return PostStore.from_posts(EXAMPLE_POSTS)


@pytest.fixture
def toy_store():
    return PostStore.from_posts(TOY_POSTS)


@pytest.fixture
def corpus_dir(tmp_path):
    """Two dump files plus a non-json file that must be ignored."""
    d = tmp_path / "dump"
    d.mkdir()
    write_jsonl(d / "part1.json", TOY_POSTS[:7])
    write_jsonl(d / "part2.json", TOY_POSTS[7:])
    (d / "notes.txt").write_text("not a dump\n", encoding="utf-8")
    return d


@pytest.fixture
def toy_posts():
    return TOY_POSTS


@pytest.fixture
def jsonl_writer():
    return write_jsonl
