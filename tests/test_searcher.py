# tests/test_searcher.py
import itertools
import re

import pytest

from pheddit.searcher import Searcher, main
from pheddit.store import PostStore, get_str


def ids(posts):
    return sorted(get_str(p, "id") for p in posts)


@pytest.fixture
def searcher(toy_store):
    with Searcher(toy_store, workers=1) as s:
        yield s


def test_example_corpus(example_store):
    with Searcher(example_store, workers=1) as s:
        assert ids(s.search("programming")) == ["1"]
        assert ids(s.search("cat")) == ["2"], "title 'Cat photos' has the whole word"
        assert ids(s.search("cats")) == ["2"]


def test_plural_is_not_the_singular():
    store = PostStore.from_posts([
        {"id": "k1", "title": "Kittens", "selftext": "cute cats"},
        {"id": "k2", "title": "My cat", "selftext": ""},
    ])
    with Searcher(store, workers=1) as s:
        assert ids(s.search("cat")) == ["k2"], "'cats' is not the whole word 'cat'"
        assert ids(s.search("cats")) == ["k1"]


def test_basic_queries(searcher):
    assert ids(searcher.search("programming")) == ["a08"]
    assert ids(searcher.search("PROGRAMMING")) == ["a08"]
    assert ids(searcher.search("self taught")) == ["a03", "a04"]
    assert ids(searcher.search("degree college")) == ["a01"]
    assert ids(searcher.search("degree pizza")) == []
    assert ids(searcher.search("3.14")) == ["a14"]


def test_unicode_query(searcher):
    assert ids(searcher.search("café")) == ["a09"]
    assert ids(searcher.search("CAFÉ prêt")) == ["a09"]
    assert ids(searcher.search("caf")) == []


def test_empty_query_matches_everything(searcher, toy_store):
    assert len(searcher.search("")) == len(toy_store)
    assert len(searcher.search(" \t ")) == len(toy_store)


def test_non_string_fields_never_match(searcher):
    # a13 has title=None, selftext=42
    assert "a13" not in ids(searcher.search("42"))
    assert "a13" not in ids(searcher.search("None"))


def test_results_are_stored_objects(searcher, toy_store):
    for post in searcher.search("advice"):
        assert post is toy_store.get(post["id"])


def test_search_counted(searcher):
    count, posts = searcher.search_counted("learning")
    assert count == len(posts) == 1
    assert count == 1 and posts[0]["id"] == "a11"


def test_lookup(searcher, toy_store):
    assert searcher.lookup("a05") is toy_store.get("a05")
    assert searcher.lookup("missing") is None


def test_every_result_contains_every_word(searcher, toy_posts):
    """Cross-check against a plain tokenizer for alphabetic queries."""
    def words(post):
        text = get_str(post, "title") + " " + get_str(post, "selftext")
        return {w.lower() for w in re.findall(r"\w+", text)}

    vocab = sorted({w for p in toy_posts for w in words(p) if w.isalpha()})
    for q in itertools.islice(itertools.combinations(vocab, 2), 300):
        expected = sorted(get_str(p, "id") for p in toy_posts if set(q) <= words(p))
        assert ids(searcher.search(" ".join(q))) == expected, f"mismatch for {q}"


def test_cli_query(corpus_dir, capsys):
    main([str(corpus_dir), "--query", "self taught", "--workers", "1", "--quiet"])
    out, err = capsys.readouterr()
    lines = sorted(out.splitlines())
    assert lines == ["a03\tSelf taught dev here", "a04\tTaught myself Rust"]
    assert "2 results" in err


def test_cli_candidates_bad_bucket(corpus_dir):
    with pytest.raises(SystemExit) as exc:
        main([str(corpus_dir), "--candidates", "3", "--workers", "1", "--quiet"])
    assert exc.value.code == 2


def test_cli_bad_corpus_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "does-not-exist"), "--query", "x", "--workers", "1", "--quiet"])
    assert exc.value.code == 1


def test_verbose_reaches_scanner(toy_store):
    with Searcher(toy_store, workers=1, verbose=True) as s:
        assert s.scanner.verbose is True
    with Searcher(toy_store, workers=1) as s:
        assert s.scanner.verbose is False
