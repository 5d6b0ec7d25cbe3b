#!/usr/bin/env python3
"""
Flask web frontend for the post search engine.

Routes:
    /                   search form
    /style.css          stylesheet
    /search?query=...   all posts matching every word
    /post/<id>          one post, selftext rendered from Markdown
    /candidates/<n>     candidate bucket n (0, 1, 2) for manual review
    /health             JSON status

The corpus is loaded once before the server starts; the Searcher and
Partitioner are handed to create_app() and shared read-only by every request.
"""

import argparse
import os
import sys

import markdown
from flask import Flask, abort, current_app, jsonify, render_template, request, send_from_directory
from markupsafe import Markup

from pheddit.candidates import InvalidBucketError, Partitioner
from pheddit.config import DEFAULT_HOST, DEFAULT_PORT, NUM_BUCKETS, NUM_WORKERS
from pheddit.loader import CorpusError, load_corpus
from pheddit.searcher import Searcher
from pheddit.store import get_str

STATIC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")


def render_markdown(text: str) -> Markup:
    return Markup(markdown.markdown(text))


def _links(posts):
    """(id, title) pairs for the result list templates."""
    return [(get_str(p, "id"), get_str(p, "title")) for p in posts]


def create_app(searcher: Searcher, partitioner: Partitioner = None) -> Flask:
    app = Flask(__name__)
    app.config["SEARCHER"] = searcher
    app.config["PARTITIONER"] = partitioner or Partitioner(searcher.scanner)

    @app.route("/")
    def index():
        """Serve the search form."""
        return render_template("index.html")

    @app.route("/style.css")
    def style():
        return send_from_directory(STATIC_DIR, "style.css", mimetype="text/css")

    @app.route("/search")
    def search():
        query = request.args.get("query", "")
        count, posts = current_app.config["SEARCHER"].search_counted(query)
        return render_template("search.html", query=query, count=count, links=_links(posts))

    @app.route("/post/<path:post_id>")
    def post(post_id):
        found = current_app.config["SEARCHER"].lookup(post_id)
        if found is None:
            abort(404)
        return render_template(
            "post.html",
            title=get_str(found, "title"),
            body=render_markdown(get_str(found, "selftext")),
        )

    @app.route("/candidates/<int:n>")
    def candidates(n):
        try:
            bucket = current_app.config["PARTITIONER"].candidates(n)
        except InvalidBucketError as e:
            return render_template("error.html", message=str(e)), 400
        return render_template(
            "candidates.html",
            n=n, nbuckets=NUM_BUCKETS,
            start=bucket.start, end=bucket.end, total=bucket.total,
            links=_links(bucket.posts),
        )

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "posts": len(current_app.config["SEARCHER"].store),
        })

    return app


def main(argv=None):
    ap = argparse.ArgumentParser(description="Pheddit search engine web server.")
    ap.add_argument("dirs", nargs="+", help="Directories holding *.json post dumps")
    ap.add_argument("--host", default=DEFAULT_HOST, help="Bind address")
    ap.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port")
    ap.add_argument("--workers", type=int, default=NUM_WORKERS, help="Scan processes; 1 = no pool")
    ap.add_argument("--debug", action="store_true", help="Flask debug mode")
    ap.add_argument("--quiet", action="store_true", help="Less logging.")
    args = ap.parse_args(argv)

    try:
        store = load_corpus(args.dirs, workers=args.workers, verbose=not args.quiet)
    except CorpusError as e:
        print(f"[loader] ERROR {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Loaded {len(store)} posts...", file=sys.stderr)

    with Searcher(store, workers=args.workers, verbose=not args.quiet) as searcher:
        # workers must exist before the threaded server starts
        searcher.scanner.start()
        app = create_app(searcher)
        app.run(host=args.host, port=args.port, debug=args.debug, use_reloader=False, threaded=True)


if __name__ == "__main__":
    main()
