# pheddit/config.py

import os

# --- Corpus input ---
CORPUS_SUFFIX = ".json"        # newline-delimited JSON, one post per line

# --- Candidate review ---
NUM_BUCKETS = 3

# --- Web server (overridable with --host / --port) ---
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5001

# --- Scan pool ---
NUM_WORKERS = max(1, (os.cpu_count() or 2) // 2)
CHUNKS_PER_WORKER = 4          # more chunks -> better balance, more IPC
