"""
Configuration constants for dirreader.

Every value here is a default; the CLI exposes per-run overrides.
"""
import os

# --- Hashing ---
# Buffer size for chunked file reading (64KB)
CHUNK_SIZE = 64 * 1024

# Value accepted by --hash to disable digest computation
NO_HASH = "none"

# --- Concurrency ---
# Same ceiling ThreadPoolExecutor picks on its own; bounds open file handles
DEFAULT_MAX_WORKERS = min(32, (os.cpu_count() or 1) + 4)

# --- Output ---
LOG_FILE_PREFIX = "scan_log_"
MAX_DISPLAY_ERRORS = 10
