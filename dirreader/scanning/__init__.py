"""Directory scanning package for dirreader.

This package provides the traversal engine and its building blocks:

- DirReader / read_directory: Walk a tree concurrently and collect one
  FileRecord per admitted file, failing as a whole if anything fails.
- FileHasher: Stream a file through a hash factory and return its hex digest.
- matches: Suffix-based filename filter.

Example:
    >>> import hashlib
    >>> from dirreader.scanning import read_directory
    >>>
    >>> records = read_directory(Path("/data"), hashlib.sha256, [".jpg"], include=True)
    >>> total = sum(r.metadata.size for r in records)
"""

from .dir_reader import DirReader, WaitGroup, read_directory
from .entry_filter import has_suffix, matches, normalize_include
from .file_hasher import (
    FileHasher,
    HashFactory,
    available_algorithms,
    resolve_hash_factory,
)

__all__ = [
    "DirReader",
    "WaitGroup",
    "read_directory",
    "has_suffix",
    "matches",
    "normalize_include",
    "FileHasher",
    "HashFactory",
    "available_algorithms",
    "resolve_hash_factory",
]
