"""File digest computation.

This module provides the FileHasher class, which streams a file through a
fresh hash object from a caller-supplied factory and returns the lowercase
hex digest. Each call builds its own hash state, so a single FileHasher can
be shared by many worker threads.

Example:
    >>> import hashlib
    >>> from dirreader.scanning import FileHasher
    >>> hasher = FileHasher(hashlib.sha256)
    >>> digest = hasher.hash_file(Path("/path/to/file.txt"))
"""

import functools
import hashlib
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from dirreader import config
from dirreader.exceptions import OpenError, ReadError

# A zero-argument callable returning an object with update() and hexdigest()
HashFactory = Callable[[], Any]


class FileHasher:
    """Computes content digests of files.

    Attributes:
        hash_factory: Callable producing a new, independent hash object.
        chunk_size: Number of bytes read per chunk.

    Example:
        >>> hasher = FileHasher(hashlib.md5)
        >>> try:
        ...     print(hasher.hash_file(Path("file.bin")))
        ... except OpenError as e:
        ...     print(f"Cannot open: {e.path}")
    """

    def __init__(self, hash_factory: HashFactory, chunk_size: int = config.CHUNK_SIZE) -> None:
        """Initialize the FileHasher.

        Args:
            hash_factory: Callable producing a new hash object per call.
            chunk_size: Read buffer size in bytes.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.hash_factory = hash_factory
        self.chunk_size = chunk_size

    def hash_file(self, file_path: Union[str, Path]) -> str:
        """Compute the digest of a file.

        Args:
            file_path: Path to the file to hash.

        Returns:
            The lowercase hex digest of the full file content.

        Raises:
            OpenError: If the file cannot be opened.
            ReadError: If reading the file fails part way through.
        """
        try:
            f = open(file_path, "rb")
        except OSError as e:
            raise OpenError(file_path, e) from e

        with f:
            h = self.hash_factory()
            try:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    h.update(chunk)
            except OSError as e:
                raise ReadError(file_path, e) from e

        return h.hexdigest()


def available_algorithms() -> List[str]:
    """Return the hashlib algorithm names accepted by resolve_hash_factory."""
    names = set()
    for name in hashlib.algorithms_available:
        name = name.lower()
        try:
            if hashlib.new(name).digest_size > 0:
                names.add(name)
        except ValueError:
            # Advertised by OpenSSL but not usable in this build
            continue
    return sorted(names)


def resolve_hash_factory(name: Optional[str]) -> Optional[HashFactory]:
    """Map an algorithm name to a hash factory.

    Args:
        name: hashlib algorithm name (e.g. "sha256"), or None / "none" to
            disable hashing.

    Returns:
        A zero-argument factory, or None if hashing is disabled.

    Raises:
        ValueError: If the algorithm is unknown or has no fixed digest size
            (e.g. shake_128, whose hexdigest needs a length).
    """
    if name is None or name.strip().lower() == config.NO_HASH:
        return None

    algorithm = name.strip().lower()
    try:
        probe = hashlib.new(algorithm)
    except ValueError:
        raise ValueError(f"Unsupported hash algorithm: {name}")

    if probe.digest_size == 0:
        raise ValueError(f"Hash algorithm has no fixed digest size: {name}")

    return functools.partial(hashlib.new, algorithm)
