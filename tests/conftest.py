"""Pytest fixtures for dirreader tests."""

import builtins
import errno
import io
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, ContextManager, Dict, Generator, Iterator, Optional
from unittest.mock import patch

import pytest
from rich.console import Console


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """Create the small tree used by the filtering scenarios.

    Creates:
        root/
        ├── a.txt
        ├── b.md
        └── sub/
            └── c.txt

    Returns:
        Path to the root directory.
    """
    root = temp_dir / "root"
    root.mkdir()
    (root / "a.txt").write_bytes(b"alpha")
    (root / "b.md").write_bytes(b"# bravo")
    sub = root / "sub"
    sub.mkdir()
    (sub / "c.txt").write_bytes(b"charlie")
    return root


@pytest.fixture
def nested_tree(temp_dir: Path) -> Path:
    """Create a deeper tree with mixed suffixes.

    Creates:
        tree/
        ├── readme.md (10 bytes)
        ├── notxt (5 bytes)
        ├── docs/
        │   ├── guide.txt (100 bytes)
        │   └── archive.txt/            (directory named like a file)
        │       └── old.log (20 bytes)
        ├── src/
        │   ├── main.py (200 bytes)
        │   └── pkg/
        │       └── deep/
        │           └── util.py (300 bytes)
        └── empty/

    Returns:
        Path to the tree root.
    """
    root = temp_dir / "tree"
    root.mkdir()
    (root / "readme.md").write_bytes(b"r" * 10)
    (root / "notxt").write_bytes(b"n" * 5)

    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.txt").write_bytes(b"g" * 100)
    archive = docs / "archive.txt"
    archive.mkdir()
    (archive / "old.log").write_bytes(b"o" * 20)

    deep = root / "src" / "pkg" / "deep"
    deep.mkdir(parents=True)
    (root / "src" / "main.py").write_bytes(b"m" * 200)
    (deep / "util.py").write_bytes(b"u" * 300)

    (root / "empty").mkdir()
    return root


@pytest.fixture
def undecodable_tree(temp_dir: Path) -> Path:
    """Create a tree holding a file whose name is not valid UTF-8.

    Creates:
        odd/
        ├── good.txt
        └── bad<0xff>.txt

    Skips on filesystems that only accept UTF-8 names.
    """
    root = temp_dir / "odd"
    root.mkdir()
    (root / "good.txt").write_bytes(b"good")
    try:
        with open(os.path.join(os.fsencode(root), b"bad\xff.txt"), "wb") as f:
            f.write(b"x")
    except (OSError, UnicodeError):
        pytest.skip("filesystem does not accept non-UTF-8 file names")
    return root


@pytest.fixture
def console_output() -> Console:
    """Return a Rich Console writing to an in-memory buffer.

    Read captured output with console_output.file.getvalue().
    """
    return Console(file=io.StringIO(), width=200, force_terminal=False, color_system=None)


class BrokenFile:
    """File wrapper that returns one chunk and then fails with EIO."""

    def __init__(self, wrapped) -> None:
        self._wrapped = wrapped
        self._reads = 0

    def read(self, size: int = -1) -> bytes:
        self._reads += 1
        if self._reads > 1:
            raise OSError(errno.EIO, "Input/output error")
        return self._wrapped.read(size)

    def close(self) -> None:
        self._wrapped.close()

    def __enter__(self) -> "BrokenFile":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class BrokenDirIterator:
    """Stand-in for an os.scandir iterator whose enumeration fails."""

    def __enter__(self) -> "BrokenDirIterator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    def __iter__(self) -> Iterator[os.DirEntry]:
        raise OSError(errno.EIO, "Input/output error")

    def close(self) -> None:
        pass


@pytest.fixture
def fail_open() -> Callable[..., ContextManager[Any]]:
    """Make builtins.open fail for specific paths.

    Usage:
        with fail_open(root / "b.md"):
            ...                                  # open() raises EACCES
        with fail_open(root / "a.txt", mid_stream=True):
            ...                                  # reading fails after one chunk
    """
    real_open = builtins.open

    @contextmanager
    def _fail_open(*paths: Path, mid_stream: bool = False) -> Iterator[Dict[str, int]]:
        targets = {os.fspath(p) for p in paths}
        calls: Dict[str, int] = {}

        def fake_open(file, *args, **kwargs):
            key = os.fspath(file) if isinstance(file, (str, bytes, os.PathLike)) else file
            if key in targets:
                calls[key] = calls.get(key, 0) + 1
                if mid_stream:
                    return BrokenFile(real_open(file, *args, **kwargs))
                raise PermissionError(errno.EACCES, "Permission denied", key)
            return real_open(file, *args, **kwargs)

        with patch("builtins.open", new=fake_open):
            yield calls

    return _fail_open


@pytest.fixture
def fail_scandir() -> Callable[..., ContextManager[Any]]:
    """Make os.scandir fail for specific directories.

    Usage:
        with fail_scandir(root / "sub"):
            ...                                  # opening sub raises EACCES
        with fail_scandir(root / "sub", on_read=True):
            ...                                  # listing sub raises EIO
    """
    real_scandir = os.scandir

    @contextmanager
    def _fail_scandir(*paths: Path, on_read: bool = False) -> Iterator[None]:
        targets = {os.fspath(p) for p in paths}

        def fake_scandir(path: Optional[str] = None):
            if path is not None and os.fspath(path) in targets:
                if on_read:
                    return BrokenDirIterator()
                raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
            return real_scandir(path) if path is not None else real_scandir()

        with patch("os.scandir", new=fake_scandir):
            yield

    return _fail_scandir
