"""Concurrent directory reader.

This module provides the DirReader class, which walks a directory tree on a
worker pool and gathers one FileRecord per admitted file. Every directory
and every admitted file is its own unit of work. Units report results and
errors through two queues, each drained by a dedicated collector thread, and
a shared wait group tracks when all units have finished.

The result is all-or-nothing: if any directory or file fails anywhere in the
tree, read() raises a single ScanError holding every failure and no records
are returned.

Example:
    >>> import hashlib
    >>> from dirreader.scanning import read_directory
    >>> records = read_directory("/data", hashlib.sha256, mask=[".txt"], include=True)
    >>> for record in records:
    ...     print(record.rel_file, record.digest)
"""

import os
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union

from dirreader import config
from dirreader.exceptions import OpenError, ReadError, ScanError
from dirreader.models import FileMetadata, FileRecord

from .entry_filter import matches, normalize_include
from .file_hasher import FileHasher, HashFactory

# Pushed onto a queue once no producer can send to it anymore
_CLOSED = object()


class WaitGroup:
    """Counter that releases waiters when it drops back to zero."""

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    def add(self, delta: int = 1) -> None:
        with self._cond:
            self._count += delta
            if self._count < 0:
                raise ValueError("WaitGroup counter went negative")
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self) -> None:
        with self._cond:
            self._cond.wait_for(lambda: self._count == 0)


def _drain(source: "queue.Queue[Any]", sink: Callable[[Any], None]) -> None:
    """Move items from source into sink until the queue is closed."""
    while True:
        item = source.get()
        if item is _CLOSED:
            return
        sink(item)


class DirReader:
    """Reads a directory tree concurrently.

    A DirReader holds the state of a single scan and cannot be reused; build a
    new one (or call read_directory) for each scan.

    Attributes:
        root: Absolute path of the directory to scan.
        mask: Literal filename suffixes used for filtering.
        include: Effective include flag (forced to False for an empty mask).
        max_workers: Size of the worker pool.

    Example:
        >>> reader = DirReader(Path("/data"), mask=[".log"], include=False)
        >>> try:
        ...     records = reader.read()
        ... except ScanError as e:
        ...     print(f"{len(e.errors)} failures")
    """

    def __init__(
        self,
        root: Union[str, Path],
        hash_factory: Optional[HashFactory] = None,
        mask: Sequence[str] = (),
        include: bool = False,
        max_workers: Optional[int] = None,
    ) -> None:
        """Initialize the DirReader.

        Args:
            root: Directory to scan. Made absolute; not otherwise validated.
            hash_factory: Optional callable returning a new hash object. When
                None, no digests are computed.
            mask: Literal filename suffixes. Empty disables filtering.
            include: True keeps files matching the mask, False keeps files
                matching none of it. Ignored when mask is empty.
            max_workers: Worker pool size. Defaults to
                config.DEFAULT_MAX_WORKERS.

        Raises:
            ValueError: If max_workers is less than 1.
        """
        if max_workers is None:
            max_workers = config.DEFAULT_MAX_WORKERS
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self.root = os.path.abspath(os.fspath(root))
        self.mask: List[str] = list(mask)
        self.include = normalize_include(self.mask, include)
        self.max_workers = max_workers
        self._hasher = FileHasher(hash_factory) if hash_factory is not None else None

        self._pending = WaitGroup()
        self._records: "queue.Queue[Any]" = queue.Queue()
        self._errors: "queue.Queue[Any]" = queue.Queue()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._started = False

    def read(self) -> List[FileRecord]:
        """Scan the whole tree and return its records.

        Blocks until every directory and file unit has finished.

        Returns:
            One FileRecord per admitted file, in no particular order.

        Raises:
            ScanError: If any directory or file failed. No records are
                returned in that case.
            RuntimeError: If this reader has already been used.
        """
        if self._started:
            raise RuntimeError("DirReader instances are single-use")
        self._started = True

        records: List[FileRecord] = []
        errors: List[BaseException] = []

        collectors = [
            threading.Thread(
                target=_drain,
                args=(self._records, records.append),
                name="dirreader-records",
                daemon=True,
            ),
            threading.Thread(
                target=_drain,
                args=(self._errors, errors.append),
                name="dirreader-errors",
                daemon=True,
            ),
        ]
        for collector in collectors:
            collector.start()

        executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="dirreader"
        )
        self._executor = executor
        try:
            self._spawn(self._read_directory, self.root, "")
            self._pending.wait()
        except KeyboardInterrupt:
            # Drop queued units instead of draining the whole tree
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        finally:
            self._executor = None
        executor.shutdown(wait=True)

        self._records.put(_CLOSED)
        self._errors.put(_CLOSED)
        for collector in collectors:
            collector.join()

        if errors:
            raise ScanError(errors)
        return records

    def _spawn(self, func: Callable[..., None], *args: Any) -> None:
        """Register a unit of work with the wait group and submit it."""
        if self._executor is None:
            raise RuntimeError("DirReader is not running")
        self._pending.add()
        self._executor.submit(self._run, func, *args)

    def _run(self, func: Callable[..., None], *args: Any) -> None:
        try:
            func(*args)
        except Exception as e:
            # Anything a unit did not report itself still fails the scan
            self._errors.put(e)
        finally:
            self._pending.done()

    def _read_directory(self, dir_abs: str, dir_rel: str) -> None:
        """List one directory, spawning walks for subdirectories and
        processing units for admitted files."""
        try:
            it = os.scandir(dir_abs)
        except OSError as e:
            self._errors.put(OpenError(dir_abs, e))
            return

        with it:
            try:
                entries = list(it)
            except OSError as e:
                self._errors.put(ReadError(dir_abs, e, action="read dir"))
                return

        for entry in entries:
            path_abs = os.path.join(dir_abs, entry.name)

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                self._errors.put(ReadError(path_abs, e, action="stat"))
                continue

            if is_dir:
                self._spawn(self._read_directory, path_abs, os.path.join(dir_rel, entry.name))
                continue

            if not matches(entry.name, self.mask, self.include):
                continue

            try:
                stat_result = entry.stat(follow_symlinks=False)
            except FileNotFoundError:
                # Removed between listing and stat
                continue
            except OSError as e:
                self._errors.put(ReadError(path_abs, e, action="stat"))
                continue

            metadata = FileMetadata.from_stat(entry.name, stat_result)
            self._spawn(self._process_file, path_abs, dir_rel, metadata)

    def _process_file(self, path_abs: str, path_rel: str, metadata: FileMetadata) -> None:
        """Build the record for one file, hashing it if configured.

        A digest failure is reported but the record is still emitted with an
        empty digest.
        """
        digest = ""
        if self._hasher is not None:
            try:
                digest = self._hasher.hash_file(path_abs)
            except (OpenError, ReadError) as e:
                self._errors.put(e)

        self._records.put(
            FileRecord(
                metadata=metadata,
                path_abs=Path(path_abs),
                path_rel=path_rel,
                digest=digest,
            )
        )


def read_directory(
    root: Union[str, Path],
    hash_factory: Optional[HashFactory] = None,
    mask: Sequence[str] = (),
    include: bool = False,
    max_workers: Optional[int] = None,
) -> List[FileRecord]:
    """Scan root and return one FileRecord per admitted file.

    Args:
        root: Directory to scan.
        hash_factory: Optional callable returning a new hash object
            (e.g. hashlib.sha256).
        mask: Literal filename suffixes. Empty disables filtering.
        include: True keeps files matching the mask, False keeps the rest.
        max_workers: Worker pool size.

    Returns:
        The records, in no particular order.

    Raises:
        ScanError: If anything under root failed.
    """
    reader = DirReader(
        root,
        hash_factory=hash_factory,
        mask=mask,
        include=include,
        max_workers=max_workers,
    )
    return reader.read()
