"""
Exception hierarchy for dirreader.

Per-entry failures (OpenError, ReadError) are collected during a scan and
surfaced together as a single ScanError once the whole tree has been visited.
"""

from typing import List, Optional, Sequence


class DirReaderError(Exception):
    """Base exception for all dirreader errors."""
    pass


class EntryError(DirReaderError):
    """A single directory or file could not be processed.

    Attributes:
        path: Path of the entry that failed.
        cause: The underlying OSError.
        action: Short description of what was being attempted.
    """

    action = "access"

    def __init__(self, path: str, cause: OSError, action: Optional[str] = None) -> None:
        if action is not None:
            self.action = action
        self.path = str(path)
        self.cause = cause
        super().__init__(f"{self.action} {self.path}: {self._describe(cause)}")

    @staticmethod
    def _describe(cause: OSError) -> str:
        return cause.strerror or str(cause)


class OpenError(EntryError):
    """Raised when a directory or file cannot be opened."""

    action = "open"


class ReadError(EntryError):
    """Raised when directory entries or file bytes cannot be read."""

    action = "read"


class ScanError(DirReaderError):
    """Combined error for every failure observed during one scan.

    Attributes:
        errors: Underlying exceptions in the order they were reported.
    """

    def __init__(self, errors: Sequence[BaseException]) -> None:
        if not errors:
            raise ValueError("ScanError requires at least one error")
        self.errors: List[BaseException] = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))

    def __len__(self) -> int:
        return len(self.errors)

    def messages(self) -> List[str]:
        """Return the message of every underlying error."""
        return [str(e) for e in self.errors]
