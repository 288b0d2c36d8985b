"""dirreader - Concurrent directory inventory tool.

Recursively enumerates every file under a root directory, optionally filtering
by filename suffix and computing a content digest per file.
"""

__version__ = "0.1.0"

from .exceptions import DirReaderError, OpenError, ReadError, ScanError
from .models import FileMetadata, FileRecord, ScanSummary
from .scanning import DirReader, read_directory

__all__ = [
    "__version__",
    "DirReaderError",
    "OpenError",
    "ReadError",
    "ScanError",
    "FileMetadata",
    "FileRecord",
    "ScanSummary",
    "DirReader",
    "read_directory",
]


def main() -> None:
    """Entry point for the dirreader CLI application.

    Imports and runs the Typer app from the dirreader.cli module.
    """
    from dirreader.cli import app
    app()
