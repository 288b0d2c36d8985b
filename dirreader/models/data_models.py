"""
Core data models for dirreader.

This module contains the following dataclasses:
- FileMetadata: Snapshot of the filesystem attributes of one entry
- FileRecord: One matched file produced by a scan
- ScanSummary: Summary of a complete scan run, used for display and logging
"""

import os
import stat
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class FileMetadata:
    """Filesystem attributes captured when the entry was enumerated."""
    name: str                         # Base name of the entry
    size: int                         # Size in bytes
    mode: int                         # st_mode bits (type + permissions)
    mod_time: datetime                # Last modification time
    is_dir: bool                      # Directory flag

    @classmethod
    def from_stat(cls, name: str, stat_result: os.stat_result) -> "FileMetadata":
        """Build metadata from an os.stat_result (typically from lstat)."""
        return cls(
            name=name,
            size=stat_result.st_size,
            mode=stat_result.st_mode,
            mod_time=datetime.fromtimestamp(stat_result.st_mtime),
            is_dir=stat.S_ISDIR(stat_result.st_mode),
        )

    @property
    def mode_string(self) -> str:
        """Mode rendered like ls -l, e.g. '-rw-r--r--'."""
        return stat.filemode(self.mode)


@dataclass(frozen=True)
class FileRecord:
    """One file found under the scan root."""
    metadata: FileMetadata            # Snapshot taken during enumeration
    path_abs: Path                    # Absolute path of the file
    path_rel: str                     # Directory segments from root ("" at top level)
    digest: str = ""                  # Lowercase hex digest, "" if not computed

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def rel_file(self) -> str:
        """Path of the file relative to the scan root, including its name."""
        return os.path.join(self.path_rel, self.metadata.name)

    def to_dict(self) -> Dict[str, Any]:
        """Render the record as JSON-serializable data."""
        return {
            "name": self.metadata.name,
            "size": self.metadata.size,
            "mode": self.metadata.mode_string,
            "mod_time": self.metadata.mod_time.isoformat(),
            "is_dir": self.metadata.is_dir,
            "path_abs": str(self.path_abs),
            "path_rel": self.path_rel,
            "digest": self.digest,
        }


@dataclass
class ScanSummary:
    """Summary of a scan run returned by ScanOrchestrator."""
    root: Path                        # Scanned root directory
    hash_algorithm: Optional[str] = None  # Digest algorithm name, None if disabled
    mask: List[str] = field(default_factory=list)  # Suffix mask
    include: bool = False             # Effective include flag
    records: List[FileRecord] = field(default_factory=list)  # Matched files
    errors: List[str] = field(default_factory=list)  # Error messages
    duration_seconds: float = 0.0     # Wall-clock duration of the scan
    interrupted: bool = False         # Whether the scan was interrupted by user

    @property
    def file_count(self) -> int:
        return len(self.records)

    @property
    def total_size(self) -> int:
        return sum(r.metadata.size for r in self.records)

    @property
    def succeeded(self) -> bool:
        return not self.errors and not self.interrupted
