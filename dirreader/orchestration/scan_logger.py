"""ScanLogger for recording scan runs in formatted output.

This module provides the ScanLogger class that writes a sectioned plain-text
log of one scan: header, scan parameters, optional per-file records, errors
and a summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from dirreader import config
from dirreader.models import FileRecord, ScanSummary


class ScanLogger:
    """Logger for scan runs with structured output format.

    Usage:
        with ScanLogger(log_file_path) as logger:
            logger.log_header()
            logger.log_scan_parameters(root, "sha256", [".txt"], True, 8)
            logger.log_records(summary.records)
            logger.log_errors(summary.errors)
            logger.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None) -> None:
        """Initialize the ScanLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                generates a timestamped filename in the current directory.

        Raises:
            OSError: If the log file path is not writable.
        """
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None

        if log_file_path is None:
            timestamp_str = self._start_timestamp.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"{config.LOG_FILE_PREFIX}{timestamp_str}.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".dirreader_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def __enter__(self) -> "ScanLogger":
        """Open the log file.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def open(self) -> None:
        """Open the log file for writing, truncating any previous content."""
        if self._file_handle is not None:
            return
        try:
            self._file_handle = open(
                self._log_file_path, "w", encoding="utf-8", errors="surrogateescape"
            )
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")

    def close(self) -> None:
        """Close the log file. Safe to call more than once."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title and start timestamp."""
        self._write_separator()
        self._write_line("dirreader - Scan Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line("")

    def log_scan_parameters(
        self,
        root: Path,
        hash_algorithm: Optional[str],
        mask: Sequence[str],
        include: bool,
        max_workers: int,
    ) -> None:
        """Write the scan parameters section.

        Args:
            root: Directory being scanned.
            hash_algorithm: Digest algorithm name, or None if disabled.
            mask: Suffix mask.
            include: Effective include flag.
            max_workers: Worker pool size.
        """
        self._write_separator()
        self._write_line("SCAN PARAMETERS")
        self._write_separator()
        self._write_line(f"Root: {root}")
        self._write_line(f"Hash algorithm: {hash_algorithm or 'none'}")
        if mask:
            mode = "include" if include else "exclude"
            self._write_line(f"Mask ({mode}): {', '.join(mask)}")
        else:
            self._write_line("Mask: none (all files)")
        self._write_line(f"Workers: {max_workers}")
        self._write_line("")

    def log_records(self, records: Sequence[FileRecord]) -> None:
        """Write one line per record, sorted by relative path."""
        self._write_separator()
        self._write_line("RECORDS")
        self._write_separator()
        for record in sorted(records, key=lambda r: r.rel_file):
            line = f"{record.rel_file} ({record.metadata.size:,} bytes)"
            if record.digest:
                line += f" {record.digest}"
            self._write_line(line, indent=2)
        self._write_line("")

    def log_errors(self, errors: List[str]) -> None:
        """Write the errors section. Writes nothing if errors is empty."""
        if not errors:
            return
        self._write_separator()
        self._write_line("ERRORS")
        self._write_separator()
        for error in errors:
            self._write_line(f"- {error}", indent=2)
        self._write_line("")

    def log_summary(self, summary: ScanSummary) -> None:
        """Write the summary section.

        Args:
            summary: The ScanSummary with aggregated statistics.
        """
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        if summary.interrupted:
            status = "INTERRUPTED"
        elif summary.errors:
            status = "FAILED"
        else:
            status = "OK"
        self._write_line(f"Status: {status}")
        self._write_line(f"Files: {summary.file_count:,}")
        self._write_line(f"Total size: {summary.total_size:,} bytes")
        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _format_duration(self, seconds: float) -> str:
        """Format duration like "45s", "5m 23s" or "1h 5m 30s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        else:
            return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except (OSError, UnicodeError) as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
