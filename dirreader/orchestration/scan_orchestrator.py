"""ScanOrchestrator for coordinating a complete scan run.

This module provides the ScanOrchestrator class that ties together the
DirReader, ScanView and ScanLogger: it validates the run parameters, reads
the tree, renders the outcome and optionally records it to a log file.

Example:
    from dirreader.orchestration import ScanOrchestrator
    from pathlib import Path

    orchestrator = ScanOrchestrator(
        root=Path("/data"),
        hash_algorithm="sha256",
        mask=[".jpg", ".png"],
        include=True,
    )
    summary = orchestrator.run()
"""

import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from dirreader import config
from dirreader.exceptions import ScanError
from dirreader.models import ScanSummary
from dirreader.orchestration.scan_logger import ScanLogger
from dirreader.scanning import DirReader, normalize_include, resolve_hash_factory
from dirreader.ui import ScanView


class ScanOrchestrator:
    """Orchestrates a scan run.

    Attributes:
        root: Resolved directory to scan.
        hash_algorithm: Digest algorithm name, or None when hashing is off.
        mask: Literal filename suffixes.
        include: Effective include flag.
        max_workers: Worker pool size.
        log_file_path: Optional path for the log file.
        output_json: Whether to print records as JSON instead of a table.
        verbose: Whether to display and log additional details.
    """

    def __init__(
        self,
        root: Path,
        hash_algorithm: Optional[str] = None,
        mask: Sequence[str] = (),
        include: bool = True,
        max_workers: Optional[int] = None,
        log_file_path: Optional[Path] = None,
        output_json: bool = False,
        verbose: bool = False,
        console: Optional[Console] = None,
    ) -> None:
        """Initialize the ScanOrchestrator.

        Args:
            root: Directory to scan.
            hash_algorithm: hashlib algorithm name, or None / "none" to skip
                hashing.
            mask: Literal filename suffixes. Empty disables filtering.
            include: Keep matching files (True) or non-matching files (False).
            max_workers: Worker pool size. Defaults to
                config.DEFAULT_MAX_WORKERS.
            log_file_path: Optional path for a scan log file. No log is
                written when None.
            output_json: Print records as JSON instead of a table.
            verbose: Include per-file records in the log and extra output.
            console: Optional Rich Console for output.

        Raises:
            ValueError: If root does not exist or is not a directory, if the
                hash algorithm is unsupported, or if max_workers < 1.
        """
        resolved_path = Path(root).resolve()
        if not resolved_path.exists():
            raise ValueError(f"Root path does not exist: {root}")
        if not resolved_path.is_dir():
            raise ValueError(f"Root path is not a directory: {root}")

        if max_workers is None:
            max_workers = config.DEFAULT_MAX_WORKERS
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")

        self._hash_factory = resolve_hash_factory(hash_algorithm)

        self.root = resolved_path
        self.hash_algorithm = hash_algorithm.strip().lower() if self._hash_factory else None
        self.mask = list(mask)
        self.include = normalize_include(self.mask, include)
        self.max_workers = max_workers
        self.log_file_path = log_file_path
        self.output_json = output_json
        self.verbose = verbose

        self._view = ScanView(console)

    def run(self) -> ScanSummary:
        """Scan the tree, display the outcome and write the log.

        Returns:
            ScanSummary holding the records on success, or the error
            messages (and no records) on failure.
        """
        summary = ScanSummary(
            root=self.root,
            hash_algorithm=self.hash_algorithm,
            mask=list(self.mask),
            include=self.include,
        )

        start_time = time.time()
        reader = DirReader(
            self.root,
            hash_factory=self._hash_factory,
            mask=self.mask,
            include=self.include,
            max_workers=self.max_workers,
        )
        try:
            summary.records = reader.read()
        except ScanError as e:
            summary.errors = e.messages()
        except KeyboardInterrupt:
            self._view.console.print("\n[yellow]Scan interrupted by user.[/yellow]")
            summary.interrupted = True
        summary.duration_seconds = time.time() - start_time

        self._display(summary)
        self._write_log(summary)

        return summary

    def _display(self, summary: ScanSummary) -> None:
        if self.output_json:
            if summary.succeeded:
                self._view.display_json(summary.records)
            elif summary.errors:
                self._view.display_errors(summary.errors)
            return

        if summary.succeeded:
            self._view.display_records(
                summary.records, show_digest=self.hash_algorithm is not None
            )
        self._view.display_summary(summary)

    def _write_log(self, summary: ScanSummary) -> None:
        """Record the run to the log file, if one was requested.

        Log failures are reported on stderr and never fail the scan.
        """
        if self.log_file_path is None:
            return

        try:
            with ScanLogger(log_file_path=self.log_file_path) as logger:
                logger.log_header()
                logger.log_scan_parameters(
                    root=self.root,
                    hash_algorithm=self.hash_algorithm,
                    mask=self.mask,
                    include=self.include,
                    max_workers=self.max_workers,
                )
                if self.verbose and summary.records:
                    logger.log_records(summary.records)
                logger.log_errors(summary.errors)
                logger.log_summary(summary)

                if self.verbose and not self.output_json:
                    self._view.console.print(
                        f"[dim]Log file: {logger.get_log_path()}[/dim]"
                    )
        except OSError as e:
            print(f"Warning: Could not create log file: {e}", file=sys.stderr)
