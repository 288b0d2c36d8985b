"""Terminal output for dirreader scans.

This module provides the ScanView class, a Rich-based renderer for scan
results: a table of records, a summary panel and an error panel.

Example:
    from dirreader.ui import ScanView

    view = ScanView()
    view.display_records(summary.records, show_digest=True)
    view.display_summary(summary)
"""

import json
import os
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dirreader import config
from dirreader.models import FileRecord, ScanSummary


class ScanView:
    """Rich-based renderer for scan results.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO to capture output in tests.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_records(self, records: Sequence[FileRecord], show_digest: bool = False) -> None:
        """Display records in a table sorted by relative path.

        Args:
            records: Records to display.
            show_digest: Whether to add a digest column.
        """
        if not records:
            self.console.print("[yellow]No files matched.[/yellow]")
            return

        table = Table(title="Files")
        table.add_column("Path", style="white")
        table.add_column("Size", justify="right")
        table.add_column("Mode", style="dim")
        table.add_column("Modified", style="dim")
        if show_digest:
            table.add_column("Digest", style="cyan", no_wrap=True)

        for record in sorted(records, key=lambda r: r.rel_file):
            row = [
                escape(self._truncate_name(self._printable(record.rel_file), max_length=80)),
                self._format_size(record.metadata.size),
                record.metadata.mode_string,
                record.metadata.mod_time.strftime("%Y-%m-%d %H:%M:%S"),
            ]
            if show_digest:
                row.append(record.digest)
            table.add_row(*row)

        self.console.print(table)

    def display_json(self, records: Sequence[FileRecord]) -> None:
        """Print records as a JSON array, sorted by relative path."""
        data = [r.to_dict() for r in sorted(records, key=lambda r: r.rel_file)]
        self.console.print_json(json.dumps(data), ensure_ascii=True)

    def display_summary(self, summary: ScanSummary) -> None:
        """Display final statistics and any errors."""
        if summary.interrupted:
            title = "Scan Summary [yellow][INTERRUPTED][/yellow]"
            border = "yellow"
        elif summary.errors:
            title = "Scan Summary [red][FAILED][/red]"
            border = "red"
        else:
            title = "Scan Summary"
            border = "green"

        mask_text = ", ".join(summary.mask) if summary.mask else "none"
        if summary.mask:
            mask_text += " (include)" if summary.include else " (exclude)"

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Root", escape(self._printable(str(summary.root))))
        table.add_row("Hash algorithm", summary.hash_algorithm or "none")
        table.add_row("Mask", mask_text)
        table.add_row("Files", f"{summary.file_count:,}")
        table.add_row("Total size", self._format_size(summary.total_size))
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(Panel(table, title=title, border_style=border))

        if summary.errors:
            self.display_errors(summary.errors)

    def display_errors(self, errors: List[str]) -> None:
        """Display errors in a red panel, truncated after MAX_DISPLAY_ERRORS."""
        max_display = config.MAX_DISPLAY_ERRORS
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {escape(self._printable(e))}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_size(self, bytes_size: int) -> str:
        """Convert bytes to human-readable format (e.g. "10.5 MB")."""
        if bytes_size < 1024:
            return f"{bytes_size} B"
        elif bytes_size < 1024 * 1024:
            return f"{bytes_size / 1024:.1f} KB"
        elif bytes_size < 1024 * 1024 * 1024:
            return f"{bytes_size / (1024 * 1024):.1f} MB"
        else:
            return f"{bytes_size / (1024 * 1024 * 1024):.1f} GB"

    def _format_duration(self, seconds: float) -> str:
        if seconds < 0:
            seconds = 0
        if seconds < 60:
            return f"{seconds:.2f}s"
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"

    def _truncate_name(self, name: str, max_length: int = 60) -> str:
        """Truncate long names from the left, keeping the file name visible."""
        if len(name) > max_length:
            return "..." + name[-(max_length - 3):]
        return name

    def _printable(self, text: str) -> str:
        """Show undecodable filename bytes as backslash escapes (e.g. "bad\\xff.txt")."""
        return os.fsencode(text).decode("utf-8", "backslashreplace")
