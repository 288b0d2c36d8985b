"""
dirreader - CLI Interface.

A command-line interface for inventorying a directory tree: every file under
a root, optionally filtered by filename suffix and optionally hashed.

Usage Examples:
    # List every file under a directory
    dirreader scan /path/to/data

    # Only .jpg and .png files, with SHA-256 digests
    dirreader scan /path/to/data --mask .jpg --mask .png --hash sha256

    # Everything except .tmp files, as JSON
    dirreader scan /path/to/data --mask .tmp --exclude --json

    # Record the run to a log file
    dirreader scan /path/to/data --hash md5 --log-file scan.log --verbose
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from dirreader import config
from dirreader.orchestration import ScanOrchestrator
from dirreader.scanning import available_algorithms

__version__ = "0.1.0"

# Initialize Typer app
app = typer.Typer(
    name="dirreader",
    help="dirreader - Concurrent directory inventory with suffix filtering and digests.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"dirreader v{__version__}")
        raise typer.Exit()


def validate_base_path(base_path: Path) -> None:
    """
    Validate that the provided root path exists and is accessible.

    Args:
        base_path: Path to validate.

    Raises:
        typer.Exit: If validation fails with descriptive error message.
    """
    if not base_path.exists():
        console.print(
            f"[red]Error:[/red] Root path does not exist: {base_path}"
        )
        raise typer.Exit(1)

    if not base_path.is_dir():
        console.print(
            f"[red]Error:[/red] Root path is not a directory: {base_path}"
        )
        raise typer.Exit(1)

    if not os.access(base_path, os.R_OK):
        console.print(
            f"[red]Error:[/red] Permission denied - cannot read: {base_path}"
        )
        raise typer.Exit(1)


def validate_workers(value: Optional[int]) -> Optional[int]:
    """
    Validate the worker pool size.

    Raises:
        typer.BadParameter: If value is less than 1.
    """
    if value is not None and value < 1:
        raise typer.BadParameter("Workers must be at least 1")
    return value


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """dirreader - Concurrent directory inventory with suffix filtering and digests."""
    pass


@app.command()
def scan(
    root: Path = typer.Argument(
        ...,
        help="Root directory to scan.",
        exists=False,  # We do our own validation
    ),
    hash_algorithm: str = typer.Option(
        config.NO_HASH,
        "--hash",
        "-H",
        help="Digest algorithm (see 'dirreader algorithms'), or 'none'.",
    ),
    mask: Optional[List[str]] = typer.Option(
        None,
        "--mask",
        "-m",
        help="Filename suffix to filter on. Repeat for several suffixes.",
    ),
    include: bool = typer.Option(
        True,
        "--include/--exclude",
        help="Keep files matching the mask, or keep files matching none of it.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help=f"Worker pool size (default {config.DEFAULT_MAX_WORKERS}).",
        callback=validate_workers,
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Print records as JSON instead of a table.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for log file output.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Inventory every file under ROOT.

    Any unreadable directory or file fails the whole scan: the errors are
    reported and no records are printed.
    """
    validate_base_path(root)

    try:
        orchestrator = ScanOrchestrator(
            root=root,
            hash_algorithm=hash_algorithm,
            mask=mask or [],
            include=include,
            max_workers=workers,
            log_file_path=log_file,
            output_json=output_json,
            verbose=verbose,
            console=console,
        )

        summary = orchestrator.run()

        if summary.interrupted:
            raise typer.Exit(130)
        elif summary.errors:
            raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except PermissionError as e:
        console.print(f"[red]Error:[/red] Permission denied - {e}")
        raise typer.Exit(1)

    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def algorithms() -> None:
    """List the digest algorithms accepted by --hash."""
    for name in available_algorithms():
        console.print(name)


if __name__ == "__main__":
    app()
