"""
Models package for dirreader.

This package provides convenient imports for all data models:
- FileMetadata: Filesystem attributes of one entry
- FileRecord: One matched file produced by a scan
- ScanSummary: Scan run summary
"""

from .data_models import FileMetadata, FileRecord, ScanSummary

__all__ = [
    "FileMetadata",
    "FileRecord",
    "ScanSummary",
]
