"""Terminal output package for dirreader."""

from .scan_view import ScanView

__all__ = ["ScanView"]
