"""Workflow orchestration package for dirreader.

This package contains orchestration components for scan runs:
- ScanLogger: Structured logging of scan runs to timestamped log files.
- ScanOrchestrator: Coordinator tying the reader, terminal output and log together.
"""

from dirreader.orchestration.scan_logger import ScanLogger
from dirreader.orchestration.scan_orchestrator import ScanOrchestrator

__all__ = ["ScanLogger", "ScanOrchestrator"]
