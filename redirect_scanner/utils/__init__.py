"""
Shared utilities: bounded worker pool, deadlines, statistics, logging glue.
"""

from redirect_scanner.utils.deadline import call_with_deadline
from redirect_scanner.utils.parallel import WorkerPool, run_bounded
from redirect_scanner.utils.stats import ScanStats

__all__ = [
    "ScanStats",
    "WorkerPool",
    "call_with_deadline",
    "run_bounded",
]
