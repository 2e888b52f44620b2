"""
Redirect Scanner - find domains whose redirects land somewhere surprising.

This package provides utilities for:
- Probing domains for HTTP / browser redirects under a hard deadline
- Classifying redirects as safe (www variants) or notable (cross-host)
- Running probes through a bounded worker pool
- Writing a report grouped by final destination host
"""

import logging

# Set up NullHandler to prevent "No handler found" warnings
# when used as a library. Applications should configure their own handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Re-export commonly used items
from redirect_scanner.aggregation.results import RedirectAggregator
from redirect_scanner.config import Settings, get_settings
from redirect_scanner.constants import (
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_SETTLE_DELAY,
)
from redirect_scanner.domain.models import RedirectChain
from redirect_scanner.domain.validation import is_safe_redirect, normalize_host
from redirect_scanner.probe.redirect_probe import RedirectProbe
from redirect_scanner.reporting.report_writer import write_report
from redirect_scanner.scan import run_scan, scan_domains

__all__ = [
    "__version__",
    # Config
    "Settings",
    "get_settings",
    # Constants
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_OUTPUT_FILE",
    "DEFAULT_PROBE_TIMEOUT",
    "DEFAULT_SETTLE_DELAY",
    # Core
    "RedirectAggregator",
    "RedirectChain",
    "RedirectProbe",
    "is_safe_redirect",
    "normalize_host",
    "run_scan",
    "scan_domains",
    "write_report",
]
