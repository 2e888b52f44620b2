"""
Fatal error types for redirect_scanner.

Per-domain probe failures are never raised (they become "no redirect");
only setup and teardown I/O failures surface as exceptions.
"""


class InputReadError(OSError):
    """The domain list could not be read."""


class ReportWriteError(OSError):
    """The report destination could not be created or written."""
