"""
CLI utilities for redirect_scanner.

This package provides:
- Logging setup
- The check-redirects command entry point
"""

from redirect_scanner.cli.commands import build_parser, main, run_check_redirects
from redirect_scanner.cli.logging import print_header, setup_logging

__all__ = [
    "build_parser",
    "main",
    "print_header",
    "run_check_redirects",
    "setup_logging",
]
