"""
Report rendering and writing.
"""

from redirect_scanner.reporting.report_writer import render_report, write_report

__all__ = ["render_report", "write_report"]
