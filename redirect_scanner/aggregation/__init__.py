"""
Aggregation of probe results into per-destination groups.
"""

from redirect_scanner.aggregation.results import RedirectAggregator

__all__ = ["RedirectAggregator"]
