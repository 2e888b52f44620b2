"""
Input loading.
"""

from redirect_scanner.ingest.domain_list import parse_domains, read_domains

__all__ = ["parse_domains", "read_domains"]
