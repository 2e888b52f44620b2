"""
Host normalization, safe-redirect rules and result models.
"""

from redirect_scanner.domain.models import ProbeOutcome, RedirectChain
from redirect_scanner.domain.validation import (
    SAFE_REDIRECT_RULES,
    build_rules,
    ensure_scheme,
    is_safe_redirect,
    is_same_site_redirect,
    is_www_redirect,
    normalize_host,
)

__all__ = [
    "ProbeOutcome",
    "RedirectChain",
    "SAFE_REDIRECT_RULES",
    "build_rules",
    "ensure_scheme",
    "is_safe_redirect",
    "is_same_site_redirect",
    "is_www_redirect",
    "normalize_host",
]
