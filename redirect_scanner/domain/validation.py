"""
Host normalization and safe-redirect classification.

This module provides the pure functions used to decide whether a redirect
is worth reporting. A redirect is "safe" when any rule in the ordered rule
set matches the (origin host, final host) pair; rules are evaluated in order
and the first match wins. New rules are added by appending a predicate to
SAFE_REDIRECT_RULES (or by passing a custom rule list), callers never change.

Uses urllib.parse for hostname extraction and tldextract with the bundled
Public Suffix List snapshot for the optional same-site rule.
"""

import re
from collections.abc import Callable, Sequence
from urllib.parse import urlsplit

import tldextract

SafeRedirectRule = Callable[[str, str], bool]

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

# Offline extractor: never fetch the suffix list over the network
_extract = tldextract.TLDExtract(suffix_list_urls=())


def ensure_scheme(domain: str, scheme: str = "http://") -> str:
    """
    Turn a domain or URL fragment into a URL.

    Examples:
        "example.com" -> "http://example.com"
        "  example.com " -> "http://example.com"
        "https://example.com" -> "https://example.com" (unchanged)

    Args:
        domain: Raw input line (may already carry http:// or https://)
        scheme: Scheme to prefix when none is present

    Returns:
        URL string
    """
    domain = (domain or "").strip()
    if _SCHEME_RE.match(domain):
        return domain
    return scheme + domain


def has_scheme(domain: str) -> bool:
    """Check if the input already names http:// or https://."""
    return bool(_SCHEME_RE.match((domain or "").strip()))


def normalize_host(raw_url: str) -> str:
    """
    Extract the lowercase hostname from a URL or bare host.

    Malformed input never raises; it yields "" so the caller can skip
    classification for that entry.

    Examples:
        "https://WWW.Example.com:8443/path" -> "www.example.com"
        "example.com/login" -> "example.com"
        "http://[2001:db8::1]:8080/x" -> "2001:db8::1"
        "http://[::1" -> ""

    Args:
        raw_url: URL-like string

    Returns:
        Hostname, or "" when none can be parsed
    """
    if not raw_url:
        return ""

    raw_url = raw_url.strip()
    # Bare hosts are parsed as a network location
    if "://" not in raw_url:
        authority, sep, rest = raw_url.partition("/")
        # Unbracketed IPv6 literal, as returned for "http://[2001:db8::1]/"
        if authority.count(":") > 1 and "[" not in authority:
            authority = f"[{authority}]"
        raw_url = f"//{authority}{sep}{rest}"

    try:
        hostname = urlsplit(raw_url).hostname
    except ValueError:
        return ""

    return hostname or ""


def strip_www(host: str) -> str:
    """Remove one leading 'www.' (case-insensitive)."""
    host = (host or "").lower()
    if host.startswith("www."):
        return host[len("www.") :]
    return host


def is_www_redirect(from_host: str, to_host: str) -> bool:
    """
    Bare host <-> www. variant of the same host (also covers identical hosts).

    Args:
        from_host: Origin hostname
        to_host: Final hostname

    Returns:
        True if the hosts match once a leading 'www.' is removed from each
    """
    return strip_www(from_host) == strip_www(to_host)


def is_same_site_redirect(from_host: str, to_host: str) -> bool:
    """
    Redirect stays within one registrable domain (shop.example.co.uk -> example.co.uk).

    Opt-in rule; hosts without a public suffix (localhost, IPs) only match
    themselves.
    """
    from_site = _site(from_host)
    to_site = _site(to_host)
    return bool(from_site) and from_site == to_site


def _site(host: str) -> str:
    """Registrable domain of host, or the host itself when it has no public suffix."""
    host = (host or "").lower()
    ext = _extract(host)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    return host


# Ordered; first match short-circuits
SAFE_REDIRECT_RULES: list[SafeRedirectRule] = [
    is_www_redirect,
]


def build_rules(same_site_is_safe: bool = False) -> list[SafeRedirectRule]:
    """Return the default rule set, optionally extended with the same-site rule."""
    rules = list(SAFE_REDIRECT_RULES)
    if same_site_is_safe:
        rules.append(is_same_site_redirect)
    return rules


def is_safe_redirect(
    from_host: str,
    to_host: str,
    rules: Sequence[SafeRedirectRule] | None = None,
) -> bool:
    """
    Decide whether a redirect between two hosts is not noteworthy.

    Args:
        from_host: Origin hostname
        to_host: Final hostname
        rules: Rule set to evaluate (default: SAFE_REDIRECT_RULES)

    Returns:
        True if any rule matches
    """
    for rule in SAFE_REDIRECT_RULES if rules is None else rules:
        if rule(from_host, to_host):
            return True
    return False
