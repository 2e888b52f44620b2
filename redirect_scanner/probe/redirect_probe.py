"""
Redirect probe.

Turns a domain into a RedirectChain using an injected Navigator. Every
navigation runs under a hard deadline; any failure (network error,
navigation error, deadline expiry) is absorbed as "no redirect" so one flaky
target never stops a scan.
"""

import logging
from collections.abc import Sequence
from urllib.parse import urlsplit

from redirect_scanner.constants import (
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_SCHEMES,
    DEFAULT_SETTLE_DELAY,
)
from redirect_scanner.domain.models import RedirectChain
from redirect_scanner.domain.validation import ensure_scheme, has_scheme
from redirect_scanner.probe.navigators import Navigator
from redirect_scanner.utils.deadline import call_with_deadline

logger = logging.getLogger(__name__)


def same_location(a: str, b: str) -> bool:
    """
    Compare two URLs as locations.

    Scheme and host are case-insensitive and an empty path equals "/", so
    "http://Example.com" and "http://example.com/" are the same place.
    """
    if a == b:
        return True
    try:
        pa, pb = urlsplit(a), urlsplit(b)
        return (
            pa.scheme.lower() == pb.scheme.lower()
            and pa.netloc.lower() == pb.netloc.lower()
            and (pa.path or "/") == (pb.path or "/")
            and pa.query == pb.query
        )
    except ValueError:
        return False


class RedirectProbe:
    """
    Observe where a domain redirects to.

    Example:
        probe = RedirectProbe(HttpNavigator(), timeout=15.0, settle_delay=4.0)
        chain = probe.probe("example.com")
        if chain.is_redirect:
            print(chain.origin, "->", chain.final)
    """

    def __init__(
        self,
        navigator: Navigator,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        schemes: Sequence[str] = DEFAULT_SCHEMES,
    ):
        """
        Initialize the probe.

        Args:
            navigator: Navigation engine (must be callable from many threads)
            timeout: Hard deadline per navigation in seconds; covers the settle delay
            settle_delay: Seconds the navigator waits before reading the location
            schemes: Schemes tried in order for inputs without one

        Raises:
            ValueError: If timeout <= 0, settle_delay < 0 or schemes is empty
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {timeout}")
        if settle_delay < 0:
            raise ValueError(f"settle_delay must be >= 0, got {settle_delay}")
        if not schemes:
            raise ValueError("schemes must not be empty")

        self.navigator = navigator
        self.timeout = timeout
        self.settle_delay = settle_delay
        self.schemes = tuple(schemes)

    def start_urls(self, domain: str) -> list[str]:
        """URLs to try for domain, in order."""
        if has_scheme(domain):
            return [domain.strip()]
        return [ensure_scheme(domain, scheme) for scheme in self.schemes]

    def probe(self, domain: str) -> RedirectChain:
        """
        Probe domain and return (start, final) when it redirects.

        Schemes are tried in order until one navigates successfully; a
        successful navigation that stays put ends the probe with no redirect.

        Args:
            domain: Domain or URL fragment from the input list

        Returns:
            Two-element chain on redirect, empty chain otherwise
        """
        for start_url in self.start_urls(domain):
            final_url = self._navigate(start_url)
            if final_url is None:
                continue  # failed, try the next scheme
            if final_url and not same_location(start_url, final_url):
                return RedirectChain.between(start_url, final_url)
            return RedirectChain.empty()
        return RedirectChain.empty()

    __call__ = probe

    def _navigate(self, start_url: str) -> str | None:
        """Final URL for start_url, or None when navigation failed."""
        try:
            return call_with_deadline(
                lambda: self.navigator.navigate(start_url, self.timeout, self.settle_delay),
                timeout=self.timeout,
                name=f"navigate {start_url}",
            )
        except TimeoutError:
            logger.debug(f"Timeout navigating {start_url} after {self.timeout:g}s")
        except Exception as e:
            logger.debug(f"Navigation failed for {start_url}: {e}")
        return None
