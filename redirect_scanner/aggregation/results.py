"""
Thread-safe grouping of notable redirects by final host.

One RedirectAggregator is created per scan and shared by every worker. The
grouping dict is the only state workers share; each append happens under a
single lock, classification happens outside it.
"""

import logging
from collections.abc import Sequence
from threading import Lock

from redirect_scanner.constants import (
    OUTCOME_NO_REDIRECT,
    OUTCOME_NOTABLE,
    OUTCOME_SAFE,
    OUTCOME_UNCLASSIFIABLE,
)
from redirect_scanner.domain.models import RedirectChain
from redirect_scanner.domain.validation import (
    SafeRedirectRule,
    is_safe_redirect,
    normalize_host,
)

logger = logging.getLogger(__name__)


class RedirectAggregator:
    """
    Final host -> origin domains, for redirects that are not safe.

    Example:
        aggregator = RedirectAggregator()
        chain = RedirectChain.between("http://foo.com", "http://bar.com")
        aggregator.record_if_notable("foo.com", chain)
        aggregator.snapshot()  # {"bar.com": ["foo.com"]}
    """

    def __init__(self, rules: Sequence[SafeRedirectRule] | None = None):
        """
        Initialize an empty grouping.

        Args:
            rules: Safe-redirect rules (default: domain.validation.SAFE_REDIRECT_RULES)
        """
        self.rules = rules
        self._lock = Lock()
        self._groups: dict[str, list[str]] = {}

    def classify(self, chain: RedirectChain) -> tuple[str, str | None]:
        """
        Classify a chain without recording it.

        Returns:
            Tuple of (classification, final_host)
        """
        if len(chain) < 2:
            return OUTCOME_NO_REDIRECT, None

        origin_host = normalize_host(chain.origin)
        final_host = normalize_host(chain.final)
        if not origin_host or not final_host:
            logger.debug(f"Skipping unparseable chain: {chain.urls}")
            return OUTCOME_UNCLASSIFIABLE, None

        if is_safe_redirect(origin_host, final_host, self.rules):
            return OUTCOME_SAFE, final_host
        return OUTCOME_NOTABLE, final_host

    def record_if_notable(self, domain: str, chain: RedirectChain) -> tuple[str, str | None]:
        """
        Append domain to its final host's group when the redirect is notable.

        Args:
            domain: Input domain as read
            chain: Chain returned by the probe

        Returns:
            Tuple of (classification, final_host), as from classify()
        """
        classification, final_host = self.classify(chain)
        if classification == OUTCOME_NOTABLE:
            with self._lock:
                self._groups.setdefault(final_host, []).append(domain)
        return classification, final_host

    def snapshot(self) -> dict[str, list[str]]:
        """Copy of the grouping (call after all workers have joined)."""
        with self._lock:
            return {host: list(domains) for host, domains in self._groups.items()}

    def __len__(self) -> int:
        with self._lock:
            return sum(len(domains) for domains in self._groups.values())
