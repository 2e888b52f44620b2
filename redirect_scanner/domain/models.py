"""
Data models for redirect probing results.

These dataclasses represent the redirect chain observed for one domain and
the outcome of classifying it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RedirectChain:
    """
    Ordered URLs visited while probing a domain.

    The first entry is the normalized starting URL, the last entry the final
    observed location. Fewer than two entries means no redirect was seen.
    """

    urls: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "RedirectChain":
        return cls(())

    @classmethod
    def between(cls, start_url: str, final_url: str) -> "RedirectChain":
        return cls((start_url, final_url))

    @property
    def is_redirect(self) -> bool:
        return len(self.urls) >= 2

    @property
    def origin(self) -> str | None:
        return self.urls[0] if self.urls else None

    @property
    def final(self) -> str | None:
        return self.urls[-1] if self.urls else None

    @property
    def is_https_upgrade(self) -> bool:
        """True when the chain starts on http:// and ends on https://."""
        if not self.is_redirect:
            return False
        return self.urls[0].lower().startswith("http://") and self.urls[-1].lower().startswith(
            "https://"
        )

    def __len__(self) -> int:
        return len(self.urls)

    def __iter__(self):
        return iter(self.urls)


@dataclass
class ProbeOutcome:
    """Result of probing and classifying a single domain."""

    domain: str
    chain: RedirectChain
    classification: str  # see constants.OUTCOME_*
    final_host: str | None = None
