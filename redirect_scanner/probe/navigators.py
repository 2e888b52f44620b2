"""
Navigation engines.

A navigator answers one question: "after loading this URL and letting it
settle, where did we end up?". RedirectProbe only depends on the Navigator
protocol, so any engine (headless browser, plain HTTP client, test double)
can be swapped in.

Engines:
- BrowserNavigator: headless Chromium through Playwright; follows server,
  meta-refresh and JavaScript redirects.
- HttpNavigator: requests with redirects enabled; follows server redirects
  and one level of <meta http-equiv="refresh">. Much cheaper, misses
  JavaScript redirects.
"""

import logging
import re
from typing import Protocol
from urllib.parse import urljoin

import requests
import urllib3
from playwright.sync_api import sync_playwright

from redirect_scanner.constants import (
    DEFAULT_USER_AGENT,
    NAVIGATOR_BROWSER,
    NAVIGATOR_HTTP,
)

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}

META_REFRESH_RE = re.compile(
    r'<meta[^>]*http-equiv=["\']?refresh["\']?[^>]*content=["\']\s*\d*\s*;\s*url=([^"\'>]+)',
    re.IGNORECASE,
)

# Only the head of the document is searched for a meta refresh
META_REFRESH_SCAN_BYTES = 65536


class Navigator(Protocol):
    """Navigation capability used by RedirectProbe."""

    def navigate(self, url: str, timeout: float, settle_delay: float) -> str:
        """
        Load url and return the resulting location.

        Args:
            url: Fully-qualified starting URL
            timeout: Seconds allowed for the navigation
            settle_delay: Seconds to wait for client-side redirects before reading the location

        Returns:
            Final URL after any redirects

        Raises:
            Exception: Any failure (network, timeout, navigation error)
        """
        ...


def meta_refresh_target(html: str) -> str | None:
    """Extract the URL of a <meta http-equiv="refresh"> tag, if any."""
    match = META_REFRESH_RE.search(html[:META_REFRESH_SCAN_BYTES])
    if not match:
        return None
    target = match.group(1).strip()
    return target or None


class HttpNavigator:
    """
    requests-based navigator.

    Every navigate() call opens its own Session and closes it before
    returning; nothing is shared between calls.
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        follow_meta_refresh: bool = True,
        verify_tls: bool = False,
    ):
        """
        Initialize the navigator.

        Args:
            user_agent: User-Agent header
            follow_meta_refresh: Follow one meta-refresh hop in the final page
            verify_tls: Verify certificates (off: a bad cert should not hide a redirect)
        """
        self.user_agent = user_agent
        self.follow_meta_refresh = follow_meta_refresh
        self.verify_tls = verify_tls

        if not verify_tls:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({"User-Agent": self.user_agent, **BROWSER_HEADERS})
        return session

    def navigate(self, url: str, timeout: float, settle_delay: float = 0.0) -> str:
        """Follow server redirects (and one meta refresh) from url."""
        session = self._new_session()
        try:
            return self._follow(session, url, timeout)
        finally:
            session.close()

    def _follow(self, session: requests.Session, url: str, timeout: float) -> str:
        response = session.get(url, timeout=timeout, allow_redirects=True, verify=self.verify_tls)
        try:
            final_url = response.url
            content_type = response.headers.get("Content-Type", "")
            if not self.follow_meta_refresh or "html" not in content_type.lower():
                return final_url
            target = meta_refresh_target(response.text)
        finally:
            response.close()

        if not target:
            return final_url

        logger.debug(f"Meta refresh on {final_url} -> {target}")
        response = session.get(
            urljoin(final_url, target),
            timeout=timeout,
            allow_redirects=True,
            verify=self.verify_tls,
        )
        try:
            return response.url
        finally:
            response.close()


class BrowserNavigator:
    """
    Headless Chromium navigator (Playwright sync API).

    The sync API is bound to the thread that started it, so every call owns
    its Playwright instance and browser and tears them down before returning.
    """

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, headless: bool = True):
        self.user_agent = user_agent
        self.headless = headless

    def navigate(self, url: str, timeout: float, settle_delay: float) -> str:
        """Load url in a fresh browser, wait settle_delay, read the location."""
        # goto gets what the settle delay leaves, so an abandoned call ends near the deadline
        goto_timeout = timeout - settle_delay
        if goto_timeout <= 0:
            raise TimeoutError(
                f"settle delay {settle_delay:g}s leaves no time within {timeout:g}s to navigate"
            )

        with sync_playwright() as pw:
            browser = pw.chromium.launch(headless=self.headless)
            try:
                context = browser.new_context(
                    user_agent=self.user_agent,
                    ignore_https_errors=True,
                )
                page = context.new_page()
                page.goto(url, timeout=goto_timeout * 1000, wait_until="domcontentloaded")
                if settle_delay > 0:
                    page.wait_for_timeout(settle_delay * 1000)
                return page.url
            finally:
                browser.close()


def build_navigator(kind: str, user_agent: str = DEFAULT_USER_AGENT) -> Navigator:
    """
    Create a navigator by name.

    Args:
        kind: "browser" or "http"
        user_agent: User-Agent for the engine

    Raises:
        ValueError: If kind is unknown
    """
    if kind == NAVIGATOR_BROWSER:
        return BrowserNavigator(user_agent=user_agent)
    if kind == NAVIGATOR_HTTP:
        return HttpNavigator(user_agent=user_agent)
    raise ValueError(f"Unknown navigator: {kind!r}")
