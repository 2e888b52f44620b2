"""
Pytest configuration and shared fixtures for redirect_scanner tests.

No test touches the network: navigators are replaced by in-memory doubles.
"""

import threading
import time

import pytest

from redirect_scanner.config import get_settings
from redirect_scanner.probe.redirect_probe import RedirectProbe


class MapNavigator:
    """
    Navigator double backed by a dict.

    - redirects: start URL -> final URL (unknown URLs stay where they are)
    - slow: start URLs that sleep for `delay` seconds before answering
    - failing: start URLs that raise ConnectionError
    """

    def __init__(
        self,
        redirects: dict[str, str] | None = None,
        slow: set[str] | None = None,
        failing: set[str] | None = None,
        delay: float = 1.0,
    ):
        self.redirects = dict(redirects or {})
        self.slow = set(slow or ())
        self.failing = set(failing or ())
        self.delay = delay
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def navigate(self, url: str, timeout: float, settle_delay: float) -> str:
        with self._lock:
            self.calls.append(url)
        if url in self.failing:
            raise ConnectionError(f"connection refused: {url}")
        if url in self.slow:
            time.sleep(self.delay)
        return self.redirects.get(url, url)


@pytest.fixture
def map_navigator():
    """Factory for MapNavigator instances."""
    return MapNavigator


@pytest.fixture
def make_probe():
    """Build a RedirectProbe with short timings suitable for tests."""

    def _make(navigator, timeout: float = 0.5, settle_delay: float = 0.0, **kwargs):
        return RedirectProbe(navigator, timeout=timeout, settle_delay=settle_delay, **kwargs)

    return _make


@pytest.fixture
def domain_file(tmp_path):
    """Write lines to a domain list file and return its path."""

    def _write(lines: list[str], name: str = "domains.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate tests from a developer's .env and REDIRECT_SCANNER_* variables."""
    import os

    for key in list(os.environ):
        if key.startswith("REDIRECT_SCANNER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
