"""
Unit tests for redirect_scanner.probe.redirect_probe.

Uses the MapNavigator double from conftest; no network access.
"""

import time

import pytest

from redirect_scanner.domain.models import RedirectChain
from redirect_scanner.probe.redirect_probe import RedirectProbe, same_location


class TestSameLocation:
    """Test same_location."""

    @pytest.mark.parametrize(
        "a,b",
        [
            ("http://example.com", "http://example.com/"),
            ("http://Example.com/", "http://example.com/"),
            ("https://example.com/a?x=1", "https://example.com/a?x=1"),
        ],
    )
    def test_same(self, a, b):
        assert same_location(a, b) is True

    @pytest.mark.parametrize(
        "a,b",
        [
            ("http://example.com", "https://example.com/"),
            ("http://example.com", "http://www.example.com/"),
            ("http://example.com/a", "http://example.com/b"),
            ("http://example.com/?a=1", "http://example.com/?a=2"),
        ],
    )
    def test_different(self, a, b):
        assert same_location(a, b) is False


class TestRedirectProbe:
    """Test RedirectProbe.probe."""

    def test_redirect_returns_two_element_chain(self, map_navigator, make_probe):
        nav = map_navigator({"http://foo.com": "http://bar.com/"})
        chain = make_probe(nav).probe("foo.com")

        assert chain == RedirectChain(("http://foo.com", "http://bar.com/"))
        assert chain.is_redirect

    def test_no_redirect_returns_empty_chain(self, map_navigator, make_probe):
        nav = map_navigator()
        chain = make_probe(nav).probe("example.com")

        assert chain == RedirectChain.empty()
        # Successful navigation that stays put does not try https
        assert nav.calls == ["http://example.com"]

    def test_trailing_slash_is_not_a_redirect(self, map_navigator, make_probe):
        nav = map_navigator({"http://example.com": "http://example.com/"})
        assert not make_probe(nav).probe("example.com").is_redirect

    def test_https_upgrade_is_a_redirect(self, map_navigator, make_probe):
        nav = map_navigator({"http://example.com": "https://example.com/"})
        chain = make_probe(nav).probe("example.com")
        assert chain.is_redirect
        assert chain.is_https_upgrade

    def test_falls_back_to_https_when_http_fails(self, map_navigator, make_probe):
        nav = map_navigator(
            {"https://foo.com": "https://bar.com/"},
            failing={"http://foo.com"},
        )
        chain = make_probe(nav).probe("foo.com")

        assert chain.urls == ("https://foo.com", "https://bar.com/")
        assert nav.calls == ["http://foo.com", "https://foo.com"]

    def test_explicit_scheme_tried_once(self, map_navigator, make_probe):
        nav = map_navigator(failing={"https://foo.com"})
        assert make_probe(nav).probe("https://foo.com") == RedirectChain.empty()
        assert nav.calls == ["https://foo.com"]

    def test_input_is_trimmed(self, map_navigator, make_probe):
        nav = map_navigator({"http://foo.com": "http://bar.com/"})
        assert make_probe(nav).probe("  foo.com ").is_redirect

    def test_all_failures_absorbed(self, map_navigator, make_probe):
        nav = map_navigator(failing={"http://down.com", "https://down.com"})
        assert make_probe(nav).probe("down.com") == RedirectChain.empty()

    def test_timeout_absorbed(self, map_navigator, make_probe):
        nav = map_navigator(
            {"http://slow.com": "http://elsewhere.com/"},
            slow={"http://slow.com", "https://slow.com"},
            delay=2.0,
        )
        start = time.perf_counter()
        chain = make_probe(nav, timeout=0.1).probe("slow.com")

        assert chain == RedirectChain.empty()
        assert time.perf_counter() - start < 1.5

    def test_empty_final_url_is_not_a_redirect(self, make_probe):
        class BlankNavigator:
            def navigate(self, url, timeout, settle_delay):
                return ""

        assert make_probe(BlankNavigator()).probe("foo.com") == RedirectChain.empty()

    def test_navigator_receives_timing(self, make_probe):
        seen = []

        class RecordingNavigator:
            def navigate(self, url, timeout, settle_delay):
                seen.append((url, timeout, settle_delay))
                return url

        make_probe(RecordingNavigator(), timeout=3.0, settle_delay=0.5).probe("a.com")
        assert seen == [("http://a.com", 3.0, 0.5)]

    def test_custom_schemes(self, map_navigator, make_probe):
        nav = map_navigator()
        make_probe(nav, schemes=("https://",)).probe("a.com")
        assert nav.calls == ["https://a.com"]

    def test_callable(self, map_navigator, make_probe):
        nav = map_navigator({"http://foo.com": "http://bar.com/"})
        assert make_probe(nav)("foo.com").final == "http://bar.com/"

    @pytest.mark.parametrize(
        "kwargs,match",
        [
            ({"timeout": 0}, "timeout must be > 0"),
            ({"settle_delay": -1}, "settle_delay must be >= 0"),
            ({"schemes": ()}, "schemes must not be empty"),
        ],
    )
    def test_invalid_arguments(self, map_navigator, kwargs, match):
        with pytest.raises(ValueError, match=match):
            RedirectProbe(map_navigator(), **kwargs)
