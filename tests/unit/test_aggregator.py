"""
Unit tests for redirect_scanner.aggregation.results.
"""

import threading

from redirect_scanner.aggregation.results import RedirectAggregator
from redirect_scanner.domain.models import RedirectChain
from redirect_scanner.domain.validation import build_rules
from redirect_scanner.utils.parallel import WorkerPool


def chain(start: str, final: str) -> RedirectChain:
    return RedirectChain.between(start, final)


class TestRecordIfNotable:
    """Test RedirectAggregator.record_if_notable."""

    def test_cross_host_recorded(self):
        agg = RedirectAggregator()
        assert agg.record_if_notable("foo.com", chain("http://foo.com", "http://bar.com/")) == (
            "notable",
            "bar.com",
        )
        assert agg.snapshot() == {"bar.com": ["foo.com"]}

    def test_www_redirect_ignored(self):
        agg = RedirectAggregator()
        result = agg.record_if_notable(
            "example.com", chain("http://example.com", "https://www.example.com/")
        )
        assert result == ("safe", "www.example.com")
        assert agg.snapshot() == {}

    def test_short_chain_ignored(self):
        agg = RedirectAggregator()
        assert agg.record_if_notable("a.com", RedirectChain.empty()) == ("no_redirect", None)
        assert agg.record_if_notable("a.com", RedirectChain(("http://a.com",))) == (
            "no_redirect",
            None,
        )
        assert len(agg) == 0

    def test_unparseable_hosts_skipped(self):
        agg = RedirectAggregator()
        assert agg.record_if_notable("a.com", chain("http://a.com", "http://[::1")) == (
            "unclassifiable",
            None,
        )
        assert agg.snapshot() == {}

    def test_groups_by_final_host_in_insertion_order(self):
        agg = RedirectAggregator()
        agg.record_if_notable("b.com", chain("http://b.com", "https://c.com/x"))
        agg.record_if_notable("a.com", chain("http://a.com", "http://C.com/"))
        agg.record_if_notable("d.com", chain("http://d.com", "http://e.com/"))

        assert agg.snapshot() == {"c.com": ["b.com", "a.com"], "e.com": ["d.com"]}
        assert len(agg) == 3

    def test_custom_rules(self):
        agg = RedirectAggregator(rules=build_rules(same_site_is_safe=True))
        assert agg.record_if_notable(
            "shop.example.com", chain("http://shop.example.com", "https://example.com/")
        ) == ("safe", "example.com")

    def test_snapshot_is_a_copy(self):
        agg = RedirectAggregator()
        agg.record_if_notable("foo.com", chain("http://foo.com", "http://bar.com/"))
        snap = agg.snapshot()
        snap["bar.com"].append("intruder.com")
        assert agg.snapshot() == {"bar.com": ["foo.com"]}


class TestConcurrency:
    """Concurrent recording never loses entries."""

    def test_threads_hammering_same_group(self):
        agg = RedirectAggregator()
        per_thread = 500
        start = threading.Barrier(8)

        def worker(n):
            start.wait()
            for i in range(per_thread):
                agg.record_if_notable(f"d{n}-{i}.com", chain(f"http://d{n}-{i}.com", "http://sink.com/"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snap = agg.snapshot()
        assert len(snap["sink.com"]) == 8 * per_thread
        assert len(set(snap["sink.com"])) == 8 * per_thread

    def test_through_worker_pool(self):
        """High-concurrency synthetic input: recorded count equals notable count."""
        agg = RedirectAggregator()
        domains = [f"site{i}.com" for i in range(600)]

        def work(domain):
            i = int(domain[4:-4])
            if i % 3 == 0:
                final = f"http://www.{domain}/"  # safe
            else:
                final = f"http://dest{i % 7}.com/"  # notable
            classification, _ = agg.record_if_notable(domain, chain(f"http://{domain}", final))
            return classification

        results = WorkerPool(max_concurrency=32, show_progress=False).run(domains, work)

        expected_notable = sum(1 for i in range(600) if i % 3 != 0)
        assert sum(1 for _, r, _ in results if r == "notable") == expected_notable
        assert len(agg) == expected_notable
        recorded = [d for members in agg.snapshot().values() for d in members]
        assert sorted(recorded) == sorted(d for i, d in enumerate(domains) if i % 3 != 0)
