"""
Scan orchestration.

scan_domains() runs the probe for every domain through the bounded worker
pool, classifies each chain and feeds notable redirects to the aggregator.
run_scan() adds the fatal edges around it: reading the input list and
writing the report.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from redirect_scanner.aggregation.results import RedirectAggregator
from redirect_scanner.config import Settings, get_settings
from redirect_scanner.constants import (
    DEFAULT_MAX_CONCURRENCY,
    OUTCOME_NOTABLE,
)
from redirect_scanner.domain.models import ProbeOutcome
from redirect_scanner.domain.validation import build_rules
from redirect_scanner.ingest.domain_list import read_domains
from redirect_scanner.probe.navigators import Navigator, build_navigator
from redirect_scanner.probe.redirect_probe import RedirectProbe
from redirect_scanner.reporting.report_writer import write_report
from redirect_scanner.utils.parallel import WorkerPool
from redirect_scanner.utils.stats import ScanStats

logger = logging.getLogger(__name__)


@dataclass
class ScanReport:
    """Everything a finished scan produced."""

    grouped: dict[str, list[str]]
    stats: ScanStats
    output_path: Path | None = None
    outcomes: list[ProbeOutcome] = field(default_factory=list)

    @property
    def notable_count(self) -> int:
        return sum(len(domains) for domains in self.grouped.values())


def scan_domains(
    domains: Sequence[str],
    probe: RedirectProbe,
    aggregator: RedirectAggregator | None = None,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    show_progress: bool = True,
) -> ScanReport:
    """
    Probe every domain with at most max_concurrency probes in flight.

    Args:
        domains: Input domains
        probe: Configured RedirectProbe (or any callable domain -> RedirectChain)
        aggregator: Shared aggregator (default: a fresh one with default rules)
        max_concurrency: Concurrency cap
        show_progress: Show a tqdm progress bar

    Returns:
        ScanReport with the grouped notable redirects and counters
    """
    aggregator = aggregator if aggregator is not None else RedirectAggregator()
    stats = ScanStats(probed=0, no_redirect=0, safe=0, notable=0)

    def process(domain: str) -> ProbeOutcome:
        chain = probe(domain)
        classification, final_host = aggregator.record_if_notable(domain, chain)

        stats.increment("probed")
        stats.increment(classification)

        outcome = ProbeOutcome(
            domain=domain, chain=chain, classification=classification, final_host=final_host
        )
        if classification == OUTCOME_NOTABLE:
            note = " (https upgrade)" if chain.is_https_upgrade else ""
            logger.info(f"🔁 {domain} → {final_host}{note}")
        return outcome

    pool = WorkerPool(
        max_concurrency=max_concurrency,
        desc="Checking redirects",
        unit="domain",
        show_progress=show_progress,
        stats=stats,
    )
    results = pool.run(domains, process)

    outcomes = [result for _, result, error in results if error is None]
    return ScanReport(grouped=aggregator.snapshot(), stats=stats, outcomes=outcomes)


def run_scan(
    input_path: str | Path,
    output_path: str | Path | None = None,
    settings: Settings | None = None,
    navigator: Navigator | None = None,
    show_progress: bool = True,
) -> ScanReport:
    """
    Read the domain list, scan it and write the report.

    Args:
        input_path: Domain list file
        output_path: Report destination (default: settings.output_file)
        settings: Settings (default: get_settings())
        navigator: Navigation engine (default: built from settings.navigator)
        show_progress: Show a tqdm progress bar

    Returns:
        ScanReport with output_path set

    Raises:
        InputReadError: If the domain list cannot be read (nothing is probed)
        ReportWriteError: If the report cannot be written
    """
    settings = settings or get_settings()
    output_path = Path(output_path or settings.output_file)

    domains = read_domains(input_path)
    logger.info(f"Loaded {len(domains):,} domains from {input_path}")

    if navigator is None:
        navigator = build_navigator(settings.navigator, user_agent=settings.user_agent)

    probe = RedirectProbe(
        navigator,
        timeout=settings.probe_timeout,
        settle_delay=settings.settle_delay,
        schemes=settings.schemes,
    )
    aggregator = RedirectAggregator(rules=build_rules(settings.same_site_is_safe))

    report = scan_domains(
        domains,
        probe,
        aggregator=aggregator,
        max_concurrency=settings.max_concurrency,
        show_progress=show_progress,
    )

    report.output_path = write_report(report.grouped, output_path)
    return report
