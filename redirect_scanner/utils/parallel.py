"""
Bounded parallel execution for redirect_scanner.

WorkerPool maps a work function over an input sequence with at most
``max_concurrency`` calls in flight. The dispatch loop takes a permit from a
bounded semaphore before submitting each item, so a long input list never
piles up in the executor queue; the permit is released when the call ends,
whatever the outcome. run() returns only once every submitted call has
finished.
"""

import logging
import sys
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import TypeVar

from tqdm import tqdm

from redirect_scanner.constants import DEFAULT_MAX_CONCURRENCY
from redirect_scanner.utils.stats import ScanStats

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Input type
R = TypeVar("R")  # Result type


class WorkerPool:
    """
    Fixed-size pool that runs one work call per item under a concurrency cap.

    Example:
        pool = WorkerPool(max_concurrency=5, show_progress=False)
        results = pool.run(domains, probe_one)

        for item, result, error in results:
            if error:
                print(f"Bug while processing {item}: {error}")
    """

    def __init__(
        self,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        desc: str = "Probing",
        unit: str = "domain",
        show_progress: bool = True,
        stats: ScanStats | None = None,
    ):
        """
        Initialize the pool.

        Args:
            max_concurrency: Maximum number of work calls in flight (must be >= 1)
            desc: Progress bar description
            unit: Progress bar unit name
            show_progress: Whether to show a tqdm progress bar on stderr
            stats: Optional ScanStats; 'failed' is incremented when work raises

        Raises:
            ValueError: If max_concurrency < 1
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

        self.max_concurrency = max_concurrency
        self.desc = desc
        self.unit = unit
        self.show_progress = show_progress
        self.stats = stats

    def run(
        self,
        items: Iterable[T],
        work: Callable[[T], R],
    ) -> list[tuple[T, R | None, Exception | None]]:
        """
        Run work(item) for every item and wait for all of them.

        work is expected not to raise. If it does, the exception is captured in
        the returned tuple, logged at DEBUG and the permit is still released.

        Args:
            items: Items to process (consumed once, in order)
            work: Function called once per item

        Returns:
            List of (item, result, exception) tuples in completion order
        """
        items_list = list(items)
        total = len(items_list)

        if total == 0:
            return []

        permits = threading.BoundedSemaphore(self.max_concurrency)
        results: list[tuple[T, R | None, Exception | None]] = []
        results_lock = threading.Lock()

        progress_bar = None
        if self.show_progress:
            progress_bar = tqdm(
                total=total,
                desc=self.desc,
                unit=self.unit,
                file=sys.stderr,  # Keep stdout clean
                mininterval=0.5,
                dynamic_ncols=True,
            )

        def guarded(item: T) -> R:
            try:
                return work(item)
            finally:
                permits.release()

        def on_done(future: Future, item: T) -> None:
            error = future.exception()
            result = None if error is not None else future.result()

            if error is not None:
                logger.debug(f"Error processing {item}: {error!r}")
                if self.stats is not None:
                    self.stats.increment("failed")

            with results_lock:
                results.append((item, result, error))
                if progress_bar is not None:
                    progress_bar.update(1)

        logger.debug(f"Starting {total:,} items with at most {self.max_concurrency} in flight")

        try:
            with ThreadPoolExecutor(
                max_workers=self.max_concurrency, thread_name_prefix="worker"
            ) as executor:
                for item in items_list:
                    permits.acquire()
                    try:
                        future = executor.submit(guarded, item)
                    except BaseException:
                        permits.release()
                        raise
                    future.add_done_callback(partial(on_done, item=item))
                # Leaving the block joins every worker thread
        finally:
            if progress_bar is not None:
                progress_bar.close()

        return results


def run_bounded(
    items: Iterable[T],
    work: Callable[[T], R],
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    **pool_kwargs,
) -> list[tuple[T, R | None, Exception | None]]:
    """
    Convenience wrapper: WorkerPool(max_concurrency, **pool_kwargs).run(items, work).

    Example:
        results = run_bounded(domains, probe_one, max_concurrency=5, show_progress=False)
    """
    return WorkerPool(max_concurrency=max_concurrency, **pool_kwargs).run(items, work)
