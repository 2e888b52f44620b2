"""
Hard wall-clock deadlines for blocking calls.

Navigation engines accept their own timeouts, but those do not always cover
every phase (DNS, TLS, browser start-up, settle delay). call_with_deadline
bounds the whole call: the callable runs in a daemon thread and the caller
gives up after ``timeout`` seconds. The abandoned thread finishes on its own
and its result is discarded.
"""

import threading
from collections.abc import Callable
from typing import TypeVar

R = TypeVar("R")


def call_with_deadline(func: Callable[[], R], timeout: float, name: str | None = None) -> R:
    """
    Run func() and return its result, or raise TimeoutError after timeout seconds.

    Exceptions raised by func are re-raised in the calling thread.

    Args:
        func: Zero-argument callable
        timeout: Deadline in seconds (must be > 0)
        name: Optional thread name (for debugging)

    Raises:
        ValueError: If timeout <= 0
        TimeoutError: If func did not finish in time
    """
    if timeout <= 0:
        raise ValueError(f"timeout must be > 0, got {timeout}")

    outcome: dict[str, object] = {}
    done = threading.Event()

    def runner() -> None:
        try:
            outcome["result"] = func()
        except BaseException as e:  # re-raised in the caller
            outcome["error"] = e
        finally:
            done.set()

    thread = threading.Thread(target=runner, name=name or "deadline-call", daemon=True)
    thread.start()

    if not done.wait(timeout):
        raise TimeoutError(f"call did not finish within {timeout:g}s")

    if "error" in outcome:
        raise outcome["error"]  # type: ignore[misc]
    return outcome["result"]  # type: ignore[return-value]
