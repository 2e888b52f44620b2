"""
Thread-safe scan statistics.

Workers update counters concurrently; the CLI reads them once the pool has
joined to print a summary line.
"""

from threading import Lock


class ScanStats:
    """
    Thread-safe counters for a scan.

    Example:
        stats = ScanStats(probed=0, notable=0)
        stats.increment("probed")
        stats.increment("notable")
        stats.summary()  # "notable: 1 | probed: 1"
    """

    def __init__(self, **initial_values: int):
        """
        Initialize stats with any number of counters.

        Args:
            **initial_values: Initial values for counters (missing keys read as 0)
        """
        self._lock = Lock()
        self._counters: dict[str, int] = dict(initial_values)

    def increment(self, key: str, amount: int = 1) -> None:
        """Thread-safe increment of a counter."""
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + amount

    def get(self, key: str, default: int = 0) -> int:
        """Get counter value."""
        with self._lock:
            return self._counters.get(key, default)

    def to_dict(self) -> dict[str, int]:
        """Get all counters as a dictionary."""
        with self._lock:
            return self._counters.copy()

    def summary(self) -> str:
        """One-line 'key: value' rendering, sorted by key."""
        return " | ".join(f"{k}: {v:,}" for k, v in sorted(self.to_dict().items()))

    def __getitem__(self, key: str) -> int:
        """Allow dict-like access: stats['notable']."""
        return self.get(key)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v}" for k, v in sorted(self.to_dict().items()))
        return f"ScanStats({items})"
