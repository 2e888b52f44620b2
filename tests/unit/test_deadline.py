"""
Unit tests for redirect_scanner.utils.deadline.
"""

import time

import pytest

from redirect_scanner.utils.deadline import call_with_deadline


def test_returns_result():
    assert call_with_deadline(lambda: 42, timeout=1.0) == 42


def test_reraises_exception():
    def boom():
        raise ConnectionError("refused")

    with pytest.raises(ConnectionError, match="refused"):
        call_with_deadline(boom, timeout=1.0)


def test_times_out_without_waiting_for_callable():
    start = time.perf_counter()
    with pytest.raises(TimeoutError):
        call_with_deadline(lambda: time.sleep(2.0), timeout=0.1)
    assert time.perf_counter() - start < 1.0


@pytest.mark.parametrize("timeout", [0, -1.0])
def test_invalid_timeout(timeout):
    with pytest.raises(ValueError, match="timeout must be > 0"):
        call_with_deadline(lambda: None, timeout=timeout)
