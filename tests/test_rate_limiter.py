"""
Unit tests for the sliding-window rate limiter.
"""

import threading

import pytest

from passgen.ratelimit import RateLimiter


class TestRateLimiter:
    """Test admission decisions."""

    @pytest.fixture
    def limiter(self):
        """Create a limiter with automatic sweeps disabled."""
        return RateLimiter(limit=10, sweep_interval=None)

    def test_limit_reached(self, limiter):
        """Test that the eleventh call inside a minute is denied."""
        for i in range(10):
            assert limiter.allow("chat-1", now=float(i))

        assert not limiter.allow("chat-1", now=10.0)

    def test_window_slides(self, limiter):
        """Test that requests are admitted again once the window has passed."""
        for _ in range(10):
            assert limiter.allow("chat-1", now=0.0)
        assert not limiter.allow("chat-1", now=30.0)

        assert limiter.allow("chat-1", now=61.0)

    def test_denials_are_not_recorded(self):
        """Test that denied requests do not extend the window."""
        limiter = RateLimiter(limit=2, sweep_interval=None)
        assert limiter.allow("chat-1", now=0.0)
        assert limiter.allow("chat-1", now=0.0)

        for t in range(1, 60):
            assert not limiter.allow("chat-1", now=float(t))

        assert limiter.allow("chat-1", now=60.5)
        assert limiter.allow("chat-1", now=60.5)
        assert not limiter.allow("chat-1", now=60.5)

    def test_timestamp_expires_at_window_edge(self):
        """Test that a timestamp exactly one window old no longer counts."""
        limiter = RateLimiter(limit=1, sweep_interval=None)
        assert limiter.allow("chat-1", now=100.0)

        assert not limiter.allow("chat-1", now=159.9)
        assert limiter.allow("chat-1", now=160.0)

    def test_clients_are_independent(self, limiter):
        """Test that one client's usage does not affect another."""
        for _ in range(10):
            assert limiter.allow("alice", now=0.0)
        assert not limiter.allow("alice", now=1.0)

        for _ in range(10):
            assert limiter.allow("bob", now=1.0)

        assert limiter.remaining("alice", now=1.0) == 0
        assert limiter.remaining("carol", now=1.0) == 10

    def test_explicit_limit(self, limiter):
        """Test check_rate_limit with a per-call limit."""
        assert limiter.check_rate_limit(42, 2, now=0.0)
        assert limiter.check_rate_limit(42, 2, now=0.0)
        assert not limiter.check_rate_limit(42, 2, now=0.0)
        assert limiter.check_rate_limit(42, 3, now=0.0)

    def test_default_clock(self):
        """Test that the injected clock is used when no time is given."""
        current = [0.0]
        limiter = RateLimiter(limit=1, sweep_interval=None, clock=lambda: current[0])

        assert limiter.allow("chat-1")
        assert not limiter.allow("chat-1")

        current[0] = 61.0
        assert limiter.allow("chat-1")

    def test_invalid_limit(self):
        """Test that a zero limit is rejected."""
        with pytest.raises(ValueError):
            RateLimiter(limit=0)


class TestEviction:
    """Test removal of idle client windows."""

    def test_purge_idle(self):
        """Test that only clients with empty windows are evicted."""
        limiter = RateLimiter(limit=5, sweep_interval=None)
        limiter.allow("old", now=0.0)
        limiter.allow("recent", now=50.0)

        assert limiter.purge_idle(now=70.0) == 1
        assert limiter.tracked_clients() == 1
        assert limiter.remaining("recent", now=70.0) == 4

    def test_automatic_sweep(self):
        """Test that allow() sweeps idle clients once the interval passes."""
        limiter = RateLimiter(limit=5, sweep_interval=100.0)
        limiter.allow("a", now=0.0)
        limiter.allow("b", now=10.0)
        assert limiter.tracked_clients() == 2

        limiter.allow("c", now=50.0)
        assert limiter.tracked_clients() == 3

        limiter.allow("c", now=200.0)
        assert limiter.tracked_clients() == 1

    def test_evicted_client_starts_fresh(self):
        """Test that an evicted client gets a new window."""
        limiter = RateLimiter(limit=1, sweep_interval=None)
        assert limiter.allow("a", now=0.0)

        limiter.purge_idle(now=100.0)
        assert limiter.tracked_clients() == 0

        assert limiter.allow("a", now=100.0)
        assert not limiter.allow("a", now=100.0)


class TestConcurrency:
    """Test limiter behaviour under concurrent calls."""

    def test_same_client_never_exceeds_limit(self):
        """Test that simultaneous requests for one client respect the quota."""
        limiter = RateLimiter(limit=10, sweep_interval=None)
        threads_count = 50
        barrier = threading.Barrier(threads_count)
        results = []
        results_lock = threading.Lock()

        def worker():
            barrier.wait()
            admitted = limiter.allow("shared", now=0.0)
            with results_lock:
                results.append(admitted)

        threads = [threading.Thread(target=worker) for _ in range(threads_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 10
        assert results.count(False) == 40

    def test_concurrent_clients_with_purges(self):
        """Test that sweeps running alongside requests do not lose admissions."""
        limiter = RateLimiter(limit=3, sweep_interval=None)
        admitted = {f"client-{i}": 0 for i in range(20)}
        admitted_lock = threading.Lock()

        def requester(client_id):
            for _ in range(5):
                if limiter.allow(client_id, now=0.0):
                    with admitted_lock:
                        admitted[client_id] += 1

        def purger():
            for _ in range(50):
                limiter.purge_idle(now=0.0)

        threads = [threading.Thread(target=requester, args=(c,)) for c in admitted]
        threads.append(threading.Thread(target=purger))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert all(count == 3 for count in admitted.values())
