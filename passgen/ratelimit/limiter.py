"""
Sliding-window rate limiting for password requests.

Each client owns a window of admission timestamps from the trailing
minute. Windows are pruned lazily on every check, and clients whose
windows have emptied are evicted periodically so the map does not grow
with every client ever seen.
"""

import logging
import threading
import time
from typing import Callable, Dict, Hashable, List, Optional

logger = logging.getLogger(__name__)


class _Window:
    """Timestamps for one client, guarded by its own lock."""

    __slots__ = ("lock", "timestamps", "evicted")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.timestamps: List[float] = []
        self.evicted = False

    def prune(self, now: float, window_seconds: float) -> None:
        cutoff = now - window_seconds
        self.timestamps = [t for t in self.timestamps if t > cutoff]


class RateLimiter:
    """Per-client sliding-window rate limiter."""

    WINDOW_SECONDS = 60.0
    SWEEP_INTERVAL = 300.0  # 5 minutes between idle-client sweeps

    def __init__(self,
                 limit: int = 10,
                 window_seconds: float = WINDOW_SECONDS,
                 sweep_interval: Optional[float] = SWEEP_INTERVAL,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize rate limiter.

        Args:
            limit: Requests admitted per client per window
            window_seconds: Length of the sliding window
            sweep_interval: Seconds between automatic idle-client sweeps
                (None disables them)
            clock: Time source returning seconds, used when no ``now`` is given
        """
        if limit < 1:
            raise ValueError(f"Rate limit must be at least 1, got {limit}")

        self.limit = limit
        self.window_seconds = window_seconds
        self.sweep_interval = sweep_interval
        self.clock = clock

        self._windows: Dict[Hashable, _Window] = {}
        self._map_lock = threading.Lock()
        self._last_sweep: Optional[float] = None

    def allow(self, client_id: Hashable, now: Optional[float] = None) -> bool:
        """Check a request against the configured limit."""
        return self.check_rate_limit(client_id, self.limit, now)

    def check_rate_limit(self, client_id: Hashable, limit_per_minute: int,
                         now: Optional[float] = None) -> bool:
        """
        Admit or deny a request from ``client_id``.

        Admission records ``now`` in the client's window; denial leaves the
        window untouched apart from pruning.

        Args:
            client_id: Identifier of the requesting client
            limit_per_minute: Requests admitted per window
            now: Current time in seconds (defaults to the limiter clock)

        Returns:
            True if the request is admitted, False if the limit is reached
        """
        if now is None:
            now = self.clock()

        self._maybe_sweep(now)

        while True:
            with self._map_lock:
                window = self._windows.get(client_id)
                if window is None:
                    window = self._windows[client_id] = _Window()

            with window.lock:
                # Evicted between lookup and lock; fetch the replacement
                if window.evicted:
                    continue

                window.prune(now, self.window_seconds)

                if len(window.timestamps) >= limit_per_minute:
                    logger.debug(f"Rate limit reached for client {client_id}")
                    return False

                window.timestamps.append(now)
                return True

    def remaining(self, client_id: Hashable, now: Optional[float] = None) -> int:
        """Number of requests ``client_id`` may still make in the current window."""
        if now is None:
            now = self.clock()

        with self._map_lock:
            window = self._windows.get(client_id)
        if window is None:
            return self.limit

        with window.lock:
            window.prune(now, self.window_seconds)
            return max(0, self.limit - len(window.timestamps))

    def purge_idle(self, now: Optional[float] = None) -> int:
        """
        Drop clients whose pruned windows are empty.

        Returns:
            Number of clients evicted
        """
        if now is None:
            now = self.clock()

        evicted = 0
        with self._map_lock:
            for client_id, window in list(self._windows.items()):
                with window.lock:
                    window.prune(now, self.window_seconds)
                    if not window.timestamps:
                        window.evicted = True
                        del self._windows[client_id]
                        evicted += 1

        if evicted:
            logger.debug(f"Evicted {evicted} idle rate-limit windows")
        return evicted

    def tracked_clients(self) -> int:
        """Number of clients currently holding a window."""
        with self._map_lock:
            return len(self._windows)

    def _maybe_sweep(self, now: float) -> None:
        if self.sweep_interval is None:
            return

        with self._map_lock:
            if self._last_sweep is None:
                self._last_sweep = now
                return
            if now - self._last_sweep < self.sweep_interval:
                return
            self._last_sweep = now

        self.purge_idle(now)
