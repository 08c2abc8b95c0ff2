import logging
import threading
import time
from collections import Counter
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class PolitenessLimiter:
    """Enforces a minimum delay between requests to the same host.

    Each host has its own lock; the check of the previous request time, any
    sleep, and the recording of the new request time all happen while that
    lock is held, so concurrent callers for one host are spaced by at least
    `delay_seconds` while requests to other hosts proceed independently.

    Hosts whose last request is older than `delay_seconds` and that have no
    caller in `wait` are dropped from the tables; a dropped host behaves like
    one never seen, which is what its elapsed delay already allows.
    """

    def __init__(
        self,
        delay_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delay_seconds = max(0.0, float(delay_seconds))
        self._clock = clock
        self._sleep = sleep
        self._registry_lock = threading.Lock()
        self._host_locks: Dict[str, threading.Lock] = {}
        self._last_request: Dict[str, float] = {}
        self._active: Counter = Counter()
        self._last_sweep: Optional[float] = None

    def _checkout(self, host: str) -> threading.Lock:
        with self._registry_lock:
            self._sweep()
            lock = self._host_locks.get(host)
            if lock is None:
                lock = threading.Lock()
                self._host_locks[host] = lock
            self._active[host] += 1
            return lock

    def _checkin(self, host: str) -> None:
        with self._registry_lock:
            self._active[host] -= 1
            if self._active[host] <= 0:
                del self._active[host]

    def _sweep(self) -> None:
        # Caller holds the registry lock; runs at most once per delay period.
        now = self._clock()
        if self._last_sweep is not None and now - self._last_sweep < self.delay_seconds:
            return
        self._last_sweep = now
        stale = [
            host for host, last in self._last_request.items()
            if host not in self._active and last + self.delay_seconds <= now
        ]
        for host in stale:
            del self._last_request[host]
            self._host_locks.pop(host, None)
        if stale:
            logger.debug("Dropped pacing state for %s idle hosts", len(stale))

    def wait(self, host: str) -> float:
        """Block until a request to `host` may start; return seconds waited.

        The first request to a host never blocks.
        """
        host = (host or "").lower()
        lock = self._checkout(host)
        try:
            with lock:
                waited = 0.0
                with self._registry_lock:
                    last = self._last_request.get(host)
                if last is not None:
                    remaining = last + self.delay_seconds - self._clock()
                    if remaining > 0:
                        logger.debug("Politeness delay %.3fs for %s", remaining, host)
                        self._sleep(remaining)
                        waited = remaining
                with self._registry_lock:
                    self._last_request[host] = self._clock()
                return waited
        finally:
            self._checkin(host)

    def last_request_time(self, host: str) -> Optional[float]:
        host = (host or "").lower()
        with self._registry_lock:
            return self._last_request.get(host)

    def tracked_hosts(self) -> int:
        with self._registry_lock:
            return len(self._host_locks)
