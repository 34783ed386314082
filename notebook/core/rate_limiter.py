"""
API Rate Limiter.

Fixed-size sliding window per client, configured from the rate_limiting
section of config/settings/security.yaml. Uses in-memory storage, so the
limit applies per process.
"""

import time

from notebook.core.logging import get_logger

logger = get_logger(__name__)


class RateLimitResult:
    """Result of a rate limit check."""

    def __init__(self, allowed: bool, retry_after_seconds: int = 0) -> None:
        self.allowed = allowed
        self.retry_after_seconds = retry_after_seconds


class SlidingWindowRateLimiter:
    """
    Allows `max_requests` per client within any `window_seconds` span.

    Clients with no request inside the window are swept out at most once
    per window, so memory is bounded by the clients seen in the last two
    windows.

    For distributed deployments, replace the in-memory dict with Redis
    INCR + EXPIRE for atomic rate counting.
    """

    def __init__(self, max_requests: int, window_seconds: int) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._requests: dict[str, list[float]] = {}
        self._last_sweep: float | None = None

    @property
    def tracked_clients(self) -> int:
        """Number of clients currently holding request timestamps."""
        return len(self._requests)

    def check(self, client_id: str, now: float | None = None) -> RateLimitResult:
        """
        Record a request from a client if it is within the limit.

        Args:
            client_id: Client identifier, usually its IP address
            now: Monotonic timestamp, defaults to the current time

        Returns:
            RateLimitResult indicating whether the request is allowed
        """
        now = time.monotonic() if now is None else now
        cutoff = now - self.window_seconds
        self._sweep(now, cutoff)

        timestamps = [ts for ts in self._requests.get(client_id, ()) if ts > cutoff]

        if len(timestamps) >= self.max_requests:
            self._requests[client_id] = timestamps
            retry_after = int(self.window_seconds - (now - timestamps[0])) + 1
            logger.warning(
                "Rate limit exceeded",
                extra={"client": client_id, "limit": self.max_requests},
            )
            return RateLimitResult(allowed=False, retry_after_seconds=retry_after)

        timestamps.append(now)
        self._requests[client_id] = timestamps
        return RateLimitResult(allowed=True)

    def _sweep(self, now: float, cutoff: float) -> None:
        """Forget clients whose newest request has left the window."""
        if self._last_sweep is None:
            self._last_sweep = now
            return
        if now - self._last_sweep < self.window_seconds:
            return

        expired = [key for key, stamps in self._requests.items() if stamps[-1] <= cutoff]
        for key in expired:
            del self._requests[key]
        self._last_sweep = now
        if expired:
            logger.debug(
                "Rate limiter swept idle clients",
                extra={"removed": len(expired), "remaining": len(self._requests)},
            )

    def reset(self) -> None:
        """Forget every recorded request."""
        self._requests.clear()
        self._last_sweep = None
