"""In-memory sliding-window rate limiting keyed by client address."""

import math
import time

from fastapi import Request

from astrovista.errors import RateLimitError


class RateLimiter:
    """Allow at most `limit` requests per `window` seconds for each caller."""

    def __init__(self, limit: int, window: float, clock=time.monotonic):
        self.limit = limit
        self.window = window
        self._clock = clock
        # {caller: [timestamp, ...]}
        self._requests: dict[str, list[float]] = {}

    def hit(self, caller: str) -> None:
        """Record a request for caller, raising RateLimitError if over the limit."""
        now = self._clock()
        self._sweep(now)
        recent = [t for t in self._requests.get(caller, []) if now - t < self.window]
        if len(recent) >= self.limit:
            self._requests[caller] = recent
            retry_after = math.ceil(self.window - (now - recent[0]))
            raise RateLimitError(retry_after=max(retry_after, 1))

        recent.append(now)
        self._requests[caller] = recent

    def _sweep(self, now: float) -> None:
        """Forget callers whose newest request has left the window."""
        stale = [c for c, ts in self._requests.items() if not ts or now - ts[-1] >= self.window]
        for caller in stale:
            self._requests.pop(caller, None)

    def tracked_callers(self) -> int:
        return len(self._requests)


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def limit_ingest(request: Request) -> None:
    """FastAPI dependency applying the app's ingest rate limiter."""
    limiter: RateLimiter = request.app.state.ingest_limiter
    limiter.hit(client_key(request))
