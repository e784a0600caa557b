"""
Per supplier-account request quotas.

Each account has a daily window (UTC calendar date) and a per-minute window
(epoch minute). Windows reset lazily on the next acquisition attempt.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from config import logger


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RateLimitState:
    requests_today: int
    requests_this_minute: int
    last_reset_day: str
    last_reset_minute: int


class RateLimiter:
    """Sliding daily and per-minute counters keyed by supplier account."""

    def __init__(
        self,
        per_day: int,
        per_minute: int,
        clock: Optional[Callable[[], datetime]] = None,
        name: str = "supplier"
    ):
        self.per_day = per_day
        self.per_minute = per_minute
        self._clock = clock or _utcnow
        self._states: Dict[str, RateLimitState] = {}
        self.logger = logger.bind(component="rate_limiter", supplier=name)

    def _windows(self) -> tuple:
        now = self._clock()
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        today = now.date().isoformat()
        minute = int(now.replace(tzinfo=timezone.utc).timestamp() // 60)
        return today, minute

    def try_acquire(self, account_id: str) -> bool:
        """Take one request slot for ``account_id``.

        Returns False without consuming anything when either window is full.
        The whole check-and-increment runs without yielding to the event loop.
        """
        today, minute = self._windows()
        state = self._states.get(account_id)
        if state is None:
            state = RateLimitState(0, 0, today, minute)
            self._states[account_id] = state

        if state.last_reset_day != today:
            state.requests_today = 0
            state.last_reset_day = today

        if state.last_reset_minute != minute:
            state.requests_this_minute = 0
            state.last_reset_minute = minute

        if state.requests_today >= self.per_day:
            self.logger.warning("Daily request limit reached", account_id=account_id, limit=self.per_day)
            return False

        if state.requests_this_minute >= self.per_minute:
            self.logger.warning("Per-minute request limit reached", account_id=account_id, limit=self.per_minute)
            return False

        state.requests_today += 1
        state.requests_this_minute += 1
        return True

    def usage(self, account_id: str) -> Optional[RateLimitState]:
        return self._states.get(account_id)
