"""Daily quota for AI estimation requests."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from quick_calories.domain.settings import RateLimitState, UserSettings
from quick_calories.errors import RateLimitExceeded
from quick_calories.services.user_settings import UserSettingsRepository

FREE_DAILY_QUOTA = 1

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class RateLimiter:
    """Counter with a calendar-day reset and a bypass for paying users.

    The counter lives in the settings repository. ``slot`` serialises the
    check, the request and the increment so concurrent dispatches cannot both
    pass the check before either one is counted.
    """

    repository: UserSettingsRepository
    daily_quota: int = FREE_DAILY_QUOTA
    timezone_name: str | None = None
    clock: Callable[[], datetime] = _utc_now
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def can_proceed(self) -> bool:
        """Return True when another request is allowed today."""
        settings = self._reset_if_new_day(self.repository.get_settings())
        if _has_bypass(settings):
            return True
        return settings.rate_limit.request_count < self.daily_quota

    def record_success(self) -> None:
        """Count a completed request against today's quota."""
        settings = self.repository.get_settings()
        state = settings.rate_limit
        self.repository.save_settings(
            replace(
                settings,
                rate_limit=replace(state, request_count=state.request_count + 1),
            )
        )

    def state(self) -> RateLimitState:
        return self.repository.get_settings().rate_limit

    def api_key(self) -> str | None:
        """Return the user's own API key, if configured."""
        return self.repository.get_settings().openai_api_key

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold the limiter for one request; raise when the quota is used up."""
        async with self._lock:
            if not self.can_proceed():
                _logger.info("AI request rejected: daily quota exhausted")
                raise RateLimitExceeded
            yield

    def _reset_if_new_day(self, settings: UserSettings) -> UserSettings:
        now = self.clock()
        state = settings.rate_limit
        if state.last_reset_at is None:
            updated = replace(state, last_reset_at=now)
        elif self._local_date(state.last_reset_at) != self._local_date(now):
            updated = RateLimitState(request_count=0, last_reset_at=now)
        else:
            return settings
        settings = replace(settings, rate_limit=updated)
        self.repository.save_settings(settings)
        return settings

    def _local_date(self, moment: datetime) -> date:
        if self.timezone_name:
            return moment.astimezone(ZoneInfo(self.timezone_name)).date()
        return moment.astimezone().date()


def _has_bypass(settings: UserSettings) -> bool:
    return bool(settings.openai_api_key) or settings.has_active_subscription
