"""User settings and rate-limit state."""

from dataclasses import dataclass, field
from datetime import datetime

from quick_calories.domain.profile import DailyTargets


@dataclass(frozen=True)
class RateLimitState:
    """Daily AI request counter and the moment it was last reset."""

    request_count: int = 0
    last_reset_at: datetime | None = None


@dataclass(frozen=True)
class UserSettings:
    """Persisted user preferences."""

    targets: DailyTargets = field(default_factory=DailyTargets)
    openai_api_key: str | None = None
    has_completed_onboarding: bool = False
    has_active_subscription: bool = False
    rate_limit: RateLimitState = field(default_factory=RateLimitState)
