"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from quick_calories.adapters.gateway_client import HttpxGatewayClient
from quick_calories.adapters.supabase_entry_repository import SupabaseEntryRepository
from quick_calories.adapters.supabase_saved_food_repository import (
    SupabaseSavedFoodRepository,
)
from quick_calories.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from quick_calories.adapters.upstream_client import HttpxUpstreamClient, UpstreamClient
from quick_calories.config import Settings, parse_timezone
from quick_calories.services.entries import EntryService
from quick_calories.services.estimation import NutritionEstimator
from quick_calories.services.images import JpegImageEncoder
from quick_calories.services.rate_limiter import RateLimiter
from quick_calories.services.summary import SummaryService
from quick_calories.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds the client-side services that talk to the gateway."""

    settings: Settings
    user_settings_service: UserSettingsService
    rate_limiter: RateLimiter
    estimator: NutritionEstimator
    entry_service: EntryService
    summary_service: SummaryService
    close_resources: Callable[[], Awaitable[None]]


@dataclass
class GatewayContainer:
    """Holds the dependencies of the forwarding gateway."""

    settings: Settings
    upstream_client: UpstreamClient
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default client-side container."""
    resolved_settings = settings or Settings()
    if not resolved_settings.supabase_url or not resolved_settings.supabase_service_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be configured")
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    owner_id = resolved_settings.owner_id
    timezone_name = parse_timezone(resolved_settings.timezone)
    settings_repository = SupabaseUserSettingsRepository(supabase_client, owner_id)
    entry_repository = SupabaseEntryRepository(supabase_client, owner_id)
    saved_food_repository = SupabaseSavedFoodRepository(supabase_client, owner_id)
    user_settings_service = UserSettingsService(settings_repository)
    rate_limiter = RateLimiter(settings_repository, timezone_name=timezone_name)
    gateway_client = HttpxGatewayClient.create(
        proxy_url=resolved_settings.proxy_url,
        app_secret=resolved_settings.app_secret,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    estimator = NutritionEstimator(
        client=gateway_client,
        rate_limiter=rate_limiter,
        image_encoder=JpegImageEncoder(),
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        max_tokens=resolved_settings.openai_max_tokens,
    )
    entry_service = EntryService(entry_repository, saved_food_repository)
    summary_service = SummaryService(
        repository=entry_repository,
        settings_service=user_settings_service,
        timezone_name=timezone_name,
    )

    async def close_resources() -> None:
        await gateway_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_settings_service=user_settings_service,
        rate_limiter=rate_limiter,
        estimator=estimator,
        entry_service=entry_service,
        summary_service=summary_service,
        close_resources=close_resources,
    )


def build_gateway_container(settings: Settings | None = None) -> GatewayContainer:
    """Create the container for the serverless gateway."""
    resolved_settings = settings or Settings()
    upstream_client = HttpxUpstreamClient.create(
        resolved_settings.upstream_url,
        timeout_seconds=resolved_settings.upstream_timeout_seconds,
    )

    async def close_resources() -> None:
        await upstream_client.close()

    return GatewayContainer(
        settings=resolved_settings,
        upstream_client=upstream_client,
        close_resources=close_resources,
    )
