"""Shared test fixtures."""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

import pytest

from quick_calories.config import Settings
from quick_calories.domain.entries import FoodEntry, SavedFood, WorkoutEntry
from quick_calories.domain.settings import UserSettings
from quick_calories.services.entries import (
    EntryRepository,
    EntryService,
    SavedFoodRepository,
)
from quick_calories.services.estimation import (
    GatewayClient,
    GatewayResponse,
    NutritionEstimator,
)
from quick_calories.services.images import ImageEncoder
from quick_calories.services.rate_limiter import RateLimiter
from quick_calories.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)

APPLE_JSON = (
    '{"food_name":"Apple","calories":95,"protein":0.5,"carbs":25,"fat":0.3}'
)


def completion_body(content: str | None) -> bytes:
    """Build a chat-completions body with a single choice."""
    return json.dumps(
        {
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
        }
    ).encode()


@dataclass
class FakeClock:
    """Settable clock for time-dependent services."""

    now: datetime = field(default_factory=lambda: datetime(2026, 3, 2, 12, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    settings: UserSettings = field(default_factory=UserSettings)
    saves: int = 0

    def get_settings(self) -> UserSettings:
        return self.settings

    def save_settings(self, settings: UserSettings) -> None:
        self.settings = settings
        self.saves += 1


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    food: dict[UUID, FoodEntry] = field(default_factory=dict)
    workouts: dict[UUID, WorkoutEntry] = field(default_factory=dict)

    def add_food_entry(self, entry: FoodEntry) -> None:
        self.food[entry.id] = entry

    def update_food_entry(self, entry: FoodEntry) -> None:
        self.food[entry.id] = entry

    def delete_food_entry(self, entry_id: UUID) -> None:
        self.food.pop(entry_id, None)

    def list_food_entries(self, start: datetime, end: datetime) -> list[FoodEntry]:
        return [entry for entry in self.food.values() if start <= entry.logged_at < end]

    def add_workout(self, workout: WorkoutEntry) -> None:
        self.workouts[workout.id] = workout

    def update_workout(self, workout: WorkoutEntry) -> None:
        self.workouts[workout.id] = workout

    def delete_workout(self, workout_id: UUID) -> None:
        self.workouts.pop(workout_id, None)

    def list_workouts(self, start: datetime, end: datetime) -> list[WorkoutEntry]:
        return [
            workout
            for workout in self.workouts.values()
            if start <= workout.logged_at < end
        ]


@dataclass
class InMemorySavedFoodRepository(SavedFoodRepository):
    """In-memory saved food repository for tests."""

    foods: list[SavedFood] = field(default_factory=list)

    def add_saved_food(self, food: SavedFood) -> None:
        self.foods.insert(0, food)

    def list_saved_foods(self) -> list[SavedFood]:
        return list(self.foods)

    def delete_saved_food(self, food_id: UUID) -> None:
        self.foods = [food for food in self.foods if food.id != food_id]


@dataclass
class FakeGatewayClient(GatewayClient):
    """Fake gateway client that records requests and replays responses."""

    responses: list[GatewayResponse | BaseException] = field(default_factory=list)
    requests: list[tuple[dict[str, object], str | None]] = field(
        default_factory=list
    )

    def reply(self, status_code: int, content: bytes) -> None:
        self.responses.append(GatewayResponse(status_code=status_code, content=content))

    async def post_completion(
        self, payload: dict[str, object], api_key: str | None = None
    ) -> GatewayResponse:
        self.requests.append((payload, api_key))
        result = self.responses.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


@dataclass
class FakeImageEncoder(ImageEncoder):
    """Fake encoder returning a fixed data URL."""

    calls: list[bytes] = field(default_factory=list)

    def encode(self, image_bytes: bytes) -> str:
        self.calls.append(image_bytes)
        return "data:image/jpeg;base64,ZmFrZQ=="


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_secret="app-secret",
        openai_api_key="server-key",
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def rate_limiter(
    settings_repository: InMemoryUserSettingsRepository, clock: FakeClock
) -> RateLimiter:
    return RateLimiter(settings_repository, timezone_name="UTC", clock=clock)


@pytest.fixture
def gateway_client() -> FakeGatewayClient:
    return FakeGatewayClient()


@pytest.fixture
def image_encoder() -> FakeImageEncoder:
    return FakeImageEncoder()


@pytest.fixture
def estimator(
    gateway_client: FakeGatewayClient,
    rate_limiter: RateLimiter,
    image_encoder: FakeImageEncoder,
) -> NutritionEstimator:
    return NutritionEstimator(
        client=gateway_client,
        rate_limiter=rate_limiter,
        image_encoder=image_encoder,
    )


@pytest.fixture
def user_settings_service(
    settings_repository: InMemoryUserSettingsRepository,
) -> UserSettingsService:
    return UserSettingsService(settings_repository)


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def entry_service(
    entry_repository: InMemoryEntryRepository, clock: FakeClock
) -> EntryService:
    return EntryService(entry_repository, InMemorySavedFoodRepository(), clock=clock)
