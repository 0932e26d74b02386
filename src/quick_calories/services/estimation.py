"""Nutrition estimation through the AI gateway."""

import json
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from quick_calories.domain.nutrition import CompletionEnvelope, NutritionEstimate
from quick_calories.errors import ApiError, InvalidResponse
from quick_calories.services.images import ImageEncoder
from quick_calories.services.rate_limiter import RateLimiter

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 200

TEXT_SYSTEM_PROMPT = (
    "You are a nutritional database. Convert the user's text into a JSON object "
    "with keys: calories, protein, carbs, fat, and food_name. "
    "Use average nutritional values. Return ONLY the JSON."
)

IMAGE_SYSTEM_PROMPT = (
    "You are a nutritional database. Analyze the food in this image and return a "
    "JSON object with keys: calories, protein, carbs, fat, and food_name. "
    "Use average nutritional values for a typical serving. "
    "Return ONLY the JSON, no additional text."
)

DEFAULT_IMAGE_CONTEXT = "Analyze this food image and provide nutritional information."

_FENCE = "```"

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayResponse:
    """Raw HTTP status and body returned by the gateway."""

    status_code: int
    content: bytes


class GatewayClient(Protocol):
    """Interface for sending completion requests to the gateway."""

    async def post_completion(
        self, payload: dict[str, object], api_key: str | None = None
    ) -> GatewayResponse:
        """Send a completion request; raise NetworkError on transport failure."""


def build_text_request(
    description: str,
    *,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict[str, object]:
    """Build a completion request for a free-text food description."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": TEXT_SYSTEM_PROMPT},
            {"role": "user", "content": description},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }


def build_image_request(
    image_data_url: str,
    context: str | None = None,
    *,
    model: str = DEFAULT_MODEL,
    temperature: float = DEFAULT_TEMPERATURE,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict[str, object]:
    """Build a vision completion request for an encoded photo."""
    user_content: list[dict[str, object]] = [
        {"type": "text", "text": context or DEFAULT_IMAGE_CONTEXT},
        {"type": "image_url", "image_url": {"url": image_data_url}},
    ]
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": IMAGE_SYSTEM_PROMPT},
            {"role": "user", "content": user_content},
        ],
        "temperature": temperature,
        "max_tokens": max_tokens,
    }


def strip_code_fence(content: str) -> str:
    """Remove a markdown code fence the model sometimes wraps JSON in."""
    cleaned = content.strip()
    if cleaned.startswith(_FENCE):
        cleaned = cleaned.removeprefix(_FENCE).removeprefix("json")
    if cleaned.endswith(_FENCE):
        cleaned = cleaned.removesuffix(_FENCE)
    return cleaned.strip()


def parse_completion(body: bytes | str) -> NutritionEstimate:
    """Decode a chat-completions body into a nutrition estimate."""
    try:
        envelope = CompletionEnvelope.model_validate_json(body)
    except ValidationError as exc:
        raise InvalidResponse from exc
    if not envelope.choices:
        raise InvalidResponse
    content = strip_code_fence(envelope.choices[0].message.content)
    try:
        return NutritionEstimate.model_validate_json(content)
    except ValidationError as exc:
        raise InvalidResponse from exc


def api_error_message(status_code: int, body: bytes) -> str:
    """Extract ``error.message`` from an error body, else ``HTTP <status>``."""
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return f"HTTP {status_code}"


@dataclass
class NutritionEstimator:
    """Builds estimation requests, enforces the quota and parses results."""

    client: GatewayClient
    rate_limiter: RateLimiter
    image_encoder: ImageEncoder
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS

    async def estimate_from_text(self, description: str) -> NutritionEstimate:
        """Estimate nutrition for a free-text description."""
        async with self.rate_limiter.slot():
            payload = build_text_request(
                description,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            return await self._send(payload)

    async def estimate_from_image(
        self, image_bytes: bytes, context: str | None = None
    ) -> NutritionEstimate:
        """Estimate nutrition for a photo, with optional text context."""
        async with self.rate_limiter.slot():
            data_url = self.image_encoder.encode(image_bytes)
            payload = build_image_request(
                data_url,
                context,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            return await self._send(payload)

    async def dispatch(self, payload: dict[str, object]) -> NutritionEstimate:
        """Send a prebuilt request under the daily quota."""
        async with self.rate_limiter.slot():
            return await self._send(payload)

    async def _send(self, payload: dict[str, object]) -> NutritionEstimate:
        response = await self.client.post_completion(
            payload, api_key=self.rate_limiter.api_key()
        )
        if response.status_code != 200:  # noqa: PLR2004
            message = api_error_message(response.status_code, response.content)
            _logger.warning(
                "Estimation failed: status=%s message=%s",
                response.status_code,
                message,
            )
            raise ApiError(message)
        estimate = parse_completion(response.content)
        self.rate_limiter.record_success()
        _logger.info(
            "Estimated nutrition: food=%s calories=%s",
            estimate.food_name,
            estimate.calories,
        )
        return estimate
