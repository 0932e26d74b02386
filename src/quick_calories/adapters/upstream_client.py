"""Upstream chat-completions client used by the gateway."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from quick_calories.services.estimation import GatewayResponse


class UpstreamClient(Protocol):
    """Interface for relaying a request body to the completion API."""

    async def forward(self, body: bytes, authorization: str) -> GatewayResponse:
        """Forward the body verbatim and return the upstream status and body."""


@dataclass
class HttpxUpstreamClient(UpstreamClient):
    """HTTPX-backed upstream client."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 60.0

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 60.0) -> "HttpxUpstreamClient":
        """Create an upstream client with a managed httpx session."""
        return cls(
            url=url, http_client=httpx.AsyncClient(), timeout_seconds=timeout_seconds
        )

    async def forward(self, body: bytes, authorization: str) -> GatewayResponse:
        """POST the body to the upstream endpoint."""
        response = await self.http_client.post(
            self.url,
            content=body,
            headers={
                "Content-Type": "application/json",
                "Authorization": authorization,
            },
            timeout=self.timeout_seconds,
        )
        return GatewayResponse(status_code=response.status_code, content=response.content)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
