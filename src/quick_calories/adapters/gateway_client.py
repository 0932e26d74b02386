"""HTTP client for the AI request gateway."""

from dataclasses import dataclass

import httpx

from quick_calories.errors import NetworkError
from quick_calories.services.estimation import GatewayClient, GatewayResponse

REQUEST_TIMEOUT_SECONDS = 30.0


@dataclass
class HttpxGatewayClient(GatewayClient):
    """HTTPX-backed gateway client."""

    proxy_url: str
    app_secret: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = REQUEST_TIMEOUT_SECONDS

    @classmethod
    def create(
        cls,
        proxy_url: str,
        app_secret: str,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
    ) -> "HttpxGatewayClient":
        """Create a gateway client with a managed httpx session."""
        return cls(
            proxy_url=proxy_url,
            app_secret=app_secret,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def post_completion(
        self, payload: dict[str, object], api_key: str | None = None
    ) -> GatewayResponse:
        """POST a completion request; the user's key rides in Authorization."""
        headers = {
            "Content-Type": "application/json",
            "x-app-secret": self.app_secret,
        }
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        try:
            response = await self.http_client.post(
                self.proxy_url,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise NetworkError(exc) from exc
        return GatewayResponse(status_code=response.status_code, content=response.content)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
