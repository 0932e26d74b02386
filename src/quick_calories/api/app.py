"""FastAPI application factory for the AI request gateway."""

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from quick_calories.app_logging import configure_logging
from quick_calories.containers import GatewayContainer

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-app-secret, Authorization",
}

_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(container: GatewayContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.api_route("/api/proxy", methods=_ALL_METHODS)
    async def proxy(request: Request) -> Response:
        """Authenticate the app and relay a completion request upstream."""
        state_container: GatewayContainer = request.app.state.container
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        if request.method != "POST":
            return _error(405, "Method not allowed")

        app_secret = request.headers.get("x-app-secret")
        if app_secret != state_container.settings.app_secret:
            logger.warning("Rejected gateway request with a bad app secret")
            return _error(401, "Unauthorized")

        authorization = request.headers.get("authorization")
        if not authorization:
            server_key = state_container.settings.openai_api_key
            if not server_key:
                logger.error("No OPENAI_API_KEY configured for the gateway")
                return _error(500, "Internal server error")
            authorization = f"Bearer {server_key}"

        body = await request.body()
        try:
            upstream = await state_container.upstream_client.forward(body, authorization)
            json.loads(upstream.content)
        except (httpx.HTTPError, ValueError):
            logger.exception("Proxy error")
            return _error(500, "Internal server error")

        logger.info("Relayed completion request: status=%s", upstream.status_code)
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=CORS_HEADERS,
            media_type="application/json",
        )

    return app


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        {"error": {"message": message}},
        status_code=status_code,
        headers=CORS_HEADERS,
    )
