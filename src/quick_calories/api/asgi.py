"""ASGI entrypoint for the request gateway."""

from quick_calories.api.app import create_app
from quick_calories.containers import build_gateway_container

app = create_app(build_gateway_container())
