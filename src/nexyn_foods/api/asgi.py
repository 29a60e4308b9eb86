"""ASGI entrypoint for the Nexyn Foods API."""

from nexyn_foods.api.app import create_app
from nexyn_foods.containers import build_container

app = create_app(build_container())
