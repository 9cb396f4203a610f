"""ASGI entrypoint for the life planner API."""

from life_planner.api.app import create_app
from life_planner.containers import build_container

app = create_app(build_container())
