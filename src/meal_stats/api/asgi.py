"""ASGI entrypoint for the meal statistics API."""

from meal_stats.api.app import create_app
from meal_stats.containers import build_container

app = create_app(build_container())
