"""ASGI entrypoint for the progress API."""

from nutrition_progress.api.app import create_app
from nutrition_progress.containers import build_container

app = create_app(build_container())
