"""ASGI entrypoint for the fluid tracker API."""

from fluid_tracker.api.app import create_app
from fluid_tracker.containers import build_container

app = create_app(build_container())
