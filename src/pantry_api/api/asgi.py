"""ASGI entrypoint for the pantry API."""

from pantry_api.api.app import create_app
from pantry_api.containers import build_container

app = create_app(build_container())
