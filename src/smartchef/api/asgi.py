"""ASGI entrypoint for the local SmartChef API."""

from smartchef.api.app import create_app
from smartchef.containers import build_container

app = create_app(build_container())
