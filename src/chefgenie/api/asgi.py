"""ASGI entrypoint for the recipe generation API."""

from chefgenie.api.app import create_app
from chefgenie.containers import build_container

app = create_app(build_container())
