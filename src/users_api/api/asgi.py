"""ASGI factory for serving the users API with uvicorn's ``--factory`` mode.

    uvicorn --factory users_api.api.asgi:build_app
"""

from fastapi import FastAPI

from users_api.api.app import create_app
from users_api.config import Settings
from users_api.containers import build_container


def build_app(settings: Settings | None = None) -> FastAPI:
    """Build the app around a container wired from the given settings."""
    return create_app(build_container(settings))
