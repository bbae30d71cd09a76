"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from pymongo import MongoClient

from users_api.adapters.mongo_user_repository import MongoUserRepository
from users_api.config import Settings
from users_api.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    mongo_client: MongoClient = MongoClient(
        resolved_settings.mongo_uri,
        serverSelectionTimeoutMS=int(resolved_settings.connect_timeout_seconds * 1000),
        tz_aware=True,
    )
    collection = mongo_client[resolved_settings.mongo_database][
        resolved_settings.mongo_collection
    ]
    user_repository = MongoUserRepository(
        collection=collection,
        timeout_seconds=resolved_settings.request_timeout_seconds,
        ping_timeout_seconds=resolved_settings.connect_timeout_seconds,
    )
    user_service = UserService(user_repository)

    async def close_resources() -> None:
        mongo_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        close_resources=close_resources,
    )
