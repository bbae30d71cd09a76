"""User-related business logic."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from bson import ObjectId

from users_api.domain.models import NewUser, UserDocument


class UserStoreError(RuntimeError):
    """Raised when the user store fails or times out."""


class UserRepository(Protocol):
    """Persistence interface for user records."""

    def ping(self) -> None:
        """Check that the store is reachable."""

    def list_users(self) -> list[UserDocument]:
        """Return every stored user document."""

    def insert_user(self, user: NewUser) -> str:
        """Insert a user and return the store-assigned id."""

    def delete_user(self, user_id: ObjectId) -> int:
        """Delete a user by id and return the number of deleted documents."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class UserService:
    """Application service for user records."""

    repository: UserRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def check_store(self) -> None:
        """Ping the store, raising UserStoreError when it is unreachable."""
        self.repository.ping()

    def list_users(self) -> list[UserDocument]:
        """Return all users in store order."""
        return self.repository.list_users()

    def create_user(self, name: str, email: str, age: int) -> str:
        """Stamp the creation time, insert the user and return its id."""
        user = NewUser(name=name, email=email, age=age, created_at=self.clock())
        return self.repository.insert_user(user)

    def delete_user(self, user_id: ObjectId) -> bool:
        """Delete a user, returning false when no record matched."""
        return self.repository.delete_user(user_id) > 0
