"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field

import bson
import pytest
from bson import ObjectId

from users_api.config import Settings
from users_api.containers import AppContainer
from users_api.domain.models import NewUser, UserDocument
from users_api.services.users import UserRepository, UserService, UserStoreError


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    documents: dict[ObjectId, UserDocument] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    fail: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def ping(self) -> None:
        self._record("ping")

    def list_users(self) -> list[UserDocument]:
        self._record("list_users")
        with self._lock:
            return [
                {"_id": str(user_id), **document}
                for user_id, document in self.documents.items()
            ]

    def insert_user(self, user: NewUser) -> str:
        self._record("insert_user")
        user_id = ObjectId()
        with self._lock:
            self.documents[user_id] = user.to_document()
        return str(user_id)

    def delete_user(self, user_id: ObjectId) -> int:
        self._record("delete_user")
        with self._lock:
            return 1 if self.documents.pop(user_id, None) is not None else 0

    def _record(self, name: str) -> None:
        with self._lock:
            self.calls.append(name)
        if self.fail:
            raise UserStoreError(f"{name} failed")


@dataclass
class FakeInsertResult:
    inserted_id: ObjectId


@dataclass
class FakeDeleteResult:
    deleted_count: int


@dataclass
class FakeCursor:
    """Fake cursor that can fail after yielding its documents."""

    documents: list[dict[str, object]]
    error: Exception | None = None
    closed: bool = False

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *_exc_info) -> None:  # type: ignore[no-untyped-def]
        self.closed = True

    def __iter__(self):  # type: ignore[no-untyped-def]
        for document in self.documents:
            yield document
        if self.error is not None:
            raise self.error


@dataclass
class FakeDatabase:
    error: Exception | None = None
    commands: list[str] = field(default_factory=list)

    def command(self, name: str) -> dict[str, object]:
        self.commands.append(name)
        if self.error is not None:
            raise self.error
        return {"ok": 1.0}


@dataclass
class FakeCollection:
    """Fake pymongo collection that encodes inserts like the driver does."""

    documents: list[dict[str, object]] = field(default_factory=list)
    database: FakeDatabase = field(default_factory=FakeDatabase)
    error: Exception | None = None
    cursor_error: Exception | None = None
    last_filter: dict[str, object] | None = None
    cursors: list[FakeCursor] = field(default_factory=list)

    def find(self, query: dict[str, object]) -> FakeCursor:
        self._raise_if_failing()
        self.last_filter = query
        cursor = FakeCursor(list(self.documents), error=self.cursor_error)
        self.cursors.append(cursor)
        return cursor

    def insert_one(self, document: dict[str, object]) -> FakeInsertResult:
        self._raise_if_failing()
        bson.encode(document)
        inserted_id = ObjectId()
        self.documents.append({"_id": inserted_id, **document})
        return FakeInsertResult(inserted_id=inserted_id)

    def delete_one(self, query: dict[str, object]) -> FakeDeleteResult:
        self._raise_if_failing()
        self.last_filter = query
        before = len(self.documents)
        self.documents = [doc for doc in self.documents if doc["_id"] != query["_id"]]
        return FakeDeleteResult(deleted_count=before - len(self.documents))

    def _raise_if_failing(self) -> None:
        if self.error is not None:
            raise self.error


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongo_uri="mongodb://localhost:27017",
        mongo_database="testdb",
        mongo_collection="users",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def container(
    settings: Settings, user_repository: InMemoryUserRepository
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository),
        close_resources=close_resources,
    )
