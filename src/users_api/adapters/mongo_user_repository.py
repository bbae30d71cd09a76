"""MongoDB-backed user repository."""

import base64
import math
from dataclasses import dataclass
from datetime import datetime

import pymongo
from bson import Decimal128, ObjectId, json_util
from bson.errors import BSONError
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from users_api.domain.models import NewUser, UserDocument
from users_api.services.users import UserRepository, UserStoreError

_JSON_NATIVE = (str, int, float, bool, type(None), datetime)


@dataclass
class MongoUserRepository(UserRepository):
    """pymongo implementation for user persistence."""

    collection: Collection
    timeout_seconds: float = 5.0
    ping_timeout_seconds: float = 10.0

    def ping(self) -> None:
        """Run the ping command against the users database."""
        try:
            with pymongo.timeout(self.ping_timeout_seconds):
                self.collection.database.command("ping")
        except PyMongoError as exc:
            raise UserStoreError("MongoDB ping failed") from exc

    def list_users(self) -> list[UserDocument]:
        """Return all documents converted to JSON-safe values."""
        try:
            with (
                pymongo.timeout(self.timeout_seconds),
                self.collection.find({}) as cursor,
            ):
                return [_to_document(raw) for raw in cursor]
        except (PyMongoError, BSONError, TypeError) as exc:
            raise UserStoreError("Failed to list users") from exc

    def insert_user(self, user: NewUser) -> str:
        """Insert a user document and return the generated id."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                result = self.collection.insert_one(user.to_document())
        except (PyMongoError, BSONError, OverflowError) as exc:
            raise UserStoreError("Failed to insert user") from exc
        return str(result.inserted_id)

    def delete_user(self, user_id: ObjectId) -> int:
        """Delete the document with the given id."""
        try:
            with pymongo.timeout(self.timeout_seconds):
                result = self.collection.delete_one({"_id": user_id})
        except PyMongoError as exc:
            raise UserStoreError("Failed to delete user") from exc
        return result.deleted_count


def _to_document(raw: dict[str, object]) -> UserDocument:
    return {key: _to_json_value(value) for key, value in raw.items()}


def _to_json_value(value: object) -> object:
    """Render a decoded BSON value as something the JSON encoder accepts.

    ObjectIds, decimals and non-finite floats become strings, binary data
    becomes base64 and any other BSON type falls back to its relaxed
    extended JSON form.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, _JSON_NATIVE):
        return value
    if isinstance(value, ObjectId | Decimal128):
        return str(value)
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, dict):
        return _to_document(value)
    if isinstance(value, list | tuple):
        return [_to_json_value(item) for item in value]
    return _to_json_value(
        json_util.default(value, json_options=json_util.RELAXED_JSON_OPTIONS)
    )
