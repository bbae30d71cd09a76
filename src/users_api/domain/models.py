"""Domain models for the users API."""

from dataclasses import dataclass
from datetime import datetime

# Stored documents are passed through without interpretation.
UserDocument = dict[str, object]


@dataclass(frozen=True)
class NewUser:
    """A validated user about to be inserted into the store."""

    name: str
    email: str
    age: int
    created_at: datetime

    def to_document(self) -> UserDocument:
        """Return the document stored for this user."""
        return {
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "createdAt": self.created_at,
        }
