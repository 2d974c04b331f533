from dataclasses import dataclass, field
from typing import Any
import uuid
from config import DELETED_REPLY_TEXT
from utils import timestamp


def new_id() -> str:
    """24 hex characters, the same width as the ids the board has always exposed."""
    return uuid.uuid4().hex[:24]


@dataclass(slots=True)
class Reply:
    reply_id: str
    text: str
    delete_password: str
    reported: bool = False
    created_on: float = field(default_factory=timestamp)

    @property
    def deleted(self) -> bool:
        return self.text == DELETED_REPLY_TEXT

    def soft_delete(self) -> bool:
        """Replace the text with the sentinel. Returns False if it already was."""
        if self.deleted:
            return False
        self.text = DELETED_REPLY_TEXT
        return True

    def report(self) -> bool:
        if self.reported:
            return False
        self.reported = True
        return True

    def to_document(self) -> dict[str, Any]:
        return {
            "_id": self.reply_id,
            "text": self.text,
            "created_on": self.created_on,
            "reported": self.reported,
            "delete_password": self.delete_password,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Reply":
        return cls(
            reply_id=doc["_id"],
            text=doc["text"],
            delete_password=doc["delete_password"],
            reported=doc.get("reported", False),
            created_on=doc["created_on"],
        )
