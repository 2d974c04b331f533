from dataclasses import dataclass, field
from typing import Any, Optional
from replies import Reply, new_id
from utils import timestamp


@dataclass(slots=True)
class Thread:
    thread_id: str
    text: str
    delete_password: str
    created_on: float
    bumped_on: float
    reported: bool = False
    replies: list[Reply] = field(default_factory=list)

    @classmethod
    def create(cls, text: str, delete_password: str) -> "Thread":
        """A fresh thread: bumped at the instant it was created, no replies."""
        now = timestamp()
        return cls(new_id(), text, delete_password, created_on=now, bumped_on=now)

    @property
    def reply_count(self) -> int:
        return len(self.replies)

    def get_reply(self, reply_id: str) -> Optional[Reply]:
        for reply in self.replies:
            if reply.reply_id == reply_id:
                return reply
        return None

    def add_reply(self, text: str, delete_password: str) -> Reply:
        """Append a reply and bump the thread to the reply's creation time."""
        reply = Reply(new_id(), text, delete_password)
        self.bumped_on = max(self.bumped_on, reply.created_on)
        self.replies.append(reply)
        return reply

    def report(self) -> bool:
        if self.reported:
            return False
        self.reported = True
        return True

    def to_document(self) -> dict[str, Any]:
        return {
            "_id": self.thread_id,
            "text": self.text,
            "created_on": self.created_on,
            "bumped_on": self.bumped_on,
            "reported": self.reported,
            "delete_password": self.delete_password,
            "replies": [reply.to_document() for reply in self.replies],
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Thread":
        return cls(
            thread_id=doc["_id"],
            text=doc["text"],
            delete_password=doc["delete_password"],
            created_on=doc["created_on"],
            bumped_on=doc["bumped_on"],
            reported=doc.get("reported", False),
            replies=[Reply.from_document(r) for r in doc.get("replies", [])],
        )
