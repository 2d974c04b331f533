import re
from typing import Callable, List, Optional
from config import BOARD_NAME_MIN_LENGTH, BOARD_NAME_MAX_LENGTH, BOARD_NAME_PATTERN
from database import DatabaseManager, UpdateResult
from exceptions import AppError
from replies import Reply
from threads import Thread

_BOARD_NAME = re.compile(BOARD_NAME_PATTERN)


def validate_board_name(name: str) -> str:
    if len(name) < BOARD_NAME_MIN_LENGTH or len(name) > BOARD_NAME_MAX_LENGTH:
        raise AppError.validation(f"Board name must be {BOARD_NAME_MIN_LENGTH}-{BOARD_NAME_MAX_LENGTH} characters")
    if not _BOARD_NAME.match(name):
        raise AppError.validation("Board name can only contain letters, numbers, hyphens, and underscores")
    return name


class BoardRepository:
    """Thread storage for one board. The name is validated once, here."""

    def __init__(self, db: DatabaseManager, name: str) -> None:
        self.db = db
        self.name = validate_board_name(name)

    async def add_thread(self, thread: Thread) -> None:
        await self.db.insert_thread(self.name, thread)

    async def get_thread(self, thread_id: str) -> Optional[Thread]:
        return await self.db.get_thread(self.name, thread_id)

    async def get_thread_with_reply(self, thread_id: str, reply_id: str) -> Optional[Thread]:
        return await self.db.get_thread_with_reply(self.name, thread_id, reply_id)

    async def recent_threads(self, limit: Optional[int] = None) -> List[Thread]:
        return await self.db.get_threads(self.name, limit)

    async def delete_thread(self, thread_id: str) -> int:
        return await self.db.delete_thread(self.name, thread_id)

    async def update_thread(self, thread_id: str, update: Callable[[Thread], bool]) -> UpdateResult:
        return await self.db.update_thread(self.name, thread_id, update)

    async def update_reply(self, thread_id: str, reply_id: str, update: Callable[[Reply], bool]) -> UpdateResult:
        return await self.db.update_reply(self.name, thread_id, reply_id, update)

    def __str__(self) -> str:
        return f"Board '{self.name}'"
