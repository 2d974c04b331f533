import aiosqlite
import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Callable, List, Optional
from config import WRITE_TIMEOUT_SECONDS, SYNCHRONOUS_MODE, JOURNAL_MODE
from exceptions import AppError
from replies import Reply
from threads import Thread

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS threads (
    board TEXT NOT NULL,
    thread_id TEXT NOT NULL,
    bumped_on REAL NOT NULL,
    document TEXT NOT NULL,
    PRIMARY KEY (board, thread_id)
);
CREATE INDEX IF NOT EXISTS idx_threads_board_bumped ON threads (board, bumped_on DESC);
"""


@dataclass(frozen=True, slots=True)
class UpdateResult:
    matched_count: int
    modified_count: int


def encode(thread: Thread) -> str:
    return json.dumps(thread.to_document(), separators=(",", ":"))


def decode(document: str) -> Thread:
    return Thread.from_document(json.loads(document))


class DatabaseManager:
    """Thread documents stored one per row, addressed by (board, thread_id).

    Every write runs journaled with a bounded wait for the database lock;
    a write that cannot be acknowledged raises an internal AppError.
    """

    def __init__(self, db_path: str, write_timeout: float = WRITE_TIMEOUT_SECONDS):
        self.db_path = db_path
        self.write_timeout = write_timeout

    async def initialize(self):
        async with aiosqlite.connect(self.db_path) as conn:
            await conn.execute(f"PRAGMA journal_mode = {JOURNAL_MODE}")
            await conn.executescript(SCHEMA)
            await conn.commit()
        logger.info("Document store ready at %s", self.db_path)

    @asynccontextmanager
    async def connection(self):
        async with aiosqlite.connect(self.db_path, timeout=self.write_timeout, isolation_level=None) as conn:
            await conn.execute(f"PRAGMA synchronous = {SYNCHRONOUS_MODE}")
            yield conn

    @asynccontextmanager
    async def transaction(self):
        """Exclusive write transaction; rolled back if the body raises."""
        try:
            async with self.connection() as conn:
                await conn.execute("BEGIN IMMEDIATE")
                try:
                    yield conn
                except BaseException:
                    await conn.execute("ROLLBACK")
                    raise
                await conn.execute("COMMIT")
        except aiosqlite.OperationalError as e:
            logger.error("Write not acknowledged within %.1fs: %s", self.write_timeout, e)
            raise AppError.internal(f"Write not acknowledged: {e}") from e

    async def execute_query(self, query: str, params: tuple = (), fetch_one: bool = False):
        async with self.connection() as conn:
            cursor = await conn.execute(query, params)
            if fetch_one:
                result = await cursor.fetchone()
            else:
                result = await cursor.fetchall()
            await cursor.close()
            return result

    async def insert_thread(self, board: str, thread: Thread) -> None:
        async with self.transaction() as conn:
            await conn.execute(
                "INSERT INTO threads (board, thread_id, bumped_on, document) VALUES (?, ?, ?, ?)",
                (board, thread.thread_id, thread.bumped_on, encode(thread))
            )

    async def get_thread(self, board: str, thread_id: str) -> Optional[Thread]:
        row = await self.execute_query(
            "SELECT document FROM threads WHERE board = ? AND thread_id = ?",
            (board, thread_id),
            fetch_one=True
        )
        return decode(row[0]) if row else None

    async def get_thread_with_reply(self, board: str, thread_id: str, reply_id: str) -> Optional[Thread]:
        """The thread, only if one of its replies carries exactly this id."""
        thread = await self.get_thread(board, thread_id)
        if thread is None or thread.get_reply(reply_id) is None:
            return None
        return thread

    async def get_threads(self, board: str, limit: Optional[int] = None) -> List[Thread]:
        """Threads of a board, most recently bumped first."""
        query = "SELECT document FROM threads WHERE board = ? ORDER BY bumped_on DESC"
        params: tuple = (board,)
        if limit is not None:
            query += " LIMIT ?"
            params = (board, limit)
        rows = await self.execute_query(query, params)
        return [decode(row[0]) for row in rows]

    async def delete_thread(self, board: str, thread_id: str) -> int:
        async with self.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM threads WHERE board = ? AND thread_id = ?",
                (board, thread_id)
            )
            deleted = cursor.rowcount
            await cursor.close()
        return deleted

    async def update_thread(self, board: str, thread_id: str,
                            update: Callable[[Thread], bool]) -> UpdateResult:
        """Apply ``update`` to one thread atomically.

        ``update`` mutates the thread in place and returns whether anything changed;
        unchanged documents are not rewritten.
        """
        async with self.transaction() as conn:
            cursor = await conn.execute(
                "SELECT document FROM threads WHERE board = ? AND thread_id = ?",
                (board, thread_id)
            )
            row = await cursor.fetchone()
            await cursor.close()
            if row is None:
                return UpdateResult(0, 0)

            thread = decode(row[0])
            if not update(thread):
                return UpdateResult(1, 0)

            await conn.execute(
                "UPDATE threads SET bumped_on = ?, document = ? WHERE board = ? AND thread_id = ?",
                (thread.bumped_on, encode(thread), board, thread_id)
            )
            return UpdateResult(1, 1)

    async def update_reply(self, board: str, thread_id: str, reply_id: str,
                           update: Callable[[Reply], bool]) -> UpdateResult:
        """Apply ``update`` to the single reply whose id equals ``reply_id``."""
        matched = False

        def apply(thread: Thread) -> bool:
            nonlocal matched
            reply = thread.get_reply(reply_id)
            if reply is None:
                return False
            matched = True
            return update(reply)

        result = await self.update_thread(board, thread_id, apply)
        if not matched:
            return UpdateResult(0, 0)
        return result
