import asyncio
import logging
from typing import List
from boards import BoardRepository
from config import (THREAD_LIST_LIMIT, SUCCESS, INCORRECT_PASSWORD,
                    REPLY_ALREADY_DELETED, INCORRECT_REPLY_TARGET)
from database import DatabaseManager
from exceptions import Exceptions
from models import ThreadResponse, ThreadSummaryResponse
from projections import list_recent_threads, full_thread
from replies import Reply
from security import SecurityManager
from threads import Thread

logger = logging.getLogger(__name__)


class Forum:
    """Reads and mutations of threads and replies, one board at a time.

    Credential mismatches and already-deleted replies are ordinary outcomes
    returned as text; only missing threads and failed writes raise AppError.
    """

    def __init__(self, db: DatabaseManager, security_manager: SecurityManager):
        self.db = db
        self.security_manager = security_manager

    def board(self, name: str) -> BoardRepository:
        return BoardRepository(self.db, name)

    async def _hash(self, password: str) -> str:
        return await asyncio.to_thread(self.security_manager.hash_password, password)

    async def _verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self.security_manager.verify_password, password, hashed)

    # Reads
    async def get_threads(self, board_name: str) -> List[ThreadSummaryResponse]:
        board = self.board(board_name)
        threads = await board.recent_threads(THREAD_LIST_LIMIT)
        return list_recent_threads(threads)

    async def get_thread(self, board_name: str, thread_id: str) -> ThreadResponse:
        board = self.board(board_name)
        thread = await board.get_thread(thread_id)
        if thread is None:
            raise Exceptions.fetch_failed(thread_id)
        return full_thread(thread)

    # Threads
    async def create_thread(self, board_name: str, text: str, delete_password: str) -> Thread:
        board = self.board(board_name)
        thread = Thread.create(text, await self._hash(delete_password))
        await board.add_thread(thread)
        logger.info("Created thread %s on %s", thread.thread_id, board)
        return thread

    async def delete_thread(self, board_name: str, thread_id: str, delete_password: str) -> str:
        board = self.board(board_name)
        thread = await board.get_thread(thread_id)
        if thread is None:
            raise Exceptions.thread_not_found()

        if not await self._verify(delete_password, thread.delete_password):
            logger.warning("Incorrect password for thread %s on %s", thread_id, board)
            return INCORRECT_PASSWORD

        if await board.delete_thread(thread_id) != 1:
            raise Exceptions.delete_failed(thread_id)
        logger.info("Deleted thread %s on %s", thread_id, board)
        return SUCCESS

    async def report_thread(self, board_name: str, thread_id: str) -> str:
        board = self.board(board_name)
        result = await board.update_thread(thread_id, Thread.report)
        if not result.matched_count:
            raise Exceptions.report_failed(thread_id)
        logger.info("Reported thread %s on %s", thread_id, board)
        return SUCCESS

    # Replies
    async def add_reply(self, board_name: str, thread_id: str, text: str, delete_password: str) -> Reply:
        board = self.board(board_name)
        hashed = await self._hash(delete_password)
        added: list[Reply] = []

        def append(thread: Thread) -> bool:
            added.append(thread.add_reply(text, hashed))
            return True

        result = await board.update_thread(thread_id, append)
        if not result.matched_count:
            raise Exceptions.reply_failed(thread_id)
        reply = added[0]
        logger.info("Added reply %s to thread %s on %s", reply.reply_id, thread_id, board)
        return reply

    async def delete_reply(self, board_name: str, thread_id: str, reply_id: str, delete_password: str) -> str:
        board = self.board(board_name)
        thread = await board.get_thread_with_reply(thread_id, reply_id)
        if thread is None:
            return INCORRECT_REPLY_TARGET

        reply = thread.get_reply(reply_id)
        if not await self._verify(delete_password, reply.delete_password):
            logger.warning("Incorrect password for reply %s in thread %s on %s", reply_id, thread_id, board)
            return INCORRECT_PASSWORD

        result = await board.update_reply(thread_id, reply_id, Reply.soft_delete)
        if not result.modified_count:
            logger.warning("Reply %s in thread %s on %s was not modified", reply_id, thread_id, board)
            return REPLY_ALREADY_DELETED
        logger.info("Deleted reply %s in thread %s on %s", reply_id, thread_id, board)
        return SUCCESS

    async def report_reply(self, board_name: str, thread_id: str, reply_id: str) -> str:
        board = self.board(board_name)
        result = await board.update_reply(thread_id, reply_id, Reply.report)
        if not result.matched_count:
            return INCORRECT_REPLY_TARGET
        logger.info("Reported reply %s in thread %s on %s", reply_id, thread_id, board)
        return SUCCESS
