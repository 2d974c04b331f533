"""
Thread projection engine.

Builds the read-side views of a board from stored thread documents:
private fields are dropped, nested replies are bounded and ordered.
Everything here is pure; callers fetch the documents and hand them in.

Both views run the same shape of pipeline over the reply sequence:

    expand   -> one row per reply, tagged with its thread and reply count
    sort     -> rows by reply creation time, newest first (listing only)
    regroup  -> rows back into threads, first value wins for thread fields
    truncate -> at most ``reply_limit`` replies per thread

The listing then orders threads by last bump and keeps the newest ones.
"""
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional
from config import THREAD_LIST_LIMIT, REPLY_PREVIEW_LIMIT
from models import ReplyResponse, ThreadResponse, ThreadSummaryResponse
from replies import Reply
from threads import Thread
from utils import to_datetime


@dataclass(frozen=True, slots=True)
class ReplyRow:
    thread: Thread
    reply_count: int
    reply: Optional[Reply]


@dataclass(slots=True)
class ThreadGroup:
    thread_id: str
    text: str
    created_on: float
    bumped_on: float
    reply_count: int
    replies: list[ReplyResponse]


def redact_reply(reply: Reply) -> ReplyResponse:
    return ReplyResponse(id=reply.reply_id, text=reply.text, created_on=to_datetime(reply.created_on))


def expand(threads: Iterable[Thread]) -> Iterator[ReplyRow]:
    """Unwind the reply sequences, keeping a reply-less row for empty threads."""
    for thread in threads:
        if not thread.replies:
            yield ReplyRow(thread, 0, None)
            continue
        for reply in thread.replies:
            yield ReplyRow(thread, thread.reply_count, reply)


def sort_rows_newest_first(rows: Iterable[ReplyRow]) -> List[ReplyRow]:
    # stable, so replies created in the same instant keep insertion order
    return sorted(rows, key=lambda row: row.reply.created_on if row.reply else float("-inf"), reverse=True)


def regroup(rows: Iterable[ReplyRow]) -> List[ThreadGroup]:
    groups: dict[str, ThreadGroup] = {}
    for row in rows:
        group = groups.get(row.thread.thread_id)
        if group is None:
            group = ThreadGroup(
                thread_id=row.thread.thread_id,
                text=row.thread.text,
                created_on=row.thread.created_on,
                bumped_on=row.thread.bumped_on,
                reply_count=row.reply_count,
                replies=[],
            )
            groups[group.thread_id] = group
        # the placeholder row of a thread without replies contributes nothing
        if row.reply_count > 0 and row.reply is not None:
            group.replies.append(redact_reply(row.reply))
    return list(groups.values())


def truncate(groups: Iterable[ThreadGroup], reply_limit: Optional[int]) -> List[ThreadGroup]:
    groups = list(groups)
    if reply_limit is not None:
        for group in groups:
            del group.replies[reply_limit:]
    return groups


def list_recent_threads(threads: Iterable[Thread],
                        thread_limit: int = THREAD_LIST_LIMIT,
                        reply_limit: int = REPLY_PREVIEW_LIMIT) -> List[ThreadSummaryResponse]:
    """Most recently bumped threads, each with its newest replies and total reply count."""
    rows = sort_rows_newest_first(expand(threads))
    groups = truncate(regroup(rows), reply_limit)
    groups.sort(key=lambda group: group.bumped_on, reverse=True)
    return [
        ThreadSummaryResponse(
            id=group.thread_id,
            text=group.text,
            created_on=to_datetime(group.created_on),
            bumped_on=to_datetime(group.bumped_on),
            replies=group.replies,
            replycount=group.reply_count,
        )
        for group in groups[:thread_limit]
    ]


def full_thread(thread: Thread) -> ThreadResponse:
    """One thread with every reply, in the order they were posted."""
    group = regroup(expand([thread]))[0]
    return ThreadResponse(
        id=group.thread_id,
        text=group.text,
        created_on=to_datetime(group.created_on),
        bumped_on=to_datetime(group.bumped_on),
        replies=group.replies,
    )
