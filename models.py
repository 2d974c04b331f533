from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List


class ThreadCreate(BaseModel):
    text: str
    delete_password: str


class ThreadReport(BaseModel):
    thread_id: str


class ThreadDelete(BaseModel):
    thread_id: str
    delete_password: str


class ReplyCreate(BaseModel):
    thread_id: str
    text: str
    delete_password: str


class ReplyReport(BaseModel):
    thread_id: str
    reply_id: str


class ReplyDelete(BaseModel):
    thread_id: str
    reply_id: str
    delete_password: str


class ReplyResponse(BaseModel):
    """Public view of a reply: no reported flag, no delete password."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    text: str
    created_on: datetime


class ThreadResponse(BaseModel):
    """Public view of a thread with its complete reply list."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    text: str
    created_on: datetime
    bumped_on: datetime
    replies: List[ReplyResponse]


class ThreadSummaryResponse(ThreadResponse):
    """Board listing entry: reply preview plus the total reply count."""
    replycount: int
