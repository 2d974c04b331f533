#!/usr/bin/env python3
import logging
from contextlib import asynccontextmanager
from typing import List, Optional, Type, TypeVar
from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from config import DB_PATH, ALLOWED_ORIGINS, HTTP_BAD_REQUEST, HTTP_INTERNAL_SERVER_ERROR, HTTP_FOUND
from database import DatabaseManager
from exceptions import AppError
from forum import Forum
from models import (ThreadCreate, ThreadReport, ThreadDelete, ReplyCreate, ReplyReport, ReplyDelete,
                    ThreadResponse, ThreadSummaryResponse)
from security import SecurityManager
from utils import timestamp

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

Body = TypeVar("Body", bound=BaseModel)


async def read_body(request: Request) -> dict:
    """Request body as a dict, from either JSON or a submitted form."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise AppError.validation("Malformed JSON body") from None
        if not isinstance(data, dict):
            raise AppError.validation("Request body must be an object")
        return data
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)
    return {}


def parse_body(model: Type[Body], data: dict) -> Body:
    return model.model_validate(data)


def get_forum(request: Request) -> Forum:
    return request.app.state.forum


def describe_validation_error(exc) -> str:
    fields = sorted({".".join(str(part) for part in error["loc"] if part not in ("body", "query"))
                     for error in exc.errors()})
    return "Missing or invalid field(s): " + ", ".join(field for field in fields if field)


def create_thread_router() -> APIRouter:
    router = APIRouter(prefix="/api/threads", tags=["threads"])

    @router.get("/{board}", response_model=List[ThreadSummaryResponse])
    async def get_threads(board: str, forum: Forum = Depends(get_forum)):
        return await forum.get_threads(board)

    @router.post("/{board}")
    async def create_thread(board: str, data: dict = Depends(read_body), forum: Forum = Depends(get_forum)):
        body = parse_body(ThreadCreate, data)
        await forum.create_thread(board, body.text, body.delete_password)
        return RedirectResponse(f"/b/{board}/", status_code=HTTP_FOUND)

    @router.put("/{board}", response_class=PlainTextResponse)
    async def report_thread(board: str, data: dict = Depends(read_body), forum: Forum = Depends(get_forum)):
        body = parse_body(ThreadReport, data)
        return await forum.report_thread(board, body.thread_id)

    @router.delete("/{board}", response_class=PlainTextResponse)
    async def delete_thread(board: str, data: dict = Depends(read_body), forum: Forum = Depends(get_forum)):
        body = parse_body(ThreadDelete, data)
        return await forum.delete_thread(board, body.thread_id, body.delete_password)

    return router


def create_reply_router() -> APIRouter:
    router = APIRouter(prefix="/api/replies", tags=["replies"])

    @router.get("/{board}", response_model=ThreadResponse)
    async def get_thread(board: str, thread_id: str, forum: Forum = Depends(get_forum)):
        return await forum.get_thread(board, thread_id)

    @router.post("/{board}")
    async def create_reply(board: str, data: dict = Depends(read_body), forum: Forum = Depends(get_forum)):
        body = parse_body(ReplyCreate, data)
        await forum.add_reply(board, body.thread_id, body.text, body.delete_password)
        return RedirectResponse(f"/b/{board}/{body.thread_id}", status_code=HTTP_FOUND)

    @router.put("/{board}", response_class=PlainTextResponse)
    async def report_reply(board: str, data: dict = Depends(read_body), forum: Forum = Depends(get_forum)):
        body = parse_body(ReplyReport, data)
        return await forum.report_reply(board, body.thread_id, body.reply_id)

    @router.delete("/{board}", response_class=PlainTextResponse)
    async def delete_reply(board: str, data: dict = Depends(read_body), forum: Forum = Depends(get_forum)):
        body = parse_body(ReplyDelete, data)
        return await forum.delete_reply(board, body.thread_id, body.reply_id, body.delete_password)

    return router


def create_app(db_path: str = DB_PATH, security_manager: Optional[SecurityManager] = None) -> FastAPI:
    db = DatabaseManager(db_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await db.initialize()
        yield

    app = FastAPI(title="Message Board API", description="Anonymous threads and replies per board",
                  version="1.0.0", lifespan=lifespan)
    app.state.forum = Forum(db, security_manager or SecurityManager())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"]
    )

    app.include_router(create_thread_router())
    app.include_router(create_reply_router())

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "timestamp": timestamp()}

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return PlainTextResponse(describe_validation_error(exc), status_code=HTTP_BAD_REQUEST)

    @app.exception_handler(ValidationError)
    async def body_validation_handler(request: Request, exc: ValidationError):
        return PlainTextResponse(describe_validation_error(exc), status_code=HTTP_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse("Internal Server Error", status_code=HTTP_INTERNAL_SERVER_ERROR)

    return app


app = create_app()
