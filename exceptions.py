from enum import Enum
from config import HTTP_BAD_REQUEST, HTTP_INTERNAL_SERVER_ERROR


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"


STATUS_CODES = {
    ErrorKind.NOT_FOUND: HTTP_BAD_REQUEST,
    ErrorKind.VALIDATION: HTTP_BAD_REQUEST,
    ErrorKind.INTERNAL: HTTP_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """Application error tagged with a kind; the kind decides the HTTP status."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @classmethod
    def not_found(cls, message: str) -> "AppError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def validation(cls, message: str) -> "AppError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def internal(cls, message: str) -> "AppError":
        return cls(ErrorKind.INTERNAL, message)

    def __repr__(self) -> str:
        return f"AppError({self.kind.name}, {self.message!r})"


class Exceptions:
    THREAD_NOT_FOUND = "Thread not found."

    @staticmethod
    def fetch_failed(thread_id: str) -> AppError:
        return AppError.not_found(f"Failed to fetch thread with id: {thread_id}")

    @staticmethod
    def report_failed(thread_id: str) -> AppError:
        return AppError.not_found(f"Failed to report thread with id: {thread_id}")

    @staticmethod
    def reply_failed(thread_id: str) -> AppError:
        return AppError.not_found(f"Failed to post new reply to thread with id: {thread_id}")

    @staticmethod
    def delete_failed(thread_id: str) -> AppError:
        return AppError.internal(f"Could not delete thread with id: {thread_id}")

    @staticmethod
    def thread_not_found() -> AppError:
        return AppError.not_found(Exceptions.THREAD_NOT_FOUND)
