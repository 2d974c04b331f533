import os
from dotenv import load_dotenv

load_dotenv()

DB_PATH = os.getenv("BOARD_DB_PATH", "messageboard.db")
ALLOWED_ORIGINS = [origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Server Configuration
DEFAULT_HOST = os.getenv("HOST", "0.0.0.0")
DEFAULT_PORT = int(os.getenv("PORT", "3000"))

# Write durability (journaled writes, bounded lock wait)
WRITE_TIMEOUT_SECONDS = float(os.getenv("WRITE_TIMEOUT_SECONDS", "1.0"))
SYNCHRONOUS_MODE = "FULL"
JOURNAL_MODE = "WAL"

# Credential hashing
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Validation Constants
BOARD_NAME_MIN_LENGTH = 1
BOARD_NAME_MAX_LENGTH = 100
BOARD_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

# Projection bounds
THREAD_LIST_LIMIT = 10
REPLY_PREVIEW_LIMIT = 3

# Soft delete sentinel
DELETED_REPLY_TEXT = "[deleted]"

# Plain text results
SUCCESS = "success"
INCORRECT_PASSWORD = "incorrect password"
REPLY_ALREADY_DELETED = "Reply is already deleted."
INCORRECT_REPLY_TARGET = "Incorrect thread_id or reply_id"

# HTTP Status Codes
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_SERVER_ERROR = 500
HTTP_FOUND = 302
