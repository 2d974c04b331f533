#!/usr/bin/env python3
"""
Message Board Server
Serves the thread and reply API through uvicorn
"""
import logging
import sys
import uvicorn
from config import DEFAULT_HOST, DEFAULT_PORT, DB_PATH, LOG_LEVEL, LOG_FORMAT

logger = logging.getLogger("run_server")


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logger.info("Starting message board server on %s:%d (database: %s)", DEFAULT_HOST, DEFAULT_PORT, DB_PATH)
    logger.info("API endpoints: /api/threads/{board} and /api/replies/{board}")

    try:
        from app import app

        uvicorn.run(
            app,
            host=DEFAULT_HOST,
            port=DEFAULT_PORT,
            reload=False,
            access_log=True,
            log_config=None  # keep the logging configured above
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Error starting server")
        sys.exit(1)


if __name__ == "__main__":
    main()
