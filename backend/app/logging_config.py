"""
Logging setup — console plus an append-only server log under LOG_DIR.
"""
import logging
import os

from app.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging() -> None:
    settings = get_settings()
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())

    # Idempotent: uvicorn --reload and tests import the app more than once
    if any(getattr(h, "_payments_admin", False) for h in root.handlers):
        return

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        logging.StreamHandler(),
        logging.FileHandler(os.path.join(settings.LOG_DIR, "server.log"), encoding="utf-8"),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._payments_admin = True
        root.addHandler(handler)
