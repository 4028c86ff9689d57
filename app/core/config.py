"""
Loads environment variables from .env using python-dotenv.

Used throughout the app to configure the database, CORS, notifications
and feedback rules.
"""

# app/core/config.py
from dotenv import load_dotenv
import os

load_dotenv()


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./skillswap.db")
    SQL_ECHO = _as_bool(os.getenv("SQL_ECHO", "false"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "*").split(",")
        if origin.strip()
    ]

    # Bounded queue between the swap engine and the websocket fan-out
    NOTIFICATION_QUEUE_SIZE = int(os.getenv("NOTIFICATION_QUEUE_SIZE", "1000"))

    # Feedback can be edited or removed by its giver for this long
    FEEDBACK_EDIT_WINDOW_HOURS = int(os.getenv("FEEDBACK_EDIT_WINDOW_HOURS", "24"))

    DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
    MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))

settings = Settings()
