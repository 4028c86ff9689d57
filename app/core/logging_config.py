"""
Configures logging across the application.

Logs at the level named by LOG_LEVEL with timestamp, logger name and level.
"""

import logging

from app.core.config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)
