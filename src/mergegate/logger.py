import logging
from typing import List, Optional

import notifiers.logging

from mergegate import config

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s - %(message)s"


def telegram_handler() -> Optional[logging.Handler]:
    if config.TELEGRAM_TOKEN is None or config.TELEGRAM_CHAT_ID is None:
        return None
    handler = notifiers.logging.NotificationHandler(
        "telegram",
        defaults={
            "token": config.TELEGRAM_TOKEN,
            "chat_id": config.TELEGRAM_CHAT_ID,
        },
    )
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter("mergegate %(levelname)s - %(message)s"))
    return handler


def get_log_handlers(logger: logging.Logger) -> List[logging.Handler]:
    existing = [
        h
        for h in logger.handlers
        if isinstance(h, notifiers.logging.NotificationHandler)
    ]
    if existing:
        return existing
    handler = telegram_handler()
    if handler is None:
        return []
    logger.addHandler(handler)
    return [handler]


def configure_logging(level=None) -> logging.Logger:
    logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)
    if level is None:
        level = config.OVERRIDE_LOGGING
    logger = logging.getLogger("mergegate")
    logging.getLogger().setLevel(level)
    logger.setLevel(level)
    get_log_handlers(logger)
    return logger
