import logging

import notifiers.logging

from mergegate import config
from mergegate.logger import configure_logging, get_log_handlers


def test_no_handlers_without_telegram_token(monkeypatch):
    monkeypatch.setattr(config, "TELEGRAM_TOKEN", None)
    logger = logging.getLogger("mergegate.test.no_token")
    assert get_log_handlers(logger) == []
    assert logger.handlers == []


def test_telegram_handler_added_once(monkeypatch):
    monkeypatch.setattr(config, "TELEGRAM_TOKEN", "token")
    monkeypatch.setattr(config, "TELEGRAM_CHAT_ID", "1234")
    logger = logging.getLogger("mergegate.test.telegram")

    try:
        handlers = get_log_handlers(logger)
        assert len(handlers) == 1
        assert isinstance(handlers[0], notifiers.logging.NotificationHandler)
        assert handlers[0].level == logging.WARNING

        assert get_log_handlers(logger) == handlers
        assert logger.handlers == handlers
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)


def test_configure_logging_sets_level(monkeypatch):
    monkeypatch.setattr(config, "TELEGRAM_TOKEN", None)
    root_level = logging.getLogger().level
    try:
        logger = configure_logging(logging.DEBUG)
        assert logger.name == "mergegate"
        assert logger.level == logging.DEBUG
    finally:
        logging.getLogger().setLevel(root_level)
        logging.getLogger("mergegate").setLevel(logging.NOTSET)
