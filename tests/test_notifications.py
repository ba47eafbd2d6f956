"""Tests für Toasts und die GUI-Log-Anbindung."""

import logging
import queue

import pytest

from log_utils import LOG_FILE_NAME, QueueLogHandler, get_logger, setup_logger
from notifications import Notifier, Toast


def test_drain_returns_toasts_in_order(notifier):
    notifier.loading("Token wird erstellt...", toast_id="creating-token")
    notifier.success("Fertig", "Token erstellt", toast_id="creating-token")
    notifier.info("Hinweis")

    toasts = notifier.drain()

    assert [toast.kind for toast in toasts] == ["loading", "success", "info"]
    assert toasts[1] == Toast("success", "Fertig", "Token erstellt", "creating-token")
    assert notifier.drain() == []


def test_unknown_kind_is_rejected(notifier):
    with pytest.raises(ValueError):
        notifier.notify("warning", "Unbekannt")
    assert notifier.drain() == []


def test_toast_text():
    assert Toast("info", "Titel").text == "Titel"
    assert Toast("error", "Titel", "Details").text == "Titel: Details"


def test_toasts_are_logged(notifier, caplog):
    caplog.set_level(logging.INFO, logger="token_launchpad")
    notifier.error("Fehler beim Erstellen des Tokens", "Nicht genügend Guthaben")
    notifier.success("Token erfolgreich erstellt")

    records = [r for r in caplog.records if r.name == "token_launchpad.notifications"]
    assert [r.levelno for r in records] == [logging.ERROR, logging.INFO]
    assert records[0].getMessage() == "Fehler beim Erstellen des Tokens: Nicht genügend Guthaben"
    assert records[1].tag == "success"


def test_queue_handler_tags():
    log_queue = queue.Queue()
    logger = logging.getLogger("token_launchpad.test_queue")
    logger.setLevel(logging.INFO)
    handler = QueueLogHandler(log_queue)
    logger.addHandler(handler)
    try:
        logger.info("normal")
        logger.warning("achtung")
        logger.error("kaputt")
        logger.info("geschafft", extra={"tag": "success"})
        logger.debug("unsichtbar")
    finally:
        logger.removeHandler(handler)

    entries = []
    while not log_queue.empty():
        entries.append(log_queue.get_nowait())
    assert [tag for _, tag in entries] == ["info", "warning", "error", "success"]
    assert entries[0][0].endswith("normal")


def test_setup_logger_writes_file(tmp_path):
    logger = setup_logger(str(tmp_path / "logs"))
    try:
        assert len(logger.handlers) == 2
        get_logger("test").info("Hallo Datei")
        for handler in logger.handlers:
            handler.flush()
        content = (tmp_path / "logs" / LOG_FILE_NAME).read_text(encoding="utf-8")
        assert "INFO - Hallo Datei" in content

        # Erneuter Aufruf ersetzt die Handler statt sie zu verdoppeln
        assert len(setup_logger(str(tmp_path / "logs")).handlers) == 2
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_get_logger_names():
    assert get_logger().name == "token_launchpad"
    assert get_logger("wallet").name == "token_launchpad.wallet"
