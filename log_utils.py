# === log_utils.py: Logging-Setup für Konsole, Datei und GUI-Protokoll ===

import logging
import os
import queue
import sys

LOGGER_NAME = "token_launchpad"
LOG_FILE_NAME = "launchpad.log"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

# Textbox-Tags der GUI je Log-Level
LEVEL_TAGS = {
    logging.DEBUG: "info",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


def setup_logger(log_folder: str = "logs", level: int = logging.INFO) -> logging.Logger:
    os.makedirs(log_folder, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Verhindert doppelte Handler
    if logger.hasHandlers():
        logger.handlers.clear()

    # Konsolen-Handler
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Datei-Handler
    file_handler = logging.FileHandler(os.path.join(log_folder, LOG_FILE_NAME), mode='a', encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger.addHandler(stream_handler)
    logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "") -> logging.Logger:
    """Kind-Logger unterhalb des Anwendungs-Loggers."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


class QueueLogHandler(logging.Handler):
    """Leitet Log-Einträge als (Nachricht, Tag) in eine Queue, die die GUI periodisch abarbeitet."""

    def __init__(self, log_queue: "queue.Queue", level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter('%(asctime)s  %(message)s', datefmt='%H:%M:%S'))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tag = getattr(record, "tag", None) or LEVEL_TAGS.get(record.levelno, "info")
            self.log_queue.put((self.format(record), tag))
        except Exception:
            self.handleError(record)
