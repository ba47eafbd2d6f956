# === notifications.py: Toast-Benachrichtigungen ===
# Worker-Threads legen Toasts in eine Queue, die GUI holt sie periodisch ab.

import queue
from dataclasses import dataclass
from typing import List, Optional

from log_utils import get_logger

logger = get_logger("notifications")

TOAST_KINDS = ("loading", "success", "error", "info")


@dataclass(frozen=True)
class Toast:
    kind: str
    title: str
    description: str = ""
    toast_id: Optional[str] = None

    @property
    def text(self) -> str:
        return f"{self.title}: {self.description}" if self.description else self.title


class Notifier:
    """Thread-sichere Sammelstelle für Toasts; jeder Toast wird zusätzlich protokolliert."""

    def __init__(self):
        self._queue: "queue.Queue[Toast]" = queue.Queue()

    def notify(self, kind: str, title: str, description: str = "", toast_id: Optional[str] = None) -> Toast:
        if kind not in TOAST_KINDS:
            raise ValueError(f"Unbekannter Toast-Typ: {kind}")
        toast = Toast(kind, title, description, toast_id)
        if kind == "error":
            logger.error(toast.text)
        elif kind == "success":
            logger.info(toast.text, extra={"tag": "success"})
        else:
            logger.info(toast.text)
        self._queue.put(toast)
        return toast

    def loading(self, title: str, description: str = "", toast_id: Optional[str] = None) -> Toast:
        return self.notify("loading", title, description, toast_id)

    def success(self, title: str, description: str = "", toast_id: Optional[str] = None) -> Toast:
        return self.notify("success", title, description, toast_id)

    def error(self, title: str, description: str = "", toast_id: Optional[str] = None) -> Toast:
        return self.notify("error", title, description, toast_id)

    def info(self, title: str, description: str = "", toast_id: Optional[str] = None) -> Toast:
        return self.notify("info", title, description, toast_id)

    def drain(self) -> List[Toast]:
        """Liefert alle wartenden Toasts in Eingangsreihenfolge."""
        toasts = []
        try:
            while True:
                toasts.append(self._queue.get_nowait())
        except queue.Empty:
            pass
        return toasts
