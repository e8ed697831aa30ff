from __future__ import annotations

import logging
from collections import deque

from salon_calendar.application.ports.notifier import NotifierPort


class LogNotifier(NotifierPort):
    """Writes toasts to the log and keeps the most recent ones for inspection."""

    def __init__(self, history: int = 50) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: deque[str] = deque(maxlen=history)

    def notify(self, text: str) -> None:
        self.sent.append(text)
        self._logger.info("Toast", extra={"reason": text})
