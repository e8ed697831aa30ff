from __future__ import annotations

import logging
from typing import IO

# Attributes every LogRecord carries; anything else on a record came from extra={...}
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class ExtrasFormatter(logging.Formatter):
    """Renders the message, then the record's extra fields as key=value in the order they were passed."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and value not in (None, "")
        ]
        return f"{line} | {' '.join(pairs)}" if pairs else line


def configure_logging(level: str = "INFO", stream: IO[str] | None = None) -> logging.Handler:
    """
    Install one ExtrasFormatter handler on the root logger.

    Calling it again replaces the handler it installed earlier; handlers added
    by anything else (test capture, uvicorn) are left in place.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, ExtrasFormatter):
            root.removeHandler(existing)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ExtrasFormatter("%(levelname)s:%(name)s:%(message)s"))
    root.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    return handler
