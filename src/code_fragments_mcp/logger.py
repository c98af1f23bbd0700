"""
Logging setup for the MCP server.

Records go to stderr because stdout carries the MCP protocol. Messages are
sanitized so file names or symbol names taken from requests cannot forge
extra log lines.
"""

import logging
import sys
from typing import Optional


def sanitize_message(message: str) -> str:
    """
    Escape every character outside printable ASCII as ``\\xNN``.

    Code points above 0xFF keep their full hex value, e.g. ``\\x263a``.
    """
    return "".join(
        char if " " <= char <= "~" and char != "\\" else "\\x" + format(ord(char), "02x")
        for char in message
    )


class SanitizingFilter(logging.Filter):
    """Rewrite each record's message through sanitize_message."""

    def filter(self, record: logging.LogRecord) -> bool:
        # Records are shared between handlers; escape only once
        if not getattr(record, "sanitized", False):
            try:
                message = record.getMessage()
            except (TypeError, ValueError):
                message = str(record.msg)
            record.msg = sanitize_message(message)
            record.args = None
            record.sanitized = True
        return True


def configure_logging(level: int = logging.ERROR, log_file: Optional[str] = None) -> logging.Logger:
    """Install sanitized stderr (and optional file) handlers on the root logger."""
    root = logging.getLogger()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(SanitizingFilter())
        root.addHandler(handler)

    root.setLevel(level)
    return root
