"""Logger setup for tlgen and one-line rendering of schema statements in logs."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "tlgen"
CONSOLE_FORMAT = "[tlgen] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
EXCERPT_LIMIT = 80


def get_logger(name: str | None = None) -> logging.Logger:
    """`tlgen` itself, or `tlgen.<name>` for a component."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send tlgen records to stderr, and to `log_file` when one is given.

    Calling it again replaces the sinks installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger(_ROOT)
    root.setLevel(level)
    root.propagate = False

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    sinks: list[tuple[logging.Handler, str]] = [(logging.StreamHandler(), CONSOLE_FORMAT)]
    if log_file is not None:
        sinks.append((logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT))
    for handler, fmt in sinks:
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    return root


def statement_excerpt(statement: str, limit: int = EXCERPT_LIMIT) -> str:
    """The code of a statement on one line, without its comments.

    Long statements are cut to `limit` characters with a trailing `...`.
    """
    code = " ".join(line.split("//", 1)[0] for line in statement.split("\n"))
    flat = " ".join(code.split())
    if not flat:
        return "<empty>"
    if len(flat) > limit:
        return flat[: limit - 3] + "..."
    return flat


def log_skipped_statement(logger: logging.Logger, reason: str, statement: str) -> None:
    logger.warning("Skipping statement (%s): %s", reason, statement_excerpt(statement))


__all__ = [
    "configure_logging",
    "get_logger",
    "log_skipped_statement",
    "statement_excerpt",
]
