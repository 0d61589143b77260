"""Utility helpers for pdf_acroforms."""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Union

PathLike = Union[str, os.PathLike[str]]

# Placeholders for escaped parentheses; control characters never occur in a
# PDF literal string unescaped.
_OPEN_PLACEHOLDER = "\x01"
_CLOSE_PLACEHOLDER = "\x02"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def to_path(path: PathLike) -> Path:
    """Normalize an input path to :class:`Path`."""
    return Path(path).expanduser().resolve()


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    finally:
        end = datetime.now(tz=timezone.utc)
        elapsed = (end - start).total_seconds()
        logger.info("%s completed in %.2fs", message, elapsed)


def protect_parentheses(text: str) -> str:
    """Hide escaped parentheses so they do not terminate a literal string match."""
    return text.replace("\\(", _OPEN_PLACEHOLDER).replace("\\)", _CLOSE_PLACEHOLDER)


def unprotect_parentheses(text: str) -> str:
    """Restore the escaped parentheses hidden by :func:`protect_parentheses`."""
    return text.replace(_OPEN_PLACEHOLDER, "\\(").replace(_CLOSE_PLACEHOLDER, "\\)")
