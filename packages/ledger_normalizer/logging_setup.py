"""Log output for normalization runs.

Only the ``normalize`` command turns output on, by calling
``configure_logging`` before it reads any export; per-file row counts and
skipped-row totals then go to stderr. Everything else asks ``get_logger`` for
a ``ledger_normalizer.*`` logger and stays quiet when imported as a library.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledger_normalizer"
_CONFIGURED = False


def _level_from_name(name: str) -> int | None:
    name = name.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = getattr(logging, name, None)
    return numeric if isinstance(numeric, int) else None


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        resolved = _level_from_name(level)
        if resolved is not None:
            return resolved
    env_val = os.getenv("LEDGER_LOG_LEVEL")
    if env_val:
        resolved = _level_from_name(env_val)
        if resolved is not None:
            return resolved
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Send ``ledger_normalizer`` records to ``stream``; later calls do nothing.

    ``level`` may be a number or a name such as ``"debug"``. When it is missing
    or not a known level, ``LEDGER_LOG_LEVEL`` is tried, then ``INFO``.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    # NullHandlers added by get_logger() would otherwise linger.
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(resolved)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this package; no output before configuration."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger"]
