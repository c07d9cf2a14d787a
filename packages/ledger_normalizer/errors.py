"""Exception types raised by ``ledger_normalizer``.

Both concrete errors are fatal for a whole ingestion run. Row-level problems
that can be recovered (malformed amounts, uncategorized descriptions, noise
rows) never raise; they degrade to defaults inside the normalizer.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for errors that abort an ingestion run."""


class ConfigurationError(LedgerError, ValueError):
    """An input file matches no known source, or a catalog file is invalid."""


class DateFormatError(LedgerError, ValueError):
    """A row's date value matches none of the recognized date shapes."""

    def __init__(self, value: object) -> None:
        super().__init__(f"invalid date: {value!r}")
        self.value = value


__all__ = ["ConfigurationError", "DateFormatError", "LedgerError"]
