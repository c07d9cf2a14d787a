"""Institution export layouts and filename-based source detection.

The catalog maps a lower-case *source key* (``"capital_one"``, ``"ent"``) to
the :class:`AccountFormat` describing that institution's CSV columns. A file
is attributed to the first key, in catalog order, that occurs in its
lower-cased base name. Order therefore matters: short keys such as ``"ent"``
also occur inside unrelated names (``"capital_one_statement.csv"``), so ``"ent"``
is the last entry of the default table.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from os import PathLike
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from .errors import ConfigurationError
from .models import AccountFormat, TransactionType

_EXPENSE = TransactionType.EXPENSE
_INCOME = TransactionType.INCOME

DEFAULT_FORMATS: Mapping[str, AccountFormat] = MappingProxyType(
    {
        "amazon": AccountFormat(
            type=_EXPENSE,
            date="date",
            description="items",
            debit="total",
            credit="refund",
        ),
        "capital_one": AccountFormat(
            type=_EXPENSE,
            date="Transaction Date",
            description="Description",
            debit="Debit",
            credit="Credit",
        ),
        "chase_ihg": AccountFormat(
            type=_EXPENSE,
            date="Transaction Date",
            description="Description",
            debit="Amount",
            credit="Amount",
        ),
        "citibank": AccountFormat(
            type=_EXPENSE,
            date="Date",
            description="Description",
            debit="Debit",
            credit="Credit",
        ),
        "elevations": AccountFormat(
            type=_INCOME,
            date="Posting Date",
            description="Description",
            debit="Amount",
            credit="Amount",
            bank_account=True,
        ),
        "fidelity": AccountFormat(
            type=_INCOME,
            date="Run Date",
            description="Action",
            debit="Amount ($)",
            credit="Amount ($)",
            bank_account=True,
        ),
        "vanguard": AccountFormat(
            type=_INCOME,
            date="Settlement Date",
            description="Transaction Description",
            debit="Net Amount",
            credit="Net Amount",
            bank_account=True,
        ),
        "ent": AccountFormat(
            type=_INCOME,
            date="Date",
            description="Description",
            debit="Amount",
            credit="Amount",
            bank_account=True,
        ),
    }
)


class AccountFormatCatalog:
    """Read-only, ordered mapping of source key to :class:`AccountFormat`."""

    __slots__ = ("_formats",)

    def __init__(self, formats: Mapping[str, AccountFormat]) -> None:
        self._formats: Mapping[str, AccountFormat] = MappingProxyType(dict(formats))

    def __iter__(self) -> Iterator[str]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def __contains__(self, key: object) -> bool:
        return key in self._formats

    def __getitem__(self, key: str) -> AccountFormat:
        return self._formats[key]

    def items(self):
        return self._formats.items()

    def match_source(self, filename: str | PathLike[str]) -> str | None:
        """Return the first catalog key contained in the file's base name."""

        basename = Path(filename).name.lower()
        return next((key for key in self._formats if key in basename), None)

    def lookup(self, filename: str | PathLike[str]) -> tuple[str, AccountFormat]:
        """Resolve ``filename`` to ``(source_key, format)``.

        Raises ``ConfigurationError`` when no key matches; a file we cannot
        attribute would otherwise be mapped onto the wrong columns.
        """

        key = self.match_source(filename)
        if key is None:
            raise ConfigurationError(f"Unknown source for {filename}")
        return key, self._formats[key]


def default_catalog() -> AccountFormatCatalog:
    return AccountFormatCatalog(DEFAULT_FORMATS)


def load_catalog(path: str | PathLike[str]) -> AccountFormatCatalog:
    """Load a catalog from a JSON object of ``{source_key: {...format...}}``.

    Recognized per-format fields: ``type`` (``income``/``expense``), ``date``,
    ``description``, ``debit``, ``credit`` and optional ``bank_account``.
    Key order in the file becomes lookup order.
    """

    p = Path(path)
    try:
        raw: Any = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"cannot read format catalog {p}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"format catalog {p} is not valid JSON: {e}") from e

    if not isinstance(raw, dict) or not raw:
        raise ConfigurationError(f"format catalog {p} must be a non-empty JSON object")

    formats: dict[str, AccountFormat] = {}
    for key, entry in raw.items():
        norm_key = str(key).strip().lower()
        if not norm_key:
            raise ConfigurationError(f"format catalog {p} has an empty source key")
        try:
            formats[norm_key] = AccountFormat.model_validate(entry)
        except ValidationError as e:
            raise ConfigurationError(f"invalid format {key!r} in {p}: {e}") from e
    return AccountFormatCatalog(formats)


__all__ = [
    "DEFAULT_FORMATS",
    "AccountFormatCatalog",
    "default_catalog",
    "load_catalog",
]
