"""Data models for ``ledger_normalizer``.

- ``AccountFormat``: one institution's export layout. Validated with pydantic
  so catalogs loaded from JSON get the same checks as the built-in table.
- ``CanonicalTransaction``: the normalized seven-field output record.
- ``RawRow``: one ``csv.DictReader`` row, column name to raw cell text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator

# One parsed CSV line. Columns the file does not carry are simply absent;
# unused cells may be ``None`` or empty strings.
RawRow: TypeAlias = Mapping[str, str | None]


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"

    def __str__(self) -> str:
        return self.value


class AccountFormat(BaseModel):
    """Column layout and sign policy for one institution's CSV export.

    ``debit`` and ``credit`` name the raw columns holding each direction.
    When both name the same column the export is *single-column* and the
    direction is carried by sign alone. ``bank_account`` switches the sign
    policy applied to single-column expenses (see
    :func:`ledger_normalizer.amounts.resolve_amount`).
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    type: TransactionType
    date: str
    description: str
    debit: str
    credit: str
    bank_account: StrictBool = False

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, v: Any) -> Any:
        # Catalog files spell the type in lower case ("income"/"expense").
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @field_validator("date", "description", "debit", "credit")
    @classmethod
    def _column_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("column name must be non-empty")
        return v

    @property
    def single_column(self) -> bool:
        return self.debit == self.credit


@dataclass(frozen=True, slots=True)
class CanonicalTransaction:
    """A single normalized ledger row.

    ``amount`` holds the signed value as resolved by the amount rules: debits
    are positive and credits negative, except for single-column card
    expenses which are stored negated. ``date`` is ``YYYY-MM-DD`` or ``None``
    when the source cell was blank.
    """

    date: str | None
    description: str
    amount: Decimal
    category: str
    notes: str
    source: str
    type: TransactionType

    def as_row(self) -> dict[str, Any]:
        return {
            "Date": self.date,
            "Description": self.description,
            "Amount": self.amount,
            "Category": self.category,
            "Notes": self.notes,
            "Source": self.source,
            "Type": self.type.value,
        }


__all__ = ["AccountFormat", "CanonicalTransaction", "RawRow", "TransactionType"]
