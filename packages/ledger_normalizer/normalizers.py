"""Raw CSV row to :class:`CanonicalTransaction` normalization.

Per row, in order:

1. drop noise rows (card payments, transfers, reinvestments, ...) and rows
   whose description column is missing entirely;
2. normalize the date to ``YYYY-MM-DD``;
3. classify Income/Expense;
4. resolve the signed amount (depends on the type from step 3);
5. categorize;
6. annotate multi-item orders.

Date problems are fatal (:class:`DateFormatError`). Amount problems are not:
unparseable cells resolve to zero.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime

from dateutil import parser as date_parser

from .amounts import resolve_amount
from .classify import classify
from .errors import DateFormatError
from .models import AccountFormat, CanonicalTransaction, RawRow
from .rules import (
    DEFAULT_RULESET,
    EXPENSE_OVERRIDE_PATTERNS,
    INCOME_OVERRIDE_PATTERNS,
    SKIP_PATTERNS,
    CategorizationRuleSet,
    matches_any,
)

MULTI_ITEM_NOTE = "Multiple items in one order"

_US_DATE_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# An item separator with more item text after it (a trailing ";" alone does
# not count).
_ITEM_SEPARATOR_RE = re.compile(r";\s*\S")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_date(value: str | date | None) -> str | None:
    """Return ``value`` as an ISO ``YYYY-MM-DD`` string, or ``None`` when blank.

    Accepted shapes, tried in order: ``M/D/YYYY`` (month first),
    ``YYYY-MM-DD``, then free-form dates such as ``"July 4, 2025"`` or
    ``"4 Jul 2025"``. Anything else raises :class:`DateFormatError`.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    s = str(value).strip()
    if not s:
        return None

    try:
        if _US_DATE_RE.match(s):
            return datetime.strptime(s, "%m/%d/%Y").date().isoformat()
        if _ISO_DATE_RE.match(s):
            return date.fromisoformat(s).isoformat()
        return date_parser.parse(s).date().isoformat()
    except (ValueError, OverflowError) as exc:
        raise DateFormatError(value) from exc


def _skip_key(description: str) -> str:
    return " ".join(description.casefold().split())


def capitalize_source(source_key: str) -> str:
    # Only the first letter: "chase_ihg" -> "Chase_ihg".
    return source_key[:1].upper() + source_key[1:]


# ---------------------------------------------------------------------------
# Row normalizer
# ---------------------------------------------------------------------------


class RowNormalizer:
    """Turn raw rows into canonical transactions using injected rule tables.

    Usage
    -----
    txn = RowNormalizer().normalize(row, fmt, "capital_one")  # None when skipped
    """

    def __init__(
        self,
        rules: CategorizationRuleSet = DEFAULT_RULESET,
        *,
        skip_patterns: Sequence[re.Pattern[str]] = SKIP_PATTERNS,
        income_overrides: Sequence[re.Pattern[str]] = INCOME_OVERRIDE_PATTERNS,
        expense_overrides: Sequence[re.Pattern[str]] = EXPENSE_OVERRIDE_PATTERNS,
        multi_item_source: str = "amazon",
    ) -> None:
        self.rules = rules
        self.skip_patterns = tuple(skip_patterns)
        self.income_overrides = tuple(income_overrides)
        self.expense_overrides = tuple(expense_overrides)
        self.multi_item_source = multi_item_source

    def should_skip(self, raw_description: str | None) -> bool:
        if raw_description is None:
            return True
        return matches_any(_skip_key(raw_description), self.skip_patterns)

    def notes_for(self, description: str, source_key: str) -> str:
        if source_key == self.multi_item_source and _ITEM_SEPARATOR_RE.search(description):
            return MULTI_ITEM_NOTE
        return ""

    def normalize(
        self, row: RawRow, fmt: AccountFormat, source_key: str
    ) -> CanonicalTransaction | None:
        """Normalize one row; return ``None`` when the row is noise."""

        raw_description = row.get(fmt.description)
        if self.should_skip(raw_description):
            return None
        description = (raw_description or "").strip()

        txn_date = normalize_date(row.get(fmt.date))
        txn_type = classify(
            fmt.type,
            description,
            income_overrides=self.income_overrides,
            expense_overrides=self.expense_overrides,
        )
        amount = resolve_amount(row.get(fmt.debit), row.get(fmt.credit), fmt, txn_type)

        return CanonicalTransaction(
            date=txn_date,
            description=description,
            amount=amount,
            category=self.rules.categorize(description, source_key),
            notes=self.notes_for(description, source_key),
            source=capitalize_source(source_key),
            type=txn_type,
        )


def normalize_row(
    row: RawRow, fmt: AccountFormat, source_key: str
) -> CanonicalTransaction | None:
    """Normalize ``row`` with the default rule tables."""

    return _DEFAULT_NORMALIZER.normalize(row, fmt, source_key)


_DEFAULT_NORMALIZER = RowNormalizer()


__all__ = [
    "MULTI_ITEM_NOTE",
    "RowNormalizer",
    "capitalize_source",
    "normalize_date",
    "normalize_row",
]
