"""Amount parsing and sign resolution.

Institutions report the same economic event with different polarity:

- two-column card exports (``Debit``/``Credit``) keep both sides positive;
- single-column card exports show purchases positive and credits negative;
- single-column bank exports may already show outflows as negative.

:func:`resolve_amount` folds these into one signed value. It needs the
already-classified transaction type, so classification runs first.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from .models import AccountFormat, TransactionType

_ZERO = Decimal("0")

# "(" optionally followed by a currency symbol, then a digit.
_PAREN_NEGATIVE_RE = re.compile(r"^\(\s*\$?\s*\d")
_STRIP_RE = re.compile(r"[$,()\s]")
# Leading numeric prefix; trailing garbage is ignored.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _negate(value: Decimal) -> Decimal:
    # Avoid Decimal("-0"), which would serialize as "-0.00".
    return -value if value else _ZERO


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def parse_amount(text: str | None) -> Decimal:
    """Parse a money cell such as ``"$1,234.56"``, ``"-$1,234.56"`` or ``"($500)"``.

    Blank, ``None`` and unparseable input yield ``Decimal("0")``; this never
    raises.
    """

    if text is None:
        return _ZERO
    s = text.strip()
    if not s:
        return _ZERO

    negative = bool(_PAREN_NEGATIVE_RE.match(s))
    cleaned = _STRIP_RE.sub("", s)
    m = _NUMBER_RE.match(cleaned)
    if not m:
        return _ZERO
    try:
        value = Decimal(m.group(0))
    except InvalidOperation:
        return _ZERO
    if not value:
        return _ZERO
    return -abs(value) if negative else value


def resolve_amount(
    raw_debit: str | None,
    raw_credit: str | None,
    fmt: AccountFormat,
    transaction_type: TransactionType,
) -> Decimal:
    """Return the signed amount for one row.

    Rules, first applicable wins:

    1. single column, card account, Expense: negated debit
    2. single column, bank account, Expense: absolute debit
    3. debit present: debit as-is
    4. credit present: negated credit
    5. otherwise zero
    """

    is_expense = transaction_type is TransactionType.EXPENSE
    if fmt.single_column and is_expense:
        if not fmt.bank_account:
            return _negate(parse_amount(raw_debit))
        return abs(parse_amount(raw_debit))
    if not _is_blank(raw_debit):
        return parse_amount(raw_debit)
    if not _is_blank(raw_credit):
        return _negate(parse_amount(raw_credit))
    return _ZERO


__all__ = ["parse_amount", "resolve_amount"]
