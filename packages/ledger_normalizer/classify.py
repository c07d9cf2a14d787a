"""Income/Expense classification with description-based overrides."""

from __future__ import annotations

import re
from collections.abc import Sequence

from .models import TransactionType
from .rules import EXPENSE_OVERRIDE_PATTERNS, INCOME_OVERRIDE_PATTERNS, matches_any


def classify(
    default_type: TransactionType,
    description: str | None,
    *,
    income_overrides: Sequence[re.Pattern[str]] = INCOME_OVERRIDE_PATTERNS,
    expense_overrides: Sequence[re.Pattern[str]] = EXPENSE_OVERRIDE_PATTERNS,
) -> TransactionType:
    """Return the row's type, flipping the account default when an override matches.

    A statement credit on a card account is income even though the account
    defaults to Expense; a bill-pay line on an income-typed bank account is
    an expense.
    """

    text = (description or "").strip()
    if default_type is TransactionType.EXPENSE and matches_any(text, income_overrides):
        return TransactionType.INCOME
    if default_type is TransactionType.INCOME and matches_any(text, expense_overrides):
        return TransactionType.EXPENSE
    return default_type


__all__ = ["classify"]
