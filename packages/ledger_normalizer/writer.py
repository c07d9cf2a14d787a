"""Split canonical transactions by type and write them as CSV files.

Output columns (exact order): ``Date, Description, Amount, Category, Notes,
Source``. ``Type`` is dropped once rows are split into ``income.csv`` and
``expenses.csv``. Amounts are written with exactly two decimals, ASCII dot,
and a leading minus for negatives.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from os import PathLike
from pathlib import Path

from .models import CanonicalTransaction, TransactionType

OUTPUT_COLUMNS: tuple[str, ...] = ("Date", "Description", "Amount", "Category", "Notes", "Source")
INCOME_FILENAME = "income.csv"
EXPENSES_FILENAME = "expenses.csv"


def format_amount(d: Decimal) -> str:
    q = d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    if not q:
        q = abs(q)
    return f"{q:.2f}"


def _date_sort_key(txn: CanonicalTransaction) -> tuple[bool, str]:
    # Rows without a date sort first; ISO strings sort chronologically.
    return (txn.date is not None, txn.date or "")


def split_by_type(
    transactions: Iterable[CanonicalTransaction],
) -> tuple[list[CanonicalTransaction], list[CanonicalTransaction]]:
    """Return ``(income, expenses)``, each stably sorted by date ascending."""

    income: list[CanonicalTransaction] = []
    expenses: list[CanonicalTransaction] = []
    for txn in transactions:
        (income if txn.type is TransactionType.INCOME else expenses).append(txn)
    income.sort(key=_date_sort_key)
    expenses.sort(key=_date_sort_key)
    return income, expenses


def write_csv(
    path: str | PathLike[str],
    transactions: Iterable[CanonicalTransaction],
    columns: Sequence[str] = OUTPUT_COLUMNS,
) -> int:
    """Write ``transactions`` to ``path`` with the given columns; return row count."""

    count = 0
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(columns)
        for txn in transactions:
            record = txn.as_row()
            record["Amount"] = format_amount(txn.amount)
            writer.writerow(["" if record[c] is None else record[c] for c in columns])
            count += 1
    return count


def write_ledger(
    transactions: Iterable[CanonicalTransaction], output_dir: str | PathLike[str]
) -> tuple[int, int]:
    """Write ``income.csv`` and ``expenses.csv`` under ``output_dir``.

    Creates the directory when missing. Returns ``(income_count,
    expense_count)``.
    """

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    income, expenses = split_by_type(transactions)
    n_income = write_csv(out / INCOME_FILENAME, income)
    n_expenses = write_csv(out / EXPENSES_FILENAME, expenses)
    return n_income, n_expenses


__all__ = [
    "EXPENSES_FILENAME",
    "INCOME_FILENAME",
    "OUTPUT_COLUMNS",
    "format_amount",
    "split_by_type",
    "write_csv",
    "write_ledger",
]
