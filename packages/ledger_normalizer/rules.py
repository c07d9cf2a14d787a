"""Ordered description patterns: categories, noise filters, type overrides.

Every table here is a tuple evaluated top to bottom, and the first pattern
that matches wins. Specific rules are declared ahead of broad catch-alls, so
entries further down are intentionally unreachable for descriptions an
earlier entry already claims. Do not sort or deduplicate these tables.

Patterns are case-insensitive regular expressions searched anywhere in the
description.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import NamedTuple


class CategorizationRule(NamedTuple):
    pattern: re.Pattern[str]
    category: str


def _rules(pairs: Iterable[tuple[str, str]]) -> tuple[CategorizationRule, ...]:
    return tuple(CategorizationRule(re.compile(p, re.IGNORECASE), c) for p, c in pairs)


def compile_patterns(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def matches_any(text: str, patterns: Iterable[re.Pattern[str]]) -> bool:
    return any(p.search(text) for p in patterns)


# ---------------------------------------------------------------------------
# Noise rows and type overrides
# ---------------------------------------------------------------------------

# Matched against the trimmed, case-folded description with internal
# whitespace collapsed to single spaces.
SKIP_PATTERNS: tuple[re.Pattern[str], ...] = compile_patterns(
    [
        r"\belectronic payment\b",
        r"\b(online|automatic|autopay|mobile) payment\b",
        r"\bonline bill ?pay(ment)?\b",
        r"^bill ?pay(ment)?\b",
        r"\birs\b",
        r"^items$",
        r"\bpayment ?-? ?thank ?you\b",
        r"\bcredit balance refund\b",
        r"\breinvest(ment)?\b",
        r"\b(online |internal )?transfer (to|from)\b",
    ]
)

# Expense-typed accounts: economically income despite the account default.
INCOME_OVERRIDE_PATTERNS: tuple[re.Pattern[str], ...] = compile_patterns(
    [
        r"statement credit",
        r"thank ?you points",
        r"\breward(s)? points\b",
        r"\bcash ?back reward",
        r"\bexpensify\b",
        r"\breimbursement\b",
    ]
)

# Income-typed bank accounts: outflows that arrive on the income side.
EXPENSE_OVERRIDE_PATTERNS: tuple[re.Pattern[str], ...] = compile_patterns(
    [
        r"type:\s*billpay",
        r"\bcheck\s*(#|\d)",
        r"\bcomcast\b",
        r"\bxfinity\b",
        r"\bxcel\b",
        r"\bdenver water\b",
    ]
)


# ---------------------------------------------------------------------------
# Category tables
# ---------------------------------------------------------------------------

DEFAULT_FALLBACK = "Uncategorized"
AMAZON_FALLBACK = "Amazon - Uncategorized"

DEFAULT_CATEGORY_RULES: tuple[CategorizationRule, ...] = _rules(
    [
        (r"statement credit|thank ?you points|reward", "Statement Credit"),
        (r"payroll|direct dep", "Paycheck"),
        (r"\binterest\b|dividend", "Interest"),
        (r"amazon prime video|netflix|hulu|spotify|disney\+", "Subscriptions"),
        (r"whole ?foods|amazon fresh", "Groceries"),
        (r"amazon|amzn", "Amazon"),
        (r"safeway|king soopers|trader joe|sprouts|costco|natural grocers", "Groceries"),
        (r"starbucks|coffee|restaurant|brewing|taqueria|pizza|\bbar\b", "Going out"),
        (r"xcel|comcast|xfinity|denver water|t-mobile|verizon", "Utilities"),
        (r"progressive|geico|jiffy lube|shell oil|conoco|parking|car wash", "Car"),
        (r"film|cinema|theat(er|re)|museum|concert|ticketmaster", "Entertainment"),
        (r"ihg|hotel|marriott|airbnb|united airlines|southwest|delta air", "Travel"),
        (r"walgreens|cvs|pharmacy|dental|medical", "Health"),
        (r"gym|climbing|yoga", "Fitness"),
    ]
)

AMAZON_CATEGORY_RULES: tuple[CategorizationRule, ...] = _rules(
    [
        (r"kindle|paperback|hardcover|\bbook", "Amazon - Books"),
        (r"vitamin|supplement|protein|sunscreen", "Amazon - Health"),
        (r"dog|cat food|cat litter|\bpet\b", "Amazon - Pets"),
        (r"usb|cable|charger|headphone|battery|batteries", "Amazon - Electronics"),
        (r"paper towel|toilet paper|detergent|soap|trash bag", "Amazon - Household"),
        (r"shirt|sock|shoe|jacket|pants", "Amazon - Clothing"),
        (r"toy|lego|puzzle", "Amazon - Toys"),
    ]
)


class CategorizationRuleSet:
    """Two ordered category tables: a generic one and one for a special source.

    ``categorize`` consults ``source_rules`` (falling back to
    ``source_fallback``) only when the source key equals ``special_source``;
    every other source uses ``default_rules`` and ``default_fallback``.
    """

    __slots__ = (
        "default_fallback",
        "default_rules",
        "source_fallback",
        "source_rules",
        "special_source",
    )

    def __init__(
        self,
        default_rules: Sequence[CategorizationRule],
        source_rules: Sequence[CategorizationRule] = (),
        *,
        special_source: str = "amazon",
        default_fallback: str = DEFAULT_FALLBACK,
        source_fallback: str = AMAZON_FALLBACK,
    ) -> None:
        self.default_rules = tuple(default_rules)
        self.source_rules = tuple(source_rules)
        self.special_source = special_source
        self.default_fallback = default_fallback
        self.source_fallback = source_fallback

    def categorize(self, description: str, source_key: str | None = None) -> str:
        if source_key == self.special_source:
            rules, fallback = self.source_rules, self.source_fallback
        else:
            rules, fallback = self.default_rules, self.default_fallback
        for rule in rules:
            if rule.pattern.search(description):
                return rule.category
        return fallback


DEFAULT_RULESET = CategorizationRuleSet(DEFAULT_CATEGORY_RULES, AMAZON_CATEGORY_RULES)


__all__ = [
    "AMAZON_CATEGORY_RULES",
    "AMAZON_FALLBACK",
    "DEFAULT_CATEGORY_RULES",
    "DEFAULT_FALLBACK",
    "DEFAULT_RULESET",
    "EXPENSE_OVERRIDE_PATTERNS",
    "INCOME_OVERRIDE_PATTERNS",
    "SKIP_PATTERNS",
    "CategorizationRule",
    "CategorizationRuleSet",
    "compile_patterns",
    "matches_any",
]
