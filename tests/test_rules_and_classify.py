import re

from ledger_normalizer import CategorizationRule, CategorizationRuleSet, TransactionType, classify
from ledger_normalizer.rules import AMAZON_FALLBACK, DEFAULT_RULESET

EXPENSE = TransactionType.EXPENSE
INCOME = TransactionType.INCOME


def _rule(pattern: str, category: str) -> CategorizationRule:
    return CategorizationRule(re.compile(pattern, re.IGNORECASE), category)


# ---- Categorization ----------------------------------------------------------


def test_known_category_matches() -> None:
    assert DEFAULT_RULESET.categorize("Safeway", "citibank") == "Groceries"
    assert DEFAULT_RULESET.categorize("Starbucks", "citibank") == "Going out"
    assert DEFAULT_RULESET.categorize("Xcel", "elevations") == "Utilities"


def test_partial_case_insensitive_matches() -> None:
    assert DEFAULT_RULESET.categorize("Trader Joe's Market") == "Groceries"
    assert DEFAULT_RULESET.categorize("PROGRESSIVE INSURANCE") == "Car"
    assert DEFAULT_RULESET.categorize("Denver Film Society") == "Entertainment"
    assert DEFAULT_RULESET.categorize("Amazon Purchase") == "Amazon"
    assert DEFAULT_RULESET.categorize("Thankyou Points") == "Statement Credit"


def test_specific_rules_precede_broad_catch_alls() -> None:
    # "amazon" alone is the Amazon catch-all; the video subscription is
    # declared first and wins.
    assert DEFAULT_RULESET.categorize("AMAZON PRIME VIDEO") == "Subscriptions"
    assert DEFAULT_RULESET.categorize("Amazon Fresh order") == "Groceries"


def test_uncategorized_fallback() -> None:
    assert DEFAULT_RULESET.categorize("Some Unknown Vendor XYZ", "citibank") == "Uncategorized"


def test_special_source_uses_its_own_table_and_fallback() -> None:
    assert DEFAULT_RULESET.categorize("Kindle Paperwhite", "amazon") == "Amazon - Books"
    # Generic rules are not consulted for the special source.
    assert DEFAULT_RULESET.categorize("Starbucks gift card", "amazon") == AMAZON_FALLBACK


def test_first_match_wins_in_declaration_order() -> None:
    ruleset = CategorizationRuleSet(
        [_rule("coffee", "Going out"), _rule("coffee beans", "Groceries")],
        special_source="none",
    )
    assert ruleset.categorize("Coffee Beans 2lb") == "Going out"

    reversed_ruleset = CategorizationRuleSet(
        [_rule("coffee beans", "Groceries"), _rule("coffee", "Going out")],
        special_source="none",
    )
    assert reversed_ruleset.categorize("Coffee Beans 2lb") == "Groceries"


def test_substitute_fallbacks() -> None:
    ruleset = CategorizationRuleSet(
        [], [], special_source="shop", default_fallback="Misc", source_fallback="Shop misc"
    )
    assert ruleset.categorize("anything", "bank") == "Misc"
    assert ruleset.categorize("anything", "shop") == "Shop misc"


# ---- Classification ----------------------------------------------------------


def test_default_type_is_kept_without_override() -> None:
    assert classify(EXPENSE, "Regular Purchase") is EXPENSE
    assert classify(INCOME, "Interest Payment") is INCOME


def test_statement_credit_on_expense_account_is_income() -> None:
    assert classify(EXPENSE, "Statement Credit - Thank You") is INCOME
    assert classify(EXPENSE, "Reward Statement Credit") is INCOME
    assert classify(EXPENSE, "THANKYOU POINTS") is INCOME


def test_billpay_on_income_account_is_expense() -> None:
    assert classify(INCOME, "Type: BillPay - Comcast") is EXPENSE
    assert classify(INCOME, "  type:billpay  ") is EXPENSE
    assert classify(INCOME, "Check # 1042") is EXPENSE
    assert classify(INCOME, "XCEL ENERGY") is EXPENSE


def test_overrides_only_flip_away_from_default() -> None:
    # Expense overrides do not apply to expense-typed accounts and vice versa.
    assert classify(INCOME, "Statement Credit") is INCOME
    assert classify(EXPENSE, "Type: BillPay") is EXPENSE


def test_refund_is_still_expense() -> None:
    assert classify(EXPENSE, "Return of Item") is EXPENSE


def test_substitute_override_patterns() -> None:
    income = [re.compile("bonus", re.IGNORECASE)]
    assert classify(EXPENSE, "Signup BONUS", income_overrides=income) is INCOME
    assert classify(EXPENSE, "Statement Credit", income_overrides=income) is EXPENSE
