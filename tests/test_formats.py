import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from ledger_normalizer import (
    DEFAULT_FORMATS,
    AccountFormat,
    AccountFormatCatalog,
    ConfigurationError,
    TransactionType,
    default_catalog,
    load_catalog,
)


def test_default_catalog_order_and_contents() -> None:
    catalog = default_catalog()
    assert list(catalog) == [
        "amazon",
        "capital_one",
        "chase_ihg",
        "citibank",
        "elevations",
        "fidelity",
        "vanguard",
        "ent",
    ]
    ihg = catalog["chase_ihg"]
    assert ihg.single_column
    assert ihg.type is TransactionType.EXPENSE
    assert not ihg.bank_account
    assert catalog["vanguard"].bank_account
    assert not catalog["citibank"].single_column


def test_lookup_matches_lowercased_basename_substring() -> None:
    catalog = default_catalog()
    key, fmt = catalog.lookup("/downloads/2025/Capital_One_July.CSV")
    assert key == "capital_one"
    assert fmt is DEFAULT_FORMATS["capital_one"]


def test_statement_file_names_match_their_institution() -> None:
    catalog = default_catalog()
    assert catalog.lookup("fidelity_statement.csv")[0] == "fidelity"
    assert catalog.lookup("vanguard_statement_2025.csv")[0] == "vanguard"
    assert catalog.lookup("capital_one_statement.csv")[0] == "capital_one"
    assert catalog.lookup("ENT_checking.csv")[0] == "ent"


def test_lookup_ignores_directory_names() -> None:
    catalog = default_catalog()
    with pytest.raises(ConfigurationError):
        catalog.lookup("/exports/citibank/stmt_2025.csv")


def test_lookup_first_key_in_catalog_order_wins() -> None:
    fmt = DEFAULT_FORMATS["citibank"]
    catalog = AccountFormatCatalog({"bank": fmt, "bank_two": DEFAULT_FORMATS["ent"]})
    key, found = catalog.lookup("bank_two_export.csv")
    assert key == "bank"
    assert found is fmt


def test_lookup_unknown_source_raises() -> None:
    with pytest.raises(ConfigurationError, match="Unknown source"):
        default_catalog().lookup("mystery_bank.csv")


def test_catalog_is_read_only() -> None:
    catalog = default_catalog()
    with pytest.raises(TypeError):
        catalog._formats["new"] = DEFAULT_FORMATS["ent"]  # type: ignore[index]
    fmt = catalog["ent"]
    with pytest.raises(ValidationError):
        fmt.bank_account = False  # type: ignore[misc]


def test_account_format_accepts_lowercase_type() -> None:
    fmt = AccountFormat(
        type="income", date="Date", description="Memo", debit="Amount", credit="Amount"
    )
    assert fmt.type is TransactionType.INCOME
    assert fmt.bank_account is False


def test_load_catalog_from_json(tmp_path: Path) -> None:
    path = tmp_path / "formats.json"
    path.write_text(
        json.dumps(
            {
                "Alliant": {
                    "type": "income",
                    "date": "Date",
                    "description": "Description",
                    "debit": "Amount",
                    "credit": "Amount",
                    "bank_account": True,
                },
                "discover": {
                    "type": "expense",
                    "date": "Trans. Date",
                    "description": "Description",
                    "debit": "Amount",
                    "credit": "Amount",
                },
            }
        ),
        encoding="utf-8",
    )

    catalog = load_catalog(path)

    assert list(catalog) == ["alliant", "discover"]
    assert catalog["alliant"].bank_account
    assert catalog["discover"].date == "Trans. Date"
    assert catalog.lookup(tmp_path / "Discover-2025.csv")[0] == "discover"


@pytest.mark.parametrize(
    "payload",
    [
        "[]",
        "{}",
        "not json",
        json.dumps({"x": {"type": "savings", "date": "D", "description": "E", "debit": "A", "credit": "A"}}),
        json.dumps({"x": {"type": "income", "date": "D"}}),
        json.dumps(
            {"x": {"type": "income", "date": "D", "description": "E", "debit": "A", "credit": "A", "extra": 1}}
        ),
        json.dumps(
            {"x": {"type": "income", "date": "D", "description": "E", "debit": "A", "credit": "A", "bank_account": "true"}}
        ),
    ],
)
def test_load_catalog_rejects_invalid_files(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "formats.json"
    path.write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_catalog(path)


def test_load_catalog_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="cannot read"):
        load_catalog(tmp_path / "nope.json")
