"""Public interface for the ``ledger_normalizer`` package.

Re-exports the engine's entry points and models as the stable import
surface. There is no runtime logic here, only symbol re-exports.
"""

from .amounts import parse_amount, resolve_amount
from .classify import classify
from .errors import ConfigurationError, DateFormatError, LedgerError
from .formats import DEFAULT_FORMATS, AccountFormatCatalog, default_catalog, load_catalog
from .ingest import discover_input_files, ingest
from .models import AccountFormat, CanonicalTransaction, RawRow, TransactionType
from .normalizers import MULTI_ITEM_NOTE, RowNormalizer, normalize_date, normalize_row
from .rules import DEFAULT_RULESET, CategorizationRule, CategorizationRuleSet
from .writer import split_by_type, write_ledger

__all__ = [
    # Engine
    "classify",
    "ingest",
    "discover_input_files",
    "normalize_date",
    "normalize_row",
    "parse_amount",
    "resolve_amount",
    "split_by_type",
    "write_ledger",
    "RowNormalizer",
    "MULTI_ITEM_NOTE",
    # Configuration tables
    "AccountFormatCatalog",
    "CategorizationRule",
    "CategorizationRuleSet",
    "DEFAULT_FORMATS",
    "DEFAULT_RULESET",
    "default_catalog",
    "load_catalog",
    # Models / errors
    "AccountFormat",
    "CanonicalTransaction",
    "RawRow",
    "TransactionType",
    "ConfigurationError",
    "DateFormatError",
    "LedgerError",
]
