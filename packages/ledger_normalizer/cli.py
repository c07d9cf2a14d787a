"""CLI for the ``ledger_normalizer`` package.

This module exposes plain command handlers (``cmd_normalize`` and friends,
returning a process exit code) and a Typer-based console interface on top of
them. Settings resolve from options first, then environment variables, which
may come from a local ``.env`` loaded with ``python-dotenv``:

- ``LEDGER_INPUT_DIR``: directory of institution CSV exports (``data``)
- ``LEDGER_OUTPUT_DIR``: where ``income.csv``/``expenses.csv`` go (``output``)
- ``LEDGER_FORMATS_PATH``: optional JSON format catalog
- ``LEDGER_LOG_LEVEL``: logging level (``INFO``)
"""

from __future__ import annotations

import csv
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv

from .errors import LedgerError
from .formats import AccountFormatCatalog, default_catalog, load_catalog
from .logging_setup import configure_logging, get_logger

_logger = get_logger("ledger_normalizer.cli")


def _load_catalog(formats_path: Path | None) -> AccountFormatCatalog:
    if formats_path is None:
        return default_catalog()
    return load_catalog(formats_path)


def cmd_normalize(
    input_dir: str | Path,
    output_dir: str | Path,
    *,
    formats_path: str | Path | None = None,
) -> int:
    """Normalize every CSV under ``input_dir`` and write the split ledger.

    Errors are written to stderr and a non-zero status is returned; an
    unknown source or unparseable date aborts the whole run without writing
    any output.
    """

    from .ingest import discover_input_files, ingest
    from .writer import write_ledger

    try:
        catalog = _load_catalog(Path(formats_path) if formats_path else None)
        paths = discover_input_files(input_dir)
        if not paths:
            _logger.warning("no CSV files found in %s", input_dir)
        rows = ingest(paths, catalog)
        n_income, n_expenses = write_ledger(rows, output_dir)
    except LedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (csv.Error, UnicodeDecodeError) as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _logger.info(
        "wrote %d expense and %d income rows to %s", n_expenses, n_income, output_dir
    )
    print(f"Wrote {n_expenses} expenses and {n_income} income rows.")
    return 0


def cmd_formats(*, formats_path: str | Path | None = None) -> int:
    """Print the catalog in lookup order, one source per line."""

    try:
        catalog = _load_catalog(Path(formats_path) if formats_path else None)
    except LedgerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for key, fmt in catalog.items():
        kind = "bank" if fmt.bank_account else "card"
        layout = fmt.debit if fmt.single_column else f"{fmt.debit}/{fmt.credit}"
        print(
            f"{key}\t{fmt.type.value}\t{kind}\tdate={fmt.date}\t"
            f"description={fmt.description}\tamount={layout}"
        )
    return 0


def cmd_categorize(description: str, *, source: str | None = None) -> int:
    """Print the category the default rule tables assign to ``description``."""

    from .rules import DEFAULT_RULESET

    print(DEFAULT_RULESET.categorize(description, source))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Normalize institution CSV exports into one categorized ledger split "
        "into income.csv and expenses.csv."
    ),
)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory without overriding set variables."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)


@app.command("normalize")
def normalize_cmd(
    input_dir: Path = typer.Option(
        Path("data"),
        envvar="LEDGER_INPUT_DIR",
        file_okay=False,
        help="Directory containing institution CSV exports.",
    ),
    output_dir: Path = typer.Option(
        Path("output"),
        envvar="LEDGER_OUTPUT_DIR",
        file_okay=False,
        help="Directory to write income.csv and expenses.csv into.",
    ),
    formats: Path | None = typer.Option(
        None,
        envvar="LEDGER_FORMATS_PATH",
        dir_okay=False,
        help="JSON format catalog overriding the built-in institutions.",
    ),
    log_level: str | None = typer.Option(
        None, envvar="LEDGER_LOG_LEVEL", help="Logging level (e.g. DEBUG, INFO)."
    ),
) -> None:
    """Normalize, categorize and split every CSV in the input directory."""

    configure_logging(log_level)
    raise typer.Exit(cmd_normalize(input_dir, output_dir, formats_path=formats))


@app.command("formats")
def formats_cmd(
    formats: Path | None = typer.Option(
        None,
        envvar="LEDGER_FORMATS_PATH",
        dir_okay=False,
        help="JSON format catalog overriding the built-in institutions.",
    ),
) -> None:
    """List known sources in filename-matching order."""

    raise typer.Exit(cmd_formats(formats_path=formats))


@app.command("categorize")
def categorize_cmd(
    description: str = typer.Argument(..., help="Transaction description text."),
    source: str | None = typer.Option(
        None, help="Source key (e.g. amazon) to use its dedicated rule table."
    ),
) -> None:
    """Show the category a description would be assigned."""

    raise typer.Exit(cmd_categorize(description, source=source))


def main() -> None:  # pragma: no cover - console script shim
    app()


if __name__ == "__main__":  # pragma: no cover
    app()
