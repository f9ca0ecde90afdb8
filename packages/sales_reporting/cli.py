# ruff: noqa: I001
"""CLI for the ``sales_reporting`` package.

A Typer console interface over the reporting engine. Environment variables
(notably ``DATABASE_URL``) are loaded from a local ``.env`` using
``python-dotenv`` before any command runs. Business logic lives in
``sales_reporting.report``, ``sales_reporting.export`` and
``sales_reporting.persistence``.

Commands
--------
- ``report``: print one report page as camelCase JSON.
- ``export-csv``: write every filtered row to a CSV file.
- ``ingest``: upsert invoices from a JSON file into ``sr_invoices``.

Failures print ``Error: ...`` to stderr and exit with status 1.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from typer.models import OptionInfo

from .logging_setup import configure_logging
from .models import ReportQuery


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Sales reporting and analytics over tenant invoices. "
        "Loads DATABASE_URL from a local .env before running."
    ),
)


# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults). Typer inspects these when used as default values below.
TENANT_OPTION: OptionInfo = typer.Option(
    "", "--tenant", help="Tenant identity; blank uses the configured fallback tenant."
)
DATABASE_URL_OPTION: OptionInfo = typer.Option(
    None, "--database-url", help="Override DATABASE_URL (falls back to env var)."
)


def _fail(message: str) -> typer.Exit:
    print(f"Error: {message}", file=sys.stderr)
    return typer.Exit(1)


def _build_query(**raw: object) -> ReportQuery:
    # Drop unset options so the model defaults apply.
    return ReportQuery.model_validate({k: v for k, v in raw.items() if v is not None})


@app.command("report")
def report_cmd(
    tenant: str = TENANT_OPTION,
    *,
    date_filter: str = typer.Option(
        "THIS_MONTH", help="TODAY, THIS_WEEK, THIS_MONTH, LAST_6_MONTHS, THIS_YEAR or CUSTOM."
    ),
    from_date: str | None = typer.Option(None, "--from", help="CUSTOM start (YYYY-MM-DD)."),
    to_date: str | None = typer.Option(None, "--to", help="CUSTOM end (YYYY-MM-DD)."),
    search: str | None = typer.Option(None, help="Substring of invoice number or customer."),
    payment_method: str | None = typer.Option(None, help="Payment method, or ALL."),
    metal_type: str | None = typer.Option(None, help="GOLD, SILVER, PLATINUM, DIAMOND or ALL."),
    salesperson: str | None = typer.Option(None, help="Salesperson filter."),
    min_amount: str | None = typer.Option(None, help="Minimum net amount (inclusive)."),
    max_amount: str | None = typer.Option(None, help="Maximum net amount (inclusive)."),
    page: int = typer.Option(0, help="Zero-based page number."),
    size: int = typer.Option(10, help="Page size (clamped to 1..100)."),
    sort_by: str = typer.Option(
        "date",
        help="invoiceNumber, date, customerName, paymentMethod, metalType or netAmount.",
    ),
    sort_dir: str = typer.Option("desc", help="asc or desc."),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Print a sales report page as JSON."""

    # Deferred imports to keep CLI startup fast
    from .config import ReportSettings
    from .report import generate_sales_report
    from .sources import RecordSourceError
    from .sql_source import SqlRecordSource

    try:
        query = _build_query(
            date_filter=date_filter,
            from_=from_date,
            to=to_date,
            search=search,
            payment_method=payment_method,
            metal_type=metal_type,
            salesperson=salesperson,
            min_amount=min_amount,
            max_amount=max_amount,
            page=page,
            size=size,
            sort_by=sort_by,
            sort_dir=sort_dir,
        )
    except ValidationError as e:
        raise _fail(f"invalid report parameters: {e}") from e

    settings = ReportSettings.from_env(database_url=database_url)
    try:
        report = generate_sales_report(
            SqlRecordSource(settings.database_url), tenant, query, settings=settings
        )
    except (RecordSourceError, RuntimeError) as e:
        raise _fail(f"report failed: {e}") from e

    print(report.model_dump_json(by_alias=True, indent=2))


@app.command("export-csv")
def export_csv_cmd(
    tenant: str = TENANT_OPTION,
    *,
    output: Path = typer.Option(..., "--output", help="CSV file to write.", dir_okay=False),
    date_filter: str = typer.Option("THIS_MONTH", help="Named date window or CUSTOM."),
    from_date: str | None = typer.Option(None, "--from", help="CUSTOM start (YYYY-MM-DD)."),
    to_date: str | None = typer.Option(None, "--to", help="CUSTOM end (YYYY-MM-DD)."),
    search: str | None = typer.Option(None, help="Substring of invoice number or customer."),
    payment_method: str | None = typer.Option(None, help="Payment method, or ALL."),
    metal_type: str | None = typer.Option(None, help="Metal token, or ALL."),
    salesperson: str | None = typer.Option(None, help="Salesperson filter."),
    min_amount: str | None = typer.Option(None, help="Minimum net amount (inclusive)."),
    max_amount: str | None = typer.Option(None, help="Maximum net amount (inclusive)."),
    sort_by: str = typer.Option("date", help="Sort field (see `report --help`)."),
    sort_dir: str = typer.Option("desc", help="asc or desc."),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Write every filtered row (not just one page) to a CSV file."""

    from .config import ReportSettings
    from .export import export_sales_csv
    from .sources import RecordSourceError
    from .sql_source import SqlRecordSource

    try:
        query = _build_query(
            date_filter=date_filter,
            from_=from_date,
            to=to_date,
            search=search,
            payment_method=payment_method,
            metal_type=metal_type,
            salesperson=salesperson,
            min_amount=min_amount,
            max_amount=max_amount,
            sort_by=sort_by,
            sort_dir=sort_dir,
        )
    except ValidationError as e:
        raise _fail(f"invalid report parameters: {e}") from e

    settings = ReportSettings.from_env(database_url=database_url)
    try:
        with output.open("w", encoding="utf-8", newline="") as fh:
            written = export_sales_csv(
                SqlRecordSource(settings.database_url), tenant, fh, query, settings=settings
            )
    except PermissionError as e:
        raise _fail(f"Permission denied: {output}") from e
    except (RecordSourceError, RuntimeError, OSError) as e:
        raise _fail(f"export failed: {e}") from e

    print(f"Wrote {written} rows to {output}")


@app.command("ingest")
def ingest_cmd(
    json_path: Path = typer.Option(
        ..., "--json-path", help="JSON array of invoices to upsert.", dir_okay=False
    ),
    database_url: str | None = DATABASE_URL_OPTION,
) -> None:
    """Upsert invoices from a JSON file into ``sr_invoices``."""

    from db.client import session_scope
    from sqlalchemy.exc import SQLAlchemyError

    from .ingest import load_invoices_json
    from .persistence import upsert_invoices

    try:
        invoices = load_invoices_json(json_path)
    except FileNotFoundError as e:
        raise _fail(f"File not found: {json_path}") from e
    except ValueError as e:
        raise _fail(str(e)) from e

    try:
        with session_scope(database_url=database_url) as session:
            written = upsert_invoices(session, invoices)
    except (SQLAlchemyError, RuntimeError) as e:
        raise _fail(f"persistence (upsert) failed: {e}") from e

    print(f"Upserted {written} invoices")


@app.callback()
def _root() -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    # Central logging setup so child loggers inherit configuration
    configure_logging()


if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    # Running as a module: `python -m sales_reporting.cli`
    app()
