"""Transaction report command with CSV and PDF export."""

import click

from dompet.cli.date_filters import resolve_cli_date_range
from dompet.cli.error_handling import handle_domain_error
from dompet.cli.resolution import resolve_bank_account_or_exit, resolve_category_or_exit
from dompet.domain.bank_account import BankAccountService
from dompet.domain.category import CategoryService
from dompet.domain.entities import ReportFilter, SortDirection, SortKey, TransactionType
from dompet.domain.export import NO_ACCOUNT, describe_filter, to_csv, to_document, write_export
from dompet.domain.report import ALL, DEFAULT_PAGE_SIZE, ReportService
from dompet.utils.currency import format_currency
from dompet.utils.date_parser import PERIODS

CASH = "none"


@click.command("report")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of explicit dates")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([ALL] + [t.value for t in TransactionType], case_sensitive=False),
    default=ALL,
    show_default=True,
)
@click.option("--category", help="Category name or ID")
@click.option("--account", help=f"Bank account name or ID, or '{CASH}' for cash transactions")
@click.option("--search", help="Case-insensitive text to find in descriptions")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([k.value for k in SortKey]),
    default=SortKey.DATE.value,
    show_default=True,
)
@click.option("--desc/--asc", "descending", default=True, help="Sort direction (default: --desc)")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), help="Export all rows as CSV")
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False), help="Export all rows as PDF")
@click.pass_context
def report(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    txn_type: str,
    category: str | None,
    account: str | None,
    search: str | None,
    sort_key: str,
    descending: bool,
    page: int,
    page_size: int,
    csv_path: str | None,
    pdf_path: str | None,
):
    """Filter, sort and page through transactions, optionally exporting them.

    Exports contain every row that matches the filter, in the chosen order,
    not just the displayed page.

    Examples:
        dompet report --period this-month --type expense
        dompet report --search kopi --sort amount --pdf laporan.pdf
        dompet report --account none --csv tunai.csv
    """
    db = ctx.obj["db"]
    category_service = CategoryService(db, ctx.obj["cache"])
    account_service = BankAccountService(db, ctx.obj["cache"])

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    kind = txn_type.lower()
    category_id = ALL
    if category:
        category_id = resolve_category_or_exit(
            ctx, category_service, category, type=None if kind == ALL else TransactionType(kind)
        )

    account_id = ALL
    if account:
        if account.lower() == CASH:
            account_id = None
        else:
            account_id = resolve_bank_account_or_exit(ctx, account_service, account)

    report_filter = ReportFilter(
        start_date=start,
        end_date=end,
        type=kind,
        category_id=category_id,
        bank_account_id=account_id,
        search=search,
    )
    direction = SortDirection.DESCENDING if descending else SortDirection.ASCENDING

    try:
        result = ReportService(db).run(
            report_filter, sort_key=sort_key, direction=direction, page=page, page_size=page_size
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not result.transactions:
        click.echo("No transactions found.")
    else:
        shown = result.page
        click.echo(
            f"\nPage {shown.page} of {shown.total_pages} ({shown.total_items} transaction(s)):"
        )
        click.echo("-" * 110)
        for txn in shown.items:
            click.echo(
                f"{txn.transaction_date} | {txn.type.label:11s} | "
                f"{format_currency(txn.amount):>16s} | "
                f"{txn.category_name or 'Uncategorized':20s} | "
                f"{txn.bank_account_name or NO_ACCOUNT:15s} | {txn.description or ''}"
            )

    totals = result.totals
    click.echo("-" * 110)
    click.echo(f"Total Pemasukan:        {format_currency(totals.total_income):>18s}")
    click.echo(f"Total Pengeluaran:      {format_currency(totals.total_expense):>18s}")
    click.echo(f"Arus Bersih (Net Flow): {format_currency(totals.net):>18s}")

    if csv_path:
        try:
            write_export(csv_path, to_csv(result.transactions))
        except ValueError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Exported {len(result.transactions)} row(s) to {csv_path}")

    if pdf_path:
        lines = describe_filter(
            report_filter,
            categories=category_service.list_categories(),
            accounts=account_service.list_bank_accounts(),
        )
        try:
            payload = to_document(result.transactions, totals=totals, filter_lines=lines)
            write_export(pdf_path, payload)
        except ValueError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Exported {len(result.transactions)} row(s) to {pdf_path}")


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
