"""Dashboard command."""

import click

from dompet.cli.error_handling import handle_domain_error
from dompet.domain import aggregation
from dompet.domain.dashboard import DashboardService
from dompet.domain.entities import CategorySlice, DashboardView
from dompet.utils.currency import format_currency
from dompet.utils.date_parser import DEFAULT_PERIOD, PERIODS

BAR_WIDTH = 30


def _share_bar(value, total) -> str:
    if not total:
        return ""
    filled = round(BAR_WIDTH * float(value) / float(total))
    return "#" * filled


def _display_slices(title: str, slices: tuple[CategorySlice, ...]) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 80)
    if not slices:
        click.echo("  (no data)")
        return
    total = sum(s.value for s in slices)
    for item in slices:
        click.echo(
            f"  {item.name:30s} {format_currency(item.value):>16s}  {_share_bar(item.value, total)}"
        )


def _display_dashboard(view: DashboardView) -> None:
    summary = view.summary
    click.echo(
        f"\nDashboard ({view.period}): {view.date_range.start} to {view.date_range.end}"
    )
    click.echo("=" * 80)
    click.echo(f"  Total Balance: {format_currency(summary.total_balance):>20s}")
    click.echo(f"  Income:        {format_currency(summary.total_income):>20s}")
    click.echo(f"  Expense:       {format_currency(summary.total_expense):>20s}")
    click.echo(f"  Assets:        {format_currency(summary.total_assets):>20s}")

    _display_slices("Income by category", view.income_slices)
    _display_slices("Expense by category", view.expense_slices)

    click.echo("\nThis month vs last month")
    click.echo("-" * 80)
    for row in view.comparison:
        click.echo(
            f"  {row.name:10s} {format_currency(row.current_period):>18s} "
            f"{format_currency(row.previous_period):>18s}"
        )

    click.echo(f"\nDaily trend (last {len(view.trend)} days)")
    click.echo("-" * 80)
    for point in view.trend:
        click.echo(
            f"  {point.date:%d %b}  in {format_currency(point.income, short=True):>12s}  "
            f"out {format_currency(point.expense, short=True):>12s}"
        )

    click.echo("\nCategory summary")
    click.echo("-" * 80)
    for row in view.category_summary:
        click.echo(
            f"  {row.name:30s} {format_currency(row.total_income):>15s} "
            f"{format_currency(row.total_expense):>15s} {format_currency(row.net):>15s}"
        )
    grand = aggregation.summary_grand_total(view.category_summary)
    click.echo(
        f"  {'Total':30s} {format_currency(grand.total_income):>15s} "
        f"{format_currency(grand.total_expense):>15s} {format_currency(grand.net):>15s}"
    )


@click.command("dashboard")
@click.option(
    "--period",
    type=click.Choice(PERIODS),
    default=DEFAULT_PERIOD,
    show_default=True,
    help="Period for the summary cards, charts and category summary",
)
@click.pass_context
def dashboard(ctx, period: str):
    """Show balances, category breakdowns, trends and comparisons."""
    service = DashboardService(ctx.obj["db"], ctx.obj["cache"])
    try:
        view = service.refresh(period)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if view is None:
        click.echo("Dashboard data is not available yet.")
        return
    _display_dashboard(view)


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
