"""Asset management commands."""

import click

from dompet.cli.error_handling import handle_domain_error, parse_or_exit
from dompet.domain.asset import AssetService
from dompet.domain.entities import ASSET_TYPES
from dompet.utils.currency import format_currency, parse_amount
from dompet.utils.date_parser import parse_date


@click.group()
def asset_group():
    """Manage owned assets."""
    pass


@asset_group.command("add")
@click.argument("name")
@click.option("--type", "asset_type", type=click.Choice(ASSET_TYPES), required=True)
@click.option("--purchase-value", required=True, help="Price paid")
@click.option("--current-value", help="Current estimated value (defaults to the purchase value)")
@click.option("--purchase-date", default="today", show_default=True, help="Purchase date")
@click.option("--description", help="Description")
@click.pass_context
def add_asset(
    ctx,
    name: str,
    asset_type: str,
    purchase_value: str,
    current_value: str | None,
    purchase_date: str,
    description: str | None,
):
    """Record an asset.

    Examples:
        dompet asset add "Motor Beat" --type Kendaraan --purchase-value 18000000 --current-value 14500000
    """
    service = AssetService(ctx.obj["db"], ctx.obj["cache"])
    bought = parse_or_exit(ctx, parse_amount, purchase_value, "purchase value")
    worth = (
        parse_or_exit(ctx, parse_amount, current_value, "current value")
        if current_value is not None
        else bought
    )
    day = parse_or_exit(ctx, parse_date, purchase_date, "purchase date")
    try:
        asset_id = service.create_asset(
            name=name,
            type=asset_type,
            purchase_value=bought,
            current_value=worth,
            purchase_date=day,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created asset '{name.strip()}' (ID: {asset_id})")


@asset_group.command("list")
@click.pass_context
def list_assets(ctx):
    """List assets with their gain or loss."""
    service = AssetService(ctx.obj["db"], ctx.obj["cache"])

    assets = service.list_assets()
    if not assets:
        click.echo("No assets found.")
        return

    click.echo("\nAssets:")
    click.echo("-" * 100)
    for asset in assets:
        click.echo(
            f"{asset.name:25s} | {asset.type:10s} | {asset.purchase_date} | "
            f"{format_currency(asset.current_value):>16s} | "
            f"P/L {format_currency(asset.profit_loss):>14s} | ID: {asset.id}"
        )
    click.echo(f"\nTotal value: {format_currency(sum(a.current_value for a in assets))}")


@asset_group.command("update")
@click.argument("asset_id")
@click.option("--name", help="New name")
@click.option("--type", "asset_type", type=click.Choice(ASSET_TYPES), help="New type")
@click.option("--purchase-value", help="New purchase value")
@click.option("--current-value", help="New current value")
@click.option("--purchase-date", help="New purchase date")
@click.option("--description", help="New description (empty string clears it)")
@click.pass_context
def update_asset(
    ctx,
    asset_id: str,
    name: str | None,
    asset_type: str | None,
    purchase_value: str | None,
    current_value: str | None,
    purchase_date: str | None,
    description: str | None,
):
    """Update an asset."""
    service = AssetService(ctx.obj["db"], ctx.obj["cache"])
    bought = None
    if purchase_value is not None:
        bought = parse_or_exit(ctx, parse_amount, purchase_value, "purchase value")
    worth = None
    if current_value is not None:
        worth = parse_or_exit(ctx, parse_amount, current_value, "current value")
    day = None
    if purchase_date is not None:
        day = parse_or_exit(ctx, parse_date, purchase_date, "purchase date")

    try:
        service.update_asset(
            asset_id,
            name=name,
            type=asset_type,
            purchase_value=bought,
            current_value=worth,
            purchase_date=day,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated asset {asset_id}")


@asset_group.command("delete")
@click.argument("asset_id")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_asset(ctx, asset_id: str, yes: bool):
    """Delete an asset."""
    service = AssetService(ctx.obj["db"], ctx.obj["cache"])
    if not yes:
        click.confirm(f"Delete asset {asset_id}?", abort=True)
    try:
        service.delete_asset(asset_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted asset {asset_id}")


def register_commands(cli):
    """Register asset commands with main CLI."""
    cli.add_command(asset_group, name="asset")
