"""Category management commands."""

import click

from dompet.cli.error_handling import handle_domain_error
from dompet.cli.resolution import resolve_category_or_exit
from dompet.domain.category import CategoryService
from dompet.domain.entities import TransactionType

TYPE_CHOICE = click.Choice([t.value for t in TransactionType], case_sensitive=False)


@click.group()
def category_group():
    """Manage income and expense categories."""
    pass


@category_group.command("add")
@click.argument("name")
@click.option("--type", "category_type", type=TYPE_CHOICE, required=True, help="income or expense")
@click.option("--color", help="Chart color as #RRGGBB")
@click.option("--icon", help="Icon name")
@click.pass_context
def add_category(ctx, name: str, category_type: str, color: str | None, icon: str | None):
    """Create a category.

    Examples:
        dompet category add "Gaji" --type income --color "#22c55e"
        dompet category add "Kopi" --type expense
    """
    service = CategoryService(ctx.obj["db"], ctx.obj["cache"])
    try:
        category_id = service.create_category(
            name=name, type=TransactionType(category_type.lower()), color=color, icon=icon
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name.strip()}' (ID: {category_id})")


@category_group.command("list")
@click.option("--type", "category_type", type=TYPE_CHOICE, help="Only list one type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories."""
    service = CategoryService(ctx.obj["db"], ctx.obj["cache"])
    kind = TransactionType(category_type.lower()) if category_type else None

    categories = service.list_categories(type=kind)
    if not categories:
        click.echo("No categories found.")
        return

    for txn_type in TransactionType:
        group = [cat for cat in categories if cat.type == txn_type]
        if not group:
            continue
        click.echo(f"\n{txn_type.label}:")
        click.echo("-" * 70)
        for cat in group:
            click.echo(f"{cat.name:25s} | {cat.color or '-':8s} | ID: {cat.id}")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--color", help="New #RRGGBB color, or empty string to clear")
@click.option("--icon", help="New icon name, or empty string to clear")
@click.pass_context
def update_category(ctx, category: str, name: str | None, color: str | None, icon: str | None):
    """Update a category.

    CATEGORY can be a category name or ID.
    """
    service = CategoryService(ctx.obj["db"], ctx.obj["cache"])
    category_id = resolve_category_or_exit(ctx, service, category)
    try:
        service.update_category(category_id, name=name, color=color, icon=icon)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category {category_id}")


@category_group.command("delete")
@click.argument("category")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_category(ctx, category: str, yes: bool):
    """Delete a category.

    Transactions in the category are kept and become uncategorized.
    """
    service = CategoryService(ctx.obj["db"], ctx.obj["cache"])
    category_id = resolve_category_or_exit(ctx, service, category)
    if not yes:
        click.confirm(f"Delete category '{category}'?", abort=True)
    try:
        service.delete_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category {category_id}")


@category_group.command("init")
@click.option("--force", is_flag=True, help="Add the defaults even if categories exist")
@click.pass_context
def init_categories(ctx, force: bool):
    """Seed the default income and expense categories."""
    service = CategoryService(ctx.obj["db"], ctx.obj["cache"])
    try:
        created = service.init_defaults(force=force)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {created} default categories.")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
