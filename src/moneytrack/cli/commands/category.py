"""Category management commands."""

import click
from moneytrack.cli.account_resolution import resolve_category_or_exit
from moneytrack.cli.error_handling import handle_domain_error
from moneytrack.domain.category import CategoryService
from moneytrack.domain.entities import CategoryType

TYPE_CHOICES = [category_type.value for category_type in CategoryType]


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), help="Only list one type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories grouped by type."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(ctx.obj["user_id"], type=category_type)
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    for group in CategoryType:
        members = [cat for cat in categories if cat.type is group]
        if not members:
            continue
        click.echo(f"\n{group.value.capitalize()} categories:")
        for cat in members:
            marker = " [default]" if cat.is_default else ""
            line = f"  {cat.name} (ID: {cat.id}){marker}"
            if cat.description:
                line += f" - {cat.description}"
            click.echo(line)


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), default="expense", help="Category type (default: expense)")
@click.option("--description", help="Category description")
@click.pass_context
def create_category(ctx, name: str, category_type: str, description: str | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category = service.create_category(
            user_id=ctx.obj["user_id"],
            name=name,
            type=category_type,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {category.type.value} category '{category.name}' (ID: {category.id})")


@category_group.command("update")
@click.argument("category")
@click.option("--name", help="New name")
@click.option("--type", "category_type", type=click.Choice(TYPE_CHOICES, case_sensitive=False), help="New type")
@click.option("--description", help="New description")
@click.pass_context
def update_category(ctx, category: str, name: str | None, category_type: str | None, description: str | None):
    """Update a category. CATEGORY can be a name or ID."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    category_id = resolve_category_or_exit(ctx, service, category)
    try:
        updated = service.update_category(
            category_id,
            ctx.obj["user_id"],
            name=name,
            type=category_type,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated category '{updated.name}'")


@category_group.command("delete")
@click.argument("category")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete a category that no transaction uses. CATEGORY can be a name or ID."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    category_id = resolve_category_or_exit(ctx, service, category)
    try:
        service.delete_category(category_id, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category {category}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
