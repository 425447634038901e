"""Initialize default categories."""

import click
from moneytrack.domain.category import CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the default income and expense categories.

    Categories the user already has (by name) are left alone, so running
    this twice is harmless.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = service.seed_default_categories(ctx.obj["user_id"])
    if not created:
        click.echo("Default categories already exist.")
        return
    click.echo(f"Successfully created {len(created)} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
