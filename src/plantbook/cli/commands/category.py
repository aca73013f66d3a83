"""Expense category commands."""

import click
from plantbook.cli.error_handling import handle_domain_error
from plantbook.domain.category import ExpenseCategoryService


@click.group()
def category_group():
    """Manage expense categories."""
    pass


@category_group.command("add")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option("--description", help="Category description")
@click.pass_context
def add_category(ctx, code: str, name: str, description: str | None):
    """Create an expense category.

    Examples:
        plantbook category add FUEL "Fuel & Lubricants"
    """
    service = ExpenseCategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(code=code, name=name, description=description)
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List expense categories."""
    service = ExpenseCategoryService(ctx.obj["db"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nExpense categories:")
    click.echo("-" * 60)
    for category in categories:
        line = f"ID: {category.id:3d} | {category.category_code:10s} | {category.category_name}"
        if category.description:
            line += f" - {category.description}"
        click.echo(line)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
