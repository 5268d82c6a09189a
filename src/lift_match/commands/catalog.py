"""Exercise catalog commands."""

import click

from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    get_services,
)


@click.group()
@click.pass_context
def catalog(ctx):
    """Inspect and maintain the exercise catalog."""
    ensure_initialized(ctx)


@catalog.command(name="list")
@click.option("--aliases", "show_aliases", is_flag=True, help="Show learned aliases per exercise")
@click.pass_context
@async_command
async def list_catalog(ctx, show_aliases: bool):
    """List catalog exercises."""
    services = get_services(ctx)
    entries = await services.exercises.list_all()

    if not entries:
        echo_info("Catalog is empty. Run 'lift-match init' first.")
        return

    headers = ["ID", "Name", "Localized", "Equipment"]
    rows = []
    for entry in entries:
        rows.append([
            entry.id,
            entry.canonical_name or "-",
            entry.localized_name,
            ", ".join(entry.required_equipment) or "bodyweight",
        ])

    click.echo()
    click.echo(format_table(headers, rows))

    if show_aliases:
        click.echo()
        for alias in await services.aliases.list_all():
            click.echo(
                f"  [{alias.id}] {alias.raw_name!r} -> {alias.target_exercise_id} ({alias.source.value})"
            )

    click.echo()
    click.echo(f"Total: {len(entries)} exercise(s)")


@catalog.command()
@click.argument("source_id")
@click.argument("target_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def merge(ctx, source_id: str, target_id: str, yes: bool):
    """Merge SOURCE_ID into TARGET_ID.

    Aliases of the source move to the target and the source is deleted.
    """
    services = get_services(ctx)

    if not yes and not click.confirm(f"Merge {source_id} into {target_id}?"):
        echo_info("Cancelled")
        return

    try:
        await services.exercises.merge(source_id, target_id)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Merged {source_id} into {target_id}")


@catalog.command()
@click.argument("alias_id", type=int)
@click.pass_context
@async_command
async def unalias(ctx, alias_id: int):
    """Delete a learned alias by ID (see 'catalog list --aliases')."""
    services = get_services(ctx)
    try:
        await services.aliases.delete(alias_id)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Deleted alias {alias_id}")
