"""Unmapped exercise review commands."""

import click
import questionary
from questionary import Style

from ..models.exercises import CatalogEntry
from ..models.matching import UnmappedEntry
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    format_table,
    get_services,
)

review_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)


@click.group()
@click.pass_context
def unmapped(ctx):
    """Review exercise names nothing could match.

    Names are listed most frequent first. Each can be aliased to an
    existing exercise, turned into a new exercise, or rejected.
    """
    ensure_initialized(ctx)


@unmapped.command(name="list")
@click.option("--limit", "-n", default=50, type=int, help="Maximum rows to show")
@click.pass_context
@async_command
async def list_unmapped(ctx, limit: int):
    """List pending unmapped names."""
    services = get_services(ctx)
    pending = await services.review_queue.list_pending()

    if not pending:
        echo_info("No unmapped exercises. Everything resolves.")
        return

    headers = ["ID", "Name", "Count", "Reason", "Last seen"]
    rows = []
    for entry in pending[:limit]:
        last_seen = entry.last_seen_at.strftime("%Y-%m-%d %H:%M") if entry.last_seen_at else "N/A"
        rows.append([
            str(entry.id),
            entry.ai_name[:40] + "..." if len(entry.ai_name) > 40 else entry.ai_name,
            str(entry.occurrence_count),
            entry.suggested_match or "",
            last_seen,
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(pending)} unmapped name(s)")


@unmapped.command()
@click.argument("entry_id", type=int)
@click.argument("exercise_id")
@click.pass_context
@async_command
async def resolve(ctx, entry_id: int, exercise_id: str):
    """Alias an unmapped name to an existing exercise.

    EXERCISE_ID is the catalog ID shown by 'lift-match catalog list'.
    """
    services = get_services(ctx)
    try:
        target = await services.review_queue.resolve_with_alias(entry_id, exercise_id)
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Aliased to {target.display_name}")


@unmapped.command()
@click.argument("entry_id", type=int)
@click.option("--name", "canonical_name", required=True, help="English name of the new exercise")
@click.option("--localized", "localized_name", help="Swedish display name (defaults to --name)")
@click.option("--external-id", help="Stable catalog code, e.g. cable_woodchop")
@click.pass_context
@async_command
async def create(ctx, entry_id: int, canonical_name: str, localized_name: str | None, external_id: str | None):
    """Create a new exercise from an unmapped name."""
    services = get_services(ctx)
    try:
        entry = await services.review_queue.resolve_with_new_exercise(
            entry_id, canonical_name, localized_name=localized_name, external_id=external_id
        )
    except ValueError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Created {entry.display_name} (ID: {entry.id})")


@unmapped.command()
@click.argument("entry_ids", type=int, nargs=-1, required=True)
@click.pass_context
@async_command
async def reject(ctx, entry_ids: tuple[int, ...]):
    """Reject one or more unmapped names."""
    services = get_services(ctx)
    if len(entry_ids) == 1:
        try:
            await services.review_queue.reject(entry_ids[0])
        except ValueError as e:
            echo_error(str(e))
            ctx.exit(1)
        echo_success(f"Rejected {entry_ids[0]}")
        return

    removed = await services.review_queue.reject_many(list(entry_ids))
    echo_success(f"Rejected {removed} of {len(entry_ids)} name(s)")


@unmapped.command()
@click.pass_context
@async_command
async def cleanup(ctx):
    """Remove names that now resolve by exact or alias lookup."""
    services = get_services(ctx)
    removed = await services.review_queue.cleanup()
    if removed:
        echo_success(f"Removed {removed} name(s) that now resolve")
    else:
        echo_info("Nothing to clean up")


@unmapped.command()
@click.pass_context
@async_command
async def review(ctx):
    """Walk through pending names interactively."""
    services = get_services(ctx)
    pending = await services.review_queue.list_pending()
    if not pending:
        echo_info("No unmapped exercises to review")
        return

    catalog = await services.exercises.list_all()
    resolved = 0

    for entry in pending:
        click.echo()
        click.echo(click.style(entry.ai_name, bold=True) + f"  (seen {entry.occurrence_count}x)")
        if entry.suggested_match:
            click.echo(f"  {entry.suggested_match}")

        action = await questionary.select(
            "What should happen to this name?",
            choices=[
                questionary.Choice("Alias to an existing exercise", "alias"),
                questionary.Choice("Create a new exercise", "create"),
                questionary.Choice("Reject", "reject"),
                questionary.Choice("Skip", "skip"),
                questionary.Choice("Quit", "quit"),
            ],
            style=review_style,
        ).ask_async()

        if action in (None, "quit"):
            break
        if action == "skip":
            continue

        if await _apply_review_action(services, entry, action, catalog):
            resolved += 1

    click.echo()
    echo_success(f"Resolved {resolved} name(s)")


async def _apply_review_action(services, entry: UnmappedEntry, action: str, catalog: list[CatalogEntry]) -> bool:
    queue = services.review_queue

    if action == "reject":
        await queue.reject(entry.id)
        return True

    if action == "alias":
        target_id = await questionary.select(
            "Which exercise is it?",
            choices=[questionary.Choice(e.display_name, e.id) for e in catalog],
            style=review_style,
        ).ask_async()
        if target_id is None:
            return False
        target = await queue.resolve_with_alias(entry.id, target_id)
        echo_success(f"Aliased to {target.display_name}")
        return True

    canonical_name = await questionary.text(
        "English name for the new exercise:",
        default=entry.ai_name,
        style=review_style,
    ).ask_async()
    if not canonical_name:
        echo_warning("No name given, skipping")
        return False
    try:
        new_entry = await queue.resolve_with_new_exercise(entry.id, canonical_name)
    except ValueError as e:
        echo_error(str(e))
        return False
    catalog.append(new_entry)
    echo_success(f"Created {new_entry.display_name}")
    return True
