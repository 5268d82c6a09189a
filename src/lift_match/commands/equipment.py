"""User equipment commands."""

import click

from ..models.equipment import UserEquipment
from ..errors import NotFoundError
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
def equipment(ctx):
    """Manage the equipment available to a user.

    Equipment is stored per gym. The exercises shown by 'available' are
    the ones the user can perform with it.
    """
    ensure_initialized(ctx)


@equipment.command()
@click.argument("user_id")
@click.argument("gym_id")
@click.argument("names", nargs=-1, required=True)
@click.option("--key", help="Equipment tag when it differs from the name")
@click.option("--select", "select_gym", is_flag=True, help="Also make this the user's selected gym")
@click.pass_context
@async_command
async def add(ctx, user_id: str, gym_id: str, names: tuple[str, ...], key: str | None, select_gym: bool):
    """Add equipment to a user's gym.

    Example:

        lift-match equipment add alice home "Olympic Barbell" --key barbell
    """
    services = get_services(ctx)
    for name in names:
        await services.equipment.add(
            UserEquipment(
                user_id=user_id,
                gym_id=gym_id,
                equipment_key=key or name.lower(),
                equipment_name=name,
            )
        )
    echo_success(f"Added {len(names)} item(s) to {gym_id}")

    if select_gym:
        await services.equipment.set_selected_gym(user_id, gym_id)
        echo_success(f"Selected gym {gym_id}")


@equipment.command()
@click.argument("user_id")
@click.argument("gym_id")
@click.argument("name")
@click.pass_context
@async_command
async def remove(ctx, user_id: str, gym_id: str, name: str):
    """Remove a piece of equipment from a user's gym."""
    services = get_services(ctx)
    try:
        await services.equipment.remove(user_id, gym_id, name)
    except NotFoundError as e:
        echo_error(str(e))
        ctx.exit(1)
    echo_success(f"Removed {name} from {gym_id}")


@equipment.command(name="list")
@click.argument("user_id")
@click.option("--gym", "gym_id", help="Only this gym")
@click.pass_context
@async_command
async def list_equipment(ctx, user_id: str, gym_id: str | None):
    """List a user's available equipment."""
    services = get_services(ctx)
    items = await services.equipment.list_available_for_user(user_id, gym_id)

    if not items:
        echo_info(f"No equipment recorded for {user_id}")
        return

    rows = [[item.gym_id, item.equipment_key, item.equipment_name] for item in items]
    click.echo()
    click.echo(format_table(["Gym", "Key", "Name"], rows))


@equipment.command()
@click.argument("user_id")
@click.option("--gym", "gym_id", help="Gym to filter for (defaults to the selected gym)")
@click.pass_context
@async_command
async def available(ctx, user_id: str, gym_id: str | None):
    """List exercises the user can perform."""
    services = get_services(ctx)
    entries = await services.equipment_resolver.available_for_user(user_id, gym_id)

    rows = [[entry.display_name, ", ".join(entry.required_equipment) or "bodyweight"] for entry in entries]
    click.echo()
    click.echo(format_table(["Exercise", "Equipment"], rows))
    click.echo()
    click.echo(f"Total: {len(entries)} exercise(s)")
