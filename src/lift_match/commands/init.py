"""Initialize catalog command."""

import click

from ..data.exercise_loader import seed_catalog_from_json
from ..db import init_db
from .base import async_command, echo_info, echo_success, get_config


@click.command()
@click.pass_context
@async_command
async def init(ctx: click.Context):
    """Initialize the lift-match database and exercise catalog.

    Creates the data directory, the SQLite schema, and seeds the built-in
    catalog plus the bundled JSON catalog. Safe to run more than once.
    """
    config = get_config(ctx)

    echo_info(f"Initializing lift-match in {config.data_dir}")
    config.data_dir.mkdir(parents=True, exist_ok=True)

    await init_db(config.db_path)
    echo_success("Database initialized")

    count = await seed_catalog_from_json(config.db_path)
    echo_success(f"Exercise catalog populated ({count} new exercises)")

    click.echo()
    click.echo("Next steps:")
    click.echo('  lift-match match "Benchpress"        # Resolve an exercise name')
    click.echo("  lift-match unmapped list             # Review names nothing matched")
    click.echo("  lift-match serve                     # Start the HTTP API")
