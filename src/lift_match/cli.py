"""CLI entry point for lift-match."""

from dataclasses import replace
from pathlib import Path

import click

from .commands import catalog, equipment, init, match, serve, unmapped
from .config import Config
from .logging import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="lift-match")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Override LIFT_MATCH_DATA_DIR")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output")
@click.pass_context
def main(ctx: click.Context, data_dir: str | None, verbose: bool):
    """lift-match: resolve AI-generated exercise names onto a catalog.

    Example usage:

        # Create the database and seed the catalog
        lift-match init

        # Resolve names
        lift-match match "Benchpresss" "Knäböj"

        # Review what could not be matched
        lift-match unmapped review
    """
    config = Config.from_env()
    if data_dir:
        config = replace(config, data_dir=Path(data_dir))
    setup_logging(config.log_format, "DEBUG" if verbose else config.log_level)
    ctx.obj = {"config": config}


# Register commands
main.add_command(init)
main.add_command(match)
main.add_command(unmapped)
main.add_command(catalog)
main.add_command(equipment)
main.add_command(serve)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()
