"""Match exercise names against the catalog."""

import json

import click

from ..models.matching import ExerciseMetadata
from .base import async_command, echo_success, echo_warning, ensure_initialized, get_services


@click.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--category", help="Category hint stored if the name ends up unmapped")
@click.option("--equipment", "-e", multiple=True, help="Equipment hint (repeatable)")
@click.option("--muscle", "-m", multiple=True, help="Primary muscle hint (repeatable)")
@click.option("--difficulty", help="Difficulty hint")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
@async_command
async def match(
    ctx: click.Context,
    names: tuple[str, ...],
    category: str | None,
    equipment: tuple[str, ...],
    muscle: tuple[str, ...],
    difficulty: str | None,
    as_json: bool,
):
    """Resolve one or more exercise names.

    Successful fuzzy and alias resolutions are remembered, so running the
    same name twice shows how the catalog learns.

    Examples:

        lift-match match "Benchpresss"

        lift-match match "Cable Woodchop" --category core -e "cable machine"
    """
    ensure_initialized(ctx)
    services = get_services(ctx)

    metadata = ExerciseMetadata(
        category=category,
        equipment=list(equipment) or None,
        primary_muscles=list(muscle) or None,
        difficulty=difficulty,
    )
    meta = None if metadata.is_empty() else metadata

    results = await services.matcher.match_many(list(names), [meta] * len(names))

    if as_json:
        payload = [{"input": name, **result.to_dict()} for name, result in zip(names, results)]
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for name, result in zip(names, results):
        if not result.matched:
            echo_warning(f"{name!r}: no match (queued for review)")
            continue

        detail = result.confidence.value
        if result.distance is not None:
            detail += f", distance {result.distance}"
        echo_success(f"{name!r} -> {result.exercise_name} ({detail})")
