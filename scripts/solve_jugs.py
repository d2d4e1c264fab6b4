"""CLI tool to set up a liquid-transfer puzzle, solve it and print the history.

Example::

    python -m scripts.solve_jugs --capacities "3,5,8" --target 4

The command prints the initial jars, the shortest pour sequence found by the
solver and, with ``--replay``, the history table after replaying it.
Manual pours can be applied first with ``--pour 3:2`` (1-based jar numbers).
"""

from __future__ import annotations

import logging

import click

from jugx.config import parse_config
from jugx.session import JugSession
from jugx.utils.log import configure_logging, set_verbose


def _parse_pour(item: str) -> tuple[int, int]:
    if ":" not in item:
        raise click.BadParameter("--pour must be provided as from:to, e.g. 3:2")
    source, destination = item.split(":", 1)
    try:
        return int(source) - 1, int(destination) - 1
    except ValueError:
        raise click.BadParameter(f"--pour jar numbers must be integers, got {item!r}") from None


@click.command()
@click.option(
    "--capacities",
    "capacities_text",
    type=str,
    required=True,
    help="Comma separated jar capacities, e.g. '3,5,8'.",
)
@click.option("--target", "target_text", type=str, required=True, help="Target quantity.")
@click.option(
    "--pour",
    "pours",
    multiple=True,
    help="Manual pour applied before solving, as from:to with 1-based jar numbers.",
)
@click.option(
    "--replay/--no-replay", default=True, show_default=True, help="Replay the solution found."
)
@click.option(
    "--max-states", type=int, default=None, help="Stop the search after this many states."
)
@click.option("--verbose", is_flag=True, default=False, help="Log solver progress.")
def solve_jugs(
    capacities_text: str,
    target_text: str,
    pours: tuple[str, ...],
    replay: bool,
    max_states: int | None,
    verbose: bool,
) -> None:
    configure_logging(logging.WARNING)
    if verbose:
        set_verbose(True)

    try:
        config = parse_config(capacities_text, target_text)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    session = JugSession(max_states=max_states)
    session.setup(config.capacities, config.target)
    click.echo(f"Target: {config.target}")
    click.echo(session.render())

    for item in pours:
        source, destination = _parse_pour(item)
        try:
            moved = session.pour(source, destination)
        except ValueError as exc:
            raise click.BadParameter(str(exc)) from exc
        click.echo(f"\nPour jar {source + 1} -> jar {destination + 1}: moved {moved}")
        click.echo(session.render())

    actions = session.solve()
    if actions is None:
        click.echo("\nNo solution found for the given target")
        return
    if not actions:
        click.echo("\nTarget already reached")
        return

    click.echo(f"\nSolution in {len(actions)} steps:")
    for step, action in enumerate(actions, start=1):
        click.echo(f"  {step:>3}. {action}")

    if replay:
        for _ in session.replay(actions):
            pass
        click.echo("\nFinal state:")
        click.echo(session.render())
        click.echo("\nHistory:")
        click.echo(session.format_history())


if __name__ == "__main__":
    solve_jugs()
