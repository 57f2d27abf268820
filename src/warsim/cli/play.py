"""CLI command for watching a game of War."""

from __future__ import annotations

import logging

import click

from warsim.narrative.report import generate_battle_report, summarize
from warsim.play.display import StateRenderer
from warsim.play.session import GameSession, SessionConfig, Speed
from warsim.simulation.deck import DeckError
from warsim.simulation.driver import DEFAULT_MAX_TURNS
from warsim.simulation.state import FinishedState, GameState

logger = logging.getLogger(__name__)


@click.command()
@click.option("-n", "--name", required=True, help="Your commander name")
@click.option("--opponent", default="The General", show_default=True, help="Opponent name")
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "-s", "--speed",
    type=click.Choice([s.name.lower() for s in Speed]),
    default="normal",
    show_default=True,
    help="Auto-play cadence",
)
@click.option("--instant", is_flag=True, help="Skip straight to the end of the game")
@click.option("--max-turns", type=int, default=DEFAULT_MAX_TURNS, show_default=True,
              help="Turn limit before forced end")
@click.option("--report/--no-report", default=True, help="Ask for a battle report at the end")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(
    name: str,
    opponent: str,
    seed: int | None,
    speed: str,
    instant: bool,
    max_turns: int,
    report: bool,
    verbose: bool,
):
    """Deal a shuffled deck and watch NAME fight a game of War."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    if not name.strip():
        raise click.BadParameter("name must not be blank", param_hint="--name")

    config = SessionConfig(
        player_name=name.strip(),
        opponent_name=opponent,
        speed=Speed[speed.upper()],
        max_turns=max_turns,
        seed=seed,
    )
    renderer = StateRenderer()

    def show(state: GameState) -> None:
        click.echo("")
        click.echo(renderer.render(state, config.names))
        if state.logs:
            click.echo(renderer.render_logs(state, tail=1))

    click.echo(f"Seed: {config.seed} (use --seed {config.seed} to replay)")

    try:
        if instant:
            session = GameSession(config)
            session.new_game()
            state = session.run_to_end()
            click.echo(renderer.render(state, config.names))
            click.echo("")
            click.echo(renderer.render_logs(state, tail=10))
        else:
            session = GameSession(config, on_change=show)
            session.start()
            try:
                session.wait()
            except KeyboardInterrupt:
                session.pause()
                click.echo("\n\nGame paused. Exiting.")
                return
            state = session.state
    except DeckError as e:
        raise click.ClickException(str(e))

    if report and isinstance(state, FinishedState):
        click.echo("")
        click.echo("=== Battle Report ===")
        click.echo(generate_battle_report(summarize(state, config.names)))


if __name__ == "__main__":
    main()
