"""
Command line entry points.

Start the move servers first (one per player), then point the referee at them:

    quoridor agent --port 5000 --policy shortest-path
    quoridor agent --port 5001 --policy random
    quoridor referee localhost:5000 localhost:5001 --name Alice --name Bob
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from src.core.config import AgentAddress, AgentConfig, RefereeConfig
from src.core.exceptions import InvalidConfigError, TransportError
from src.core.logger import init_logger
from src.policies.registry import POLICIES
from src.services.agent import serve_games
from src.services.referee import start_referee

logger = logging.getLogger(__name__)

app = typer.Typer(help="Quoridor for 2 to 4 players over the network")

LogLevel = Annotated[str, typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR")]
LogFile = Annotated[Optional[Path], typer.Option("--log-file", help="Also write the log to this file")]


@app.command()
def referee(
    agents: Annotated[
        list[str], typer.Argument(help="<host>:<port> of every move server, in turn order")
    ],
    name: Annotated[
        Optional[list[str]],
        typer.Option("--name", help="Player name, once per move server (default: player1, player2, ...)"),
    ] = None,
    move_timeout: Annotated[
        Optional[float],
        typer.Option("--move-timeout", help="Seconds to wait for a move before booting the player"),
    ] = None,
    turn_delay: Annotated[
        float, typer.Option("--turn-delay", help="Seconds to pause between turns")
    ] = 0.0,
    log_level: LogLevel = "INFO",
    log_file: LogFile = None,
) -> None:
    """Connect to the move servers and referee one game."""
    init_logger(log_level, log_file)
    try:
        config = RefereeConfig(
            agents=[AgentAddress.parse(address) for address in agents],
            names=name or [],
            move_timeout=move_timeout,
            turn_delay=turn_delay,
        )
    except InvalidConfigError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2) from e

    try:
        winner = start_referee(config)
    except TransportError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1) from e
    typer.echo(f"{winner.name} won!")


@app.command()
def agent(
    port: Annotated[int, typer.Option("--port", help="Port to accept the referee on")],
    policy: Annotated[
        str, typer.Option("--policy", help=f"How to pick moves: {', '.join(POLICIES)}")
    ],
    host: Annotated[str, typer.Option("--host", help="Interface to listen on")] = "0.0.0.0",
    seed: Annotated[
        Optional[int], typer.Option("--seed", help="Seed for policies that roll dice")
    ] = None,
    games: Annotated[
        Optional[int], typer.Option("--games", help="Stop after this many games (default: never)")
    ] = None,
    log_level: LogLevel = "INFO",
    log_file: LogFile = None,
) -> None:
    """Run a move server: wait for a referee, play, repeat."""
    init_logger(log_level, log_file)
    try:
        config = AgentConfig(host=host, port=port, policy=policy, seed=seed, games=games)
    except InvalidConfigError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2) from e

    try:
        serve_games(config)
    except TransportError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1) from e


def main() -> None:
    app()


if __name__ == "__main__":
    main()
