"""
Move server side of a connection.

Keeps a shadow copy of the board, updated only from what the referee broadcasts (never from the moves it proposes
itself: a proposed move only counts once it comes back as WENT). The policy gets asked for a move on every GO?.
"""

import logging
from typing import Optional

from src.core.config import AgentConfig
from src.core.exceptions import GameError, ProtocolError, TransportError
from src.core.shared_types import SessionState
from src.policies.base import MovePolicy
from src.policies.registry import create_policy
from src.protocol.messages import (
    BootMessage,
    GoMessage,
    Message,
    PlayersMessage,
    VictorMessage,
    WentMessage,
    decode,
)
from src.protocol.transport import Connection, accept_connections, listen
from src.quoridor.game import Game

logger = logging.getLogger(__name__)


class AgentSession:
    """
    One game, played over one connection.
    ----

    AWAIT_ROSTER -> TURN_LOOP -> CLOSED

    * AWAIT_ROSTER: the first line must be PLAYERS. Anything else closes the connection.
    * TURN_LOOP: answer GO?, follow WENT / BOOT, stop at VICTOR.
    * CLOSED: connection gone.
    """

    def __init__(self, connection: Connection, policy: MovePolicy) -> None:
        self.connection = connection
        self.policy = policy
        self.game: Optional[Game] = None
        self.winner: Optional[str] = None
        self.state = SessionState.AWAIT_ROSTER

    def run(self) -> Optional[str]:
        """Play until the referee declares a winner or hangs up. Returns the winner's name if one was announced."""
        try:
            if self._await_roster():
                self.state = SessionState.TURN_LOOP
                self._turn_loop()
        except TransportError as e:
            logger.warning("connection lost: %s", e)
        finally:
            self.close()
        return self.winner

    def close(self) -> None:
        self.connection.close()
        self.state = SessionState.CLOSED
        logger.info("game over")

    # -- STATES --
    def _await_roster(self) -> bool:
        line = self.connection.receive()
        if line is None:
            logger.warning("expected message from referee")
            return False

        try:
            message = decode(line)
        except ProtocolError as e:
            logger.warning("expected PLAYERS from referee: %s", e)
            return False
        if not isinstance(message, PlayersMessage):
            logger.warning("expected PLAYERS from referee, got: %r", line)
            return False

        self.game = Game.new_game(message.names)
        logger.info("players: %s", " ".join(message.names))
        return True

    def _turn_loop(self) -> None:
        while self.state == SessionState.TURN_LOOP:
            line = self.connection.receive()
            if line is None:
                logger.info("referee closed the connection")
                return

            try:
                message = decode(line)
            except ProtocolError as e:
                logger.warning("unknown message from referee: %s", e)
                continue

            if not self.handle(message):
                return

    def handle(self, message: Message) -> bool:
        """Deal with one message from the referee. False once the session should end."""
        assert self.game is not None

        if isinstance(message, GoMessage):
            self._go()
        elif isinstance(message, WentMessage):
            return self._went(message)
        elif isinstance(message, BootMessage):
            self._boot(message)
        elif isinstance(message, VictorMessage):
            logger.info("%s won!", message.name)
            self.winner = message.name
            return False
        else:
            logger.warning("unexpected message during the game: %r", message)
        return True

    # -- MESSAGE HANDLERS --
    def _go(self) -> None:
        """
        Ask the policy for a move and send it.

        NOTE: do not touch the shadow board here. The referee answers with a WENT (or BOOT) for this move.
        A policy that fails (a bug, a human closing the prompt) answers with an empty line, which gets the player
        booted. The move server itself keeps going.
        """
        assert self.game is not None
        player = self.game.current_player
        try:
            move = self.policy.choose_move(self.game.board, player)
        except Exception:
            logger.exception("policy %s failed to pick a move for %s", self.policy.name, player.name)
            move = ""
        logger.info("move for %s: %s", player.name, move)
        self.connection.send(move)

    def _went(self, message: WentMessage) -> bool:
        assert self.game is not None
        current = self.game.current_player
        if message.name != current.name:
            logger.warning(
                "WENT names %s, but it is %s's turn on this board", message.name, current.name
            )

        try:
            self.game.play_turn(message.move)
        except GameError as e:
            logger.error("board out of sync with the referee: %s", e)
            return False
        return True

    def _boot(self, message: BootMessage) -> None:
        assert self.game is not None
        try:
            player = self.game.find_player(message.name)
            self.game.boot(player)
        except GameError as e:
            logger.warning("cannot boot %s: %s", message.name, e)
            return
        logger.info("%s was booted", message.name)


def serve_games(config: AgentConfig) -> int:
    """
    Move server main loop: accept a referee, play one game, reset the policy, accept the next one.
    ----

    Stops after `config.games` games (runs forever without it). Returns the number of games played.
    NOTE: failing to set up the listening socket raises TransportError, which is fatal for the move server.
    """
    policy = create_policy(config.policy, config.seed)
    server = listen(config.host, config.port)
    games_played = 0
    try:
        logger.info("Accepting connections on %s:%s", config.host, config.port)
        for connection in accept_connections(server):
            logger.info("Connection from %s", connection.peer)
            AgentSession(connection, policy).run()
            policy.reset()
            games_played += 1
            if config.games is not None and games_played >= config.games:
                break
            logger.info("Accepting connections on %s:%s", config.host, config.port)
    finally:
        server.close()
    return games_played
