"""
The referee: owns the one authoritative board and runs the game loop.

Never trusts a move server. Every move it receives is checked again against its own board. Anything that is not
a legal move (garbage, an illegal move, silence, a dropped connection) gets the player booted.
"""

import logging
import time
from typing import Optional

from src.core.config import RefereeConfig
from src.core.exceptions import IllegalMoveError, TransportError
from src.core.shared_types import SessionState
from src.protocol.messages import (
    BootMessage,
    GoMessage,
    PlayersMessage,
    VictorMessage,
    WentMessage,
)
from src.protocol.transport import Connection, connect
from src.quoridor.game import Game
from src.quoridor.player import Player

logger = logging.getLogger(__name__)


class Referee:
    """Orchestration of one game between the connected move servers"""

    def __init__(
        self,
        connections: dict[str, Connection],
        turn_delay: float = 0.0,
    ) -> None:
        """`connections` maps every player name to its move server. Insertion order is the turn order."""
        self.connections = dict(connections)
        self.turn_delay = turn_delay
        self.game = Game.new_game(list(self.connections.keys()))
        self.state = SessionState.AWAIT_ROSTER

    def run(self) -> Player:
        """Play until somebody wins (last player standing counts). Returns the winner."""
        try:
            self._send_roster()
            self.state = SessionState.TURN_LOOP
            winner = self.game.winner
            while winner is None:
                winner = self.play_turn()
                if winner is None and self.turn_delay:
                    time.sleep(self.turn_delay)

            logger.info("%s won the game", winner.name)
            self._broadcast(VictorMessage(name=winner.name).to_line())
            return winner
        finally:
            self.close()

    def play_turn(self) -> Optional[Player]:
        """
        One turn of the game loop
        ----

        1. ask the current player for a move
        2. check it against the authoritative board
        3. legal: apply it, broadcast WENT, next player (Game rotates the turn order)
           not legal: boot the player, broadcast BOOT, disconnect them
        4. check for a winner
        """
        player = self.game.current_player
        response = self._request_move(player)

        if response is None:
            self._boot(player, reason="no move received")
        else:
            try:
                self.game.play_turn(response)
            except IllegalMoveError as e:
                self._boot(player, reason=str(e))
            else:
                logger.info("%s went %s", player.name, response)
                self._broadcast(WentMessage(name=player.name, move=response).to_line())

        return self.game.winner

    def close(self) -> None:
        for connection in self.connections.values():
            connection.close()
        self.connections.clear()
        self.state = SessionState.CLOSED

    # -- Internal helpers --
    def _send_roster(self) -> None:
        roster = PlayersMessage(names=[player.name for player in self.game.players])
        logger.info("players: %s", " ".join(roster.names))
        self._broadcast(roster.to_line())

    def _request_move(self, player: Player) -> Optional[str]:
        """GO? to the player's move server and wait for the answer. None if the connection failed."""
        connection = self.connections.get(player.name)
        if connection is None:
            return None

        logger.debug("requesting move from %s", player.name)
        try:
            connection.send(GoMessage().to_line())
            response = connection.receive()
        except TransportError as e:
            logger.warning("lost connection to %s: %s", player.name, e)
            return None

        if response is None:
            logger.warning("%s closed the connection", player.name)
            return None
        logger.debug("received from %s: %s", player.name, response)
        return response.strip()

    def _boot(self, player: Player, reason: str) -> None:
        """Remove the player from the game, tell everybody, then hang up on them."""
        logger.warning("booting %s: %s", player.name, reason)
        self.game.boot(player)
        self._broadcast(BootMessage(name=player.name).to_line())
        connection = self.connections.pop(player.name, None)
        if connection is not None:
            connection.close()

    def _broadcast(self, line: str) -> None:
        """
        Send to every connected move server, one after another, in turn order.

        A move server we cannot reach is not booted right away. It will be, once it fails to answer on its turn.
        """
        for name, connection in list(self.connections.items()):
            try:
                connection.send(line)
            except TransportError as e:
                logger.warning("could not send %r to %s: %s", line, name, e)


def start_referee(config: RefereeConfig) -> Player:
    """
    Connect to every move server, then run the game.

    NOTE: a move server that cannot be reached at start-up is fatal (TransportError), no game is started.
    """
    connections: dict[str, Connection] = {}
    try:
        for name, address in config.roster().items():
            logger.info("connecting to %s for %s", address, name)
            connection = connect(address.host, address.port)
            connection.set_timeout(config.move_timeout)
            connections[name] = connection
    except TransportError:
        for connection in connections.values():
            connection.close()
        raise

    return Referee(connections, turn_delay=config.turn_delay).run()
