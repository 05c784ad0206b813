"""In-memory stand-ins for the socket connections used by the referee and the move servers."""

from typing import Optional

from src.core.exceptions import TransportError
from src.quoridor.board import Board
from src.quoridor.player import Player


class ScriptedConnection:
    """
    Hands out the scripted lines one by one on receive(), then behaves as if the other side hung up (None).
    Everything sent is recorded.
    """

    def __init__(self, incoming: Optional[list[str]] = None, fail_on_receive: bool = False) -> None:
        self.incoming = list(incoming or [])
        self.sent: list[str] = []
        self.closed = False
        self.fail_on_receive = fail_on_receive
        self.timeout: Optional[float] = None
        self.peer = "scripted"

    def set_timeout(self, seconds: Optional[float]) -> None:
        self.timeout = seconds

    def send(self, line: str) -> None:
        if self.closed:
            raise TransportError("connection closed")
        self.sent.append(line)

    def receive(self) -> Optional[str]:
        if self.fail_on_receive:
            raise TransportError("timed out")
        if self.closed or not self.incoming:
            return None
        return self.incoming.pop(0)

    def close(self) -> None:
        self.closed = True


class ScriptedPolicy:
    """Plays the given moves in order, then nothing"""

    name = "scripted"

    def __init__(self, moves: list[str]) -> None:
        self.moves = list(moves)
        self.seen: list[str] = []

    def choose_move(self, board: Board, player: Player) -> str:
        self.seen.append(player.name)
        return self.moves.pop(0) if self.moves else ""

    def reset(self) -> None:
        self.seen.clear()
