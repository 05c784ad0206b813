"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of Quoridor.

Both the referee (authoritative board) and every move server (shadow board) play through this class.
Applying the same calls in the same order keeps all copies of the board identical.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import GameStateError, IllegalMoveError
from src.core.shared_types import Status
from src.quoridor.board import Board
from src.quoridor.moves import Move, PawnMove, WallPlacement, get_winner, validate
from src.quoridor.player import Player


@dataclass
class Game:
    board: Board
    moves: list[str] = field(default_factory=list)
    status: Status = Status.IN_PROGRESS

    @classmethod
    def new_game(cls, names: list[str]) -> Self:
        """Players are numbered in roster order, which also fixes the turn order"""
        return cls(board=Board.new_game(names))

    @property
    def current_player(self) -> Player:
        return self.board.turn_order.current

    @property
    def players(self) -> list[Player]:
        return list(self.board.players())

    @property
    def winner(self) -> Optional[Player]:
        return get_winner(self.board)

    def find_player(self, name: str) -> Player:
        player = self.board.turn_order.find(name)
        if player is None:
            raise GameStateError(f"No player named {name!r} in this game.")
        return player

    def validate(self, move: str) -> Optional[Move]:
        """Check a move string for the player whose turn it is. None if it is not legal."""
        return validate(self.board, self.current_player, move)

    def play_turn(self, move: str) -> Move:
        """
        Make a move for the current player
        ----

        1. check the game is still going
        2. check the move is legal
        3. update the board
        4. record the move
        5. next player's turn
        6. update game status
        """
        self._assert_in_progress()
        legal_move = self.validate(move)
        if legal_move is None:
            raise IllegalMoveError(f"Move not allowed for {self.current_player.name}: {move!r}")

        self._update_board(self.current_player, legal_move)
        self.moves.append(move.strip())
        self.board.turn_order.rotate()
        self._update_game_status()
        return legal_move

    def boot(self, player: Player) -> None:
        """
        Take a player out of the game.

        NOTE: no rotation needed afterwards. Removing the player at the head already makes it the next player's turn.
        """
        self._assert_in_progress()
        self.board.remove_player(player)
        self._update_game_status()

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _update_board(self, player: Player, move: Move) -> None:
        if isinstance(move, PawnMove):
            self.board.move_player(player, move.destination)
        elif isinstance(move, WallPlacement):
            self.board.place_wall(player, move.first, move.second)

    def _update_game_status(self) -> None:
        if self.winner is not None:
            self.status = Status.FINISHED
