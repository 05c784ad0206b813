"""The Game board holds the squares, the walls placed in between them, and the players standing on them"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Self

from src.core.exceptions import GameStateError
from src.core.shared_types import Orientation
from src.quoridor.player import Player, TurnOrder
from src.quoridor.position import BOARD_DIMENSIONS, Position
from src.quoridor.square import Square, Wall


def empty_grid() -> dict[Position, Square]:
    return {
        Position(x, y): Square(Position(x, y))
        for x in range(BOARD_DIMENSIONS[0])
        for y in range(BOARD_DIMENSIONS[1])
    }


@dataclass
class Board:
    """
    9x9 grid of squares plus the live players in turn order.
    ----

    Invariant: a square's occupant agrees with exactly one player's location. Only the methods below mutate
    the board, and they keep both sides of that relation up to date.

    Read-only query surface (for renderers and move policies):
    `square()`, `player_location()`, `walls_remaining()`, `players()`
    """

    grid: dict[Position, Square] = field(default_factory=empty_grid)
    turn_order: TurnOrder = field(default_factory=lambda: TurnOrder([]))
    locations: dict[str, Position] = field(default_factory=dict)

    @classmethod
    def new_game(cls, names: list[str]) -> Self:
        """Create the board with every player on their starting square."""
        board = cls(turn_order=TurnOrder.from_roster(names))
        for player in board.turn_order:
            board._occupy(player, player.starting_position)
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.grid == other.grid
            and list(self.turn_order) == list(other.turn_order)
            and self.locations == other.locations
        )

    # --- QUERIES ---
    def square(self, x: int, y: int) -> Optional[Square]:
        """None if (x, y) lies outside the board"""
        return self.grid.get(Position(x, y))

    def square_at(self, position: Position) -> Optional[Square]:
        return self.grid.get(position)

    def player_location(self, player: Player) -> Square:
        if player.name not in self.locations:
            raise GameStateError(f"Player {player.name} is not on the board.")
        return self.grid[self.locations[player.name]]

    def walls_remaining(self, player: Player) -> int:
        return player.walls

    def players(self) -> Iterator[Player]:
        """Live players, in turn order"""
        return iter(self.turn_order)

    def num_players(self) -> int:
        return len(self.turn_order)

    def walls(self) -> list[Wall]:
        """Every wall on the board, listed once (by its anchor square)"""
        found: list[Wall] = []
        for square in self.grid.values():
            for wall in (square.wall_bottom, square.wall_right):
                if wall is not None and wall.is_anchored_at(square.position):
                    found.append(wall)
        return found

    # --- MUTATIONS ---
    def move_player(self, player: Player, destination: Position) -> None:
        """Vacate the old square, occupy the new one"""
        target = self.square_at(destination)
        if target is None:
            raise GameStateError(f"Cannot move {player.name} off the board: {destination}")
        if not target.is_vacant():
            raise GameStateError(f"Cannot move {player.name} to an occupied square: {destination}")
        self.player_location(player).occupant = None
        self._occupy(player, destination)

    def place_wall(self, player: Player, first: Position, second: Position) -> Wall:
        """
        Attach one wall to both squares it touches and take it from the player's pool.

        Same row -> horizontal wall along the bottom edges, same column -> vertical wall along the right edges.
        NOTE: legality is checked in moves.py, this only keeps the board consistent.
        """
        first_square = self.square_at(first)
        second_square = self.square_at(second)
        if first_square is None or second_square is None:
            raise GameStateError(f"Cannot place a wall off the board: {first}, {second}")

        player.use_wall()
        if first.y == second.y:
            wall = Wall(Orientation.HORIZONTAL, anchor=first)
            first_square.wall_bottom = wall
            second_square.wall_bottom = wall
        else:
            wall = Wall(Orientation.VERTICAL, anchor=first)
            first_square.wall_right = wall
            second_square.wall_right = wall
        return wall

    def remove_player(self, player: Player) -> None:
        """Take the player out of the turn order and vacate their square"""
        if player not in self.turn_order:
            raise GameStateError(f"Player {player.name} is not in the game.")
        self.player_location(player).occupant = None
        del self.locations[player.name]
        self.turn_order.remove(player)

    def _occupy(self, player: Player, position: Position) -> None:
        self.grid[position].occupant = player
        self.locations[player.name] = position
