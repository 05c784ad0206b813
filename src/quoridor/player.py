"""Players, their goals, and the order in which they take turns"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Self

from src.core.exceptions import GameStateError
from src.quoridor.position import BOARD_DIMENSIONS, Position

MAX_PLAYERS = 4
MIN_PLAYERS = 2
WALL_POOL = 20

LAST_COLUMN = BOARD_DIMENSIONS[0] - 1
LAST_ROW = BOARD_DIMENSIONS[1] - 1

# Every player starts centered on the edge opposite to their goal
STARTING_POSITIONS: dict[int, Position] = {
    0: Position(LAST_COLUMN // 2, 0),
    1: Position(LAST_COLUMN // 2, LAST_ROW),
    2: Position(0, LAST_ROW // 2),
    3: Position(LAST_COLUMN, LAST_ROW // 2),
}

GoalFn = Callable[[Position], bool]
GOALS: dict[int, GoalFn] = {
    0: lambda position: position.y == LAST_ROW,
    1: lambda position: position.y == 0,
    2: lambda position: position.x == LAST_COLUMN,
    3: lambda position: position.x == 0,
}


@dataclass
class Player:
    number: int
    name: str
    walls: int

    @property
    def starting_position(self) -> Position:
        return STARTING_POSITIONS[self.number]

    def has_reached_goal(self, position: Position) -> bool:
        return GOALS[self.number](position)

    def use_wall(self) -> None:
        if self.walls == 0:
            raise GameStateError(f"Player {self.name} has no walls left.")
        self.walls -= 1


class TurnOrder:
    """
    FIFO queue of the players still in the game.
    ----

    The player at the head is the one to move. After a completed turn the head moves to the tail.
    Removing a player (booted, disconnected) takes them out of the queue entirely.

    NOTE: The referee and every agent hold their own instance. They stay in sync by applying the same operations
    in the same order.
    """

    def __init__(self, players: list[Player]) -> None:
        self._queue: deque[Player] = deque(players)

    @classmethod
    def from_roster(cls, names: list[str]) -> Self:
        """Number the players in roster order, and split the wall pool evenly."""
        if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
            raise GameStateError(
                f"Quoridor is played by {MIN_PLAYERS} to {MAX_PLAYERS} players, got {len(names)}."
            )
        if len(set(names)) != len(names):
            raise GameStateError(f"Player names must be unique: {names}")
        walls_each = WALL_POOL // len(names)
        return cls([Player(number, name, walls_each) for number, name in enumerate(names)])

    def __iter__(self) -> Iterator[Player]:
        return iter(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, player: object) -> bool:
        return player in self._queue

    @property
    def current(self) -> Player:
        if not self._queue:
            raise GameStateError("No players left in the game.")
        return self._queue[0]

    def rotate(self) -> None:
        """Current player goes to the back of the queue"""
        self._queue.rotate(-1)

    def remove(self, player: Player) -> None:
        self._queue.remove(player)

    def find(self, name: str) -> Optional[Player]:
        return next((player for player in self._queue if player.name == name), None)
