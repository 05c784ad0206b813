"""
Movement and wall-placing rules

Key idea: a single adjacency check, applied recursively, takes care of all the jumping rules.
Standing next to another pawn? Continue the search from that pawn's square (but never straight back).
That way straight jumps, diagonal side-steps and chains of up to three pawns need no special casing.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Protocol

from src.core.shared_types import Orientation
from src.quoridor.notation import is_wall_notation, parse_pawn_move, parse_wall
from src.quoridor.player import Player
from src.quoridor.position import BOARD_DIMENSIONS, Position, Vector
from src.quoridor.square import Square


class Board(Protocol):
    """Just the parts the rules need"""

    def square_at(self, position: Position) -> Optional[Square]: ...
    def player_location(self, player: Player) -> Square: ...
    def num_players(self) -> int: ...
    def players(self) -> Iterator[Player]: ...


@dataclass(frozen=True)
class Direction:
    name: str
    vector: Vector


# Order in which the neighbours get checked. Opposite directions are two steps apart in this table.
DIRECTIONS: tuple[Direction, ...] = (
    Direction("down", (0, 1)),
    Direction("right", (1, 0)),
    Direction("up", (0, -1)),
    Direction("left", (-1, 0)),
)
DOWN, RIGHT, UP, LEFT = range(4)

# jumping over three pawns in a row is as far as it goes (there are at most 4 players)
MAX_JUMPS = 3


def opposite(direction: int) -> int:
    return (direction + 2) % len(DIRECTIONS)


@dataclass(frozen=True)
class PawnMove:
    destination: Position


@dataclass(frozen=True)
class WallPlacement:
    first: Position
    second: Position

    @property
    def orientation(self) -> Orientation:
        return Orientation.HORIZONTAL if self.first.y == self.second.y else Orientation.VERTICAL


Move = PawnMove | WallPlacement


# --- PAWN MOVES ---
def is_blocked(origin: Square, neighbour: Square, direction: int) -> bool:
    """
    Walls are stored on the bottom / right edges only.
    Going down or right, look at your own square. Going up or left, look at the neighbour's.
    """
    if direction == DOWN:
        return origin.has_wall_bottom()
    if direction == RIGHT:
        return origin.has_wall_right()
    if direction == UP:
        return neighbour.has_wall_bottom()
    return neighbour.has_wall_right()


def is_legal_pawn_move(
    board: Board,
    origin: Square,
    destination: Square,
    excluded_direction: Optional[int] = None,
    jump_depth: int = 0,
) -> bool:
    """
    Can a pawn on `origin` reach `destination` in a single move?
    ----

    For each direction (down, right, up, left):
    1. skip it if there is no square, or a wall in between
    2. an empty neighbour that is the destination -> legal
    3. a neighbour with a pawn on it -> jump onto that pawn and check again from there.
       Do not look back in the direction we came from, and stop after MAX_JUMPS.

    NOTE: the destination is never legal when it is occupied.
    """
    for index, direction in enumerate(DIRECTIONS):
        neighbour = board.square_at(origin.position.shifted(direction.vector))
        if neighbour is None:
            continue

        if is_blocked(origin, neighbour, index):
            continue

        if neighbour.is_vacant() and neighbour.position == destination.position:
            return True

        if (
            not neighbour.is_vacant()
            and jump_depth != MAX_JUMPS
            and index != excluded_direction
            and is_legal_pawn_move(
                board, neighbour, destination, opposite(index), jump_depth + 1
            )
        ):
            return True

    return False


def validate_pawn_move(board: Board, player: Player, destination: Position) -> bool:
    """Entry point: start looking from wherever the player is standing"""
    target = board.square_at(destination)
    if target is None:
        return False
    return is_legal_pawn_move(board, board.player_location(player), target)


# --- WALLS ---
def validate_wall(board: Board, player: Player, first: Position, second: Position) -> bool:
    """
    Is there room to place a wall against these two (adjacent) squares?
    ----

    * You need to have a wall left.
    * Neither square may already have a wall along the same edge (that would overlap).
    * If the first square has a wall along the other edge, and that wall starts at this square,
      the two walls would cross in the middle.
    """
    if player.walls == 0:
        return False

    first_square = board.square_at(first)
    second_square = board.square_at(second)
    if first_square is None or second_square is None:
        return False

    if first.y == second.y:
        # horizontal: along the bottom edges
        if first_square.has_wall_bottom() or second_square.has_wall_bottom():
            return False
        crossing = first_square.wall_right
    else:
        # vertical: along the right edges
        if first_square.has_wall_right() or second_square.has_wall_right():
            return False
        crossing = first_square.wall_bottom

    return not (crossing is not None and crossing.is_anchored_at(first))


# --- COMBINED ---
def parse_move(move: str) -> Optional[Move]:
    """Read a move string. Walls are written in parentheses, everything else should be a pawn move."""
    if not move.strip():
        return None

    if is_wall_notation(move):
        squares = parse_wall(move)
        return WallPlacement(*squares) if squares else None

    destination = parse_pawn_move(move)
    return PawnMove(destination) if destination else None


def validate(board: Board, player: Player, move: str) -> Optional[Move]:
    """
    The only check the referee and the move servers use.
    ----

    Figures out if the string is a pawn move or a wall, checks the grammar, and then checks the rules against the board.
    Returns the parsed move if it is legal, otherwise None.
    """
    parsed = parse_move(move)
    if isinstance(parsed, PawnMove) and validate_pawn_move(board, player, parsed.destination):
        return parsed
    if isinstance(parsed, WallPlacement) and validate_wall(
        board, player, parsed.first, parsed.second
    ):
        return parsed
    return None


def legal_pawn_destinations(board: Board, player: Player) -> list[Position]:
    """
    All squares the player can move their pawn to.

    With jumps over up to three pawns, nothing can be further away than 4 steps, so only look that far.
    """
    origin = board.player_location(player)
    reach = MAX_JUMPS + 1
    destinations: list[Position] = []
    for dx in range(-reach, reach + 1):
        for dy in range(-reach, reach + 1):
            if abs(dx) + abs(dy) > reach or (dx, dy) == (0, 0):
                continue
            target = board.square_at(origin.position.shifted((dx, dy)))
            if target is not None and is_legal_pawn_move(board, origin, target):
                destinations.append(target.position)
    return destinations


def legal_wall_placements(board: Board, player: Player) -> list[WallPlacement]:
    """All walls the player could place right now (horizontal ones first)"""
    last_column = BOARD_DIMENSIONS[0] - 1
    last_row = BOARD_DIMENSIONS[1] - 1
    candidates = [
        WallPlacement(Position(x, y), Position(x + 1, y))
        for y in range(last_row)
        for x in range(last_column)
    ] + [
        WallPlacement(Position(x, y), Position(x, y + 1))
        for x in range(last_column)
        for y in range(last_row)
    ]
    return [
        wall
        for wall in candidates
        if validate_wall(board, player, wall.first, wall.second)
    ]


# --- VICTORY ---
def get_winner(board: Board) -> Optional[Player]:
    """
    Last player standing wins. Otherwise, the first player (in turn order) standing on their goal edge.
    """
    players = list(board.players())
    if len(players) == 1:
        return players[0]

    for player in players:
        if player.has_reached_goal(board.player_location(player).position):
            return player
    return None
