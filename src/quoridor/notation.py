"""
Move grammar: reading and writing moves as they are sent over the wire.
----

Columns are written as roman numerals (I - IX), rows as letters (A - I).

* pawn move: "<numeral>-<letter>"                         ex) "V-E" -> move to (4, 4)
* wall:      "(<numeral>-<letter>, <numeral>-<letter>)"   ex) "(V-E, VI-E)" -> wall below (4, 4) and (5, 4)

Parsing never raises. Anything that does not follow the grammar gives None, and the caller decides what that means
(the referee boots the player who sent it).
"""

from typing import Optional

from src.quoridor.position import BOARD_DIMENSIONS, Position

NUMERALS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX")
LETTERS: tuple[str, ...] = ("A", "B", "C", "D", "E", "F", "G", "H", "I")

# Encoding something outside the table gives these. Never a valid coordinate.
NUMERAL_SENTINEL = "@@@@@@@@@@@@@@"
LETTER_SENTINEL = "Z"


def to_roman_numeral(x: int) -> str:
    return NUMERALS[x] if 0 <= x < len(NUMERALS) else NUMERAL_SENTINEL


def from_roman_numeral(numeral: str) -> Optional[int]:
    return NUMERALS.index(numeral) if numeral in NUMERALS else None


def to_letter(y: int) -> str:
    return LETTERS[y] if 0 <= y < len(LETTERS) else LETTER_SENTINEL


def from_letter(letter: str) -> Optional[int]:
    return LETTERS.index(letter) if letter in LETTERS else None


def parse_position(coordinate: str) -> Optional[Position]:
    """'V-E' -> Position(4, 4)"""
    tokens = coordinate.strip().split("-")
    if len(tokens) != 2:
        return None

    x = from_roman_numeral(tokens[0].strip())
    y = from_letter(tokens[1].strip())
    if x is None or y is None:
        return None

    position = Position(x, y)
    return position if position.is_within_bounds() else None


def parse_pawn_move(move: str) -> Optional[Position]:
    """Destination of a pawn move"""
    return parse_position(move)


def parse_wall(move: str) -> Optional[tuple[Position, Position]]:
    """
    The two squares a wall gets placed against.
    ----

    The second square must be directly right of the first (horizontal wall, along the bottom edges)
    or directly below it (vertical wall, along the right edges).

    NOTE: a horizontal wall cannot start on the last row and a vertical wall cannot start on the last column,
    as there is no edge left to place it on.
    """
    move = move.strip()
    if not (move.startswith("(") and move.endswith(")")):
        return None

    tokens = move.split(",")
    if len(tokens) != 2:
        return None

    first = parse_position(tokens[0].replace("(", ""))
    second = parse_position(tokens[1].replace(")", ""))
    if first is None or second is None:
        return None

    last_row = BOARD_DIMENSIONS[1] - 1
    last_column = BOARD_DIMENSIONS[0] - 1
    is_horizontal = second.x == first.x + 1 and second.y == first.y and first.y != last_row
    is_vertical = second.y == first.y + 1 and second.x == first.x and first.x != last_column
    if is_horizontal or is_vertical:
        return first, second
    return None


def is_wall_notation(move: str) -> bool:
    """Walls are written between parentheses, anything else is read as a pawn move"""
    return move.strip().startswith("(")


def format_position(position: Position) -> str:
    return f"{to_roman_numeral(position.x)}-{to_letter(position.y)}"


def format_pawn_move(destination: Position) -> str:
    return format_position(destination)


def format_wall(first: Position, second: Position) -> str:
    return f"({format_position(first)}, {format_position(second)})"
