"""Unit tests for src/quoridor/notation.py"""

from typing import Optional

import pytest

from src.quoridor.notation import (
    LETTER_SENTINEL,
    NUMERAL_SENTINEL,
    format_pawn_move,
    format_wall,
    from_letter,
    from_roman_numeral,
    is_wall_notation,
    parse_pawn_move,
    parse_position,
    parse_wall,
    to_letter,
    to_roman_numeral,
)
from src.quoridor.position import Position


# -- COORDINATE TABLES ---
@pytest.mark.parametrize(
    "x, numeral",
    [(0, "I"), (1, "II"), (2, "III"), (3, "IV"), (4, "V"), (5, "VI"), (6, "VII"), (7, "VIII"), (8, "IX")],
)
def test_roman_numerals(x: int, numeral: str) -> None:
    """Columns 0 - 8 are written I - IX, and read back the same way"""
    assert to_roman_numeral(x) == numeral
    assert from_roman_numeral(numeral) == x


@pytest.mark.parametrize("y, letter", [(y, "ABCDEFGHI"[y]) for y in range(9)])
def test_letters(y: int, letter: str) -> None:
    assert to_letter(y) == letter
    assert from_letter(letter) == y


@pytest.mark.parametrize("out_of_range", [-1, 9, 100])
def test_encoding_out_of_range_gives_sentinels(out_of_range: int) -> None:
    """Nothing outside the board gets a real coordinate"""
    assert to_roman_numeral(out_of_range) == NUMERAL_SENTINEL
    assert to_letter(out_of_range) == LETTER_SENTINEL


@pytest.mark.parametrize("numeral", ["X", "", "v", "IIII", NUMERAL_SENTINEL, "1"])
def test_unknown_numeral(numeral: str) -> None:
    assert from_roman_numeral(numeral) is None


@pytest.mark.parametrize("letter", ["J", "", "a", "Z", "AB"])
def test_unknown_letter(letter: str) -> None:
    assert from_letter(letter) is None


# -- PAWN MOVES ---
@pytest.mark.parametrize(
    "move, expected",
    [
        ("V-E", Position(4, 4)),
        ("I-A", Position(0, 0)),
        ("IX-I", Position(8, 8)),
        ("V-B", Position(4, 1)),
        (" VIII-C ", Position(7, 2)),
    ],
)
def test_parse_pawn_move(move: str, expected: Position) -> None:
    assert parse_pawn_move(move) == expected


@pytest.mark.parametrize(
    "move",
    [
        "",
        "V",
        "V-",
        "-E",
        "V-E-F",
        "X-E",
        "V-J",
        "V-EE",
        "E-V",
        "(V-E, V-F)",
    ],
)
def test_parse_invalid_pawn_move(move: str) -> None:
    """Anything that is not exactly <numeral>-<letter> is refused (None), never raised"""
    assert parse_pawn_move(move) is None


@pytest.mark.parametrize("x, y", [(0, 0), (4, 4), (8, 8), (2, 7)])
def test_pawn_move_reserialized_parses_back(x: int, y: int) -> None:
    """Writing a parsed destination back down gives a string that reads as the same square"""
    position = parse_pawn_move(f"{to_roman_numeral(x)}-{to_letter(y)}")
    assert position is not None
    assert parse_pawn_move(format_pawn_move(position)) == position


# -- WALLS ---
@pytest.mark.parametrize(
    "move, expected",
    [
        ("(V-E, VI-E)", (Position(4, 4), Position(5, 4))),  # horizontal
        ("(V-E, V-F)", (Position(4, 4), Position(4, 5))),  # vertical
        ("(I-A,II-A)", (Position(0, 0), Position(1, 0))),  # no space needed
        ("(VIII-H, IX-H)", (Position(7, 7), Position(8, 7))),  # last allowed horizontal
        ("(VIII-H, VIII-I)", (Position(7, 7), Position(7, 8))),  # last allowed vertical
    ],
)
def test_parse_wall(move: str, expected: tuple[Position, Position]) -> None:
    assert parse_wall(move) == expected


@pytest.mark.parametrize(
    "move",
    [
        "V-E, VI-E",  # no parentheses
        "(V-E VI-E)",  # no comma
        "(V-E, VI-E, VII-E)",  # too many squares
        "(V-E, VII-E)",  # not adjacent
        "(VI-E, V-E)",  # second square must be right of / below the first
        "(V-F, V-E)",
        "(V-E, VI-F)",  # diagonal
        "(V-I, VI-I)",  # horizontal wall on the last row
        "(IX-E, IX-F)",  # vertical wall on the last column
        "(IX-E, X-E)",  # off the board
        "(V-E, V-Z)",
        "()",
    ],
)
def test_parse_invalid_wall(move: str) -> None:
    assert parse_wall(move) is None


def test_wall_notation_detection() -> None:
    assert is_wall_notation("(V-E, VI-E)")
    assert is_wall_notation("  (garbage")
    assert not is_wall_notation("V-E")


def test_format_wall() -> None:
    assert format_wall(Position(4, 4), Position(5, 4)) == "(V-E, VI-E)"
    assert parse_wall(format_wall(Position(2, 3), Position(2, 4))) == (Position(2, 3), Position(2, 4))


def test_parse_position_off_board() -> None:
    """Both tokens must come from the tables"""
    assert parse_position("IX-I") == Position(8, 8)
    assert parse_position("@@@@@@@@@@@@@@-Z") is None
