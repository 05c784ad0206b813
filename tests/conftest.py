"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.quoridor.board import Board
from src.quoridor.position import Position

BoardFactory = Callable[[dict[str, Position]], Board]


@pytest.fixture
def two_player_board() -> Board:
    """Fresh board, players in their starting squares: Alice (4, 0) and Bob (4, 8)"""
    return Board.new_game(["Alice", "Bob"])


@pytest.fixture
def board_with_players() -> BoardFactory:
    """
    Call the inner function with {name: position}. Players are numbered in the order given (so the first one
    has the goal on the last row), and then placed on the requested squares.
    """

    def _create_board(placements: dict[str, Position]) -> Board:
        board = Board.new_game(list(placements.keys()))
        # first clear every starting square, so players can be put on each other's starting squares
        for player in list(board.players()):
            board.player_location(player).occupant = None
        for player in board.players():
            position = placements[player.name]
            board.grid[position].occupant = player
            board.locations[player.name] = position
        return board

    return _create_board
