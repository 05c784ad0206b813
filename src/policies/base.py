"""
Contract for move policies.

A policy gets the (shadow) board and the player whose turn it is, and answers with a move string.
The referee checks whatever comes back, so a policy is free to be wrong: it just gets its player booted.
"""

from typing import Protocol

from src.quoridor.board import Board
from src.quoridor.player import Player


class MovePolicy(Protocol):
    name: str

    def choose_move(self, board: Board, player: Player) -> str:
        """Move string in the wire notation, ex) 'V-B' or '(V-E, VI-E)'"""
        ...

    def reset(self) -> None:
        """Forget anything remembered from the previous game."""
        ...


class NoOpPolicy:
    """Does nothing. The empty answer gets it booted on its first turn."""

    name = "noop"

    def choose_move(self, board: Board, player: Player) -> str:
        return ""

    def reset(self) -> None:
        pass
