"""Let a person type the moves"""

from typing import Callable

import typer

from src.quoridor.board import Board
from src.quoridor.moves import legal_pawn_destinations
from src.quoridor.notation import format_pawn_move
from src.quoridor.player import Player

PromptFn = Callable[[str], str]


def _typer_prompt(text: str) -> str:
    return typer.prompt(text)


class HumanPolicy:
    name = "human"

    def __init__(self, prompt: PromptFn = _typer_prompt) -> None:
        self.prompt = prompt

    def choose_move(self, board: Board, player: Player) -> str:
        options = ", ".join(
            format_pawn_move(position) for position in legal_pawn_destinations(board, player)
        )
        typer.echo(f"{player.name} to move ({player.walls} walls left). Pawn moves: {options}")
        return self.prompt("Your move").strip()

    def reset(self) -> None:
        pass
