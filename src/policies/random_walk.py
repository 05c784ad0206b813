"""Roll the dice: any legal move will do"""

import random
from typing import Optional

from src.quoridor.board import Board
from src.quoridor.moves import legal_pawn_destinations, legal_wall_placements
from src.quoridor.notation import format_pawn_move, format_wall
from src.quoridor.player import Player


class RandomPolicy:
    """
    Picks a random legal pawn move. Every now and then (`wall_chance`) places a random legal wall instead.
    """

    name = "random"

    def __init__(self, seed: Optional[int] = None, wall_chance: float = 0.2) -> None:
        self.seed = seed
        self.wall_chance = wall_chance
        self.rng = random.Random(seed)

    def choose_move(self, board: Board, player: Player) -> str:
        wants_wall = player.walls > 0 and self.rng.random() < self.wall_chance
        if wants_wall:
            walls = legal_wall_placements(board, player)
            if walls:
                wall = self.rng.choice(walls)
                return format_wall(wall.first, wall.second)

        destinations = legal_pawn_destinations(board, player)
        if destinations:
            return format_pawn_move(self.rng.choice(destinations))

        # boxed in: a wall is the only thing left to try
        walls = legal_wall_placements(board, player)
        if walls:
            wall = self.rng.choice(walls)
            return format_wall(wall.first, wall.second)
        return ""

    def reset(self) -> None:
        self.rng = random.Random(self.seed)
