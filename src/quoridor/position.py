"""
A position on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Quoridor board is always 9x9 (x = columns, y = rows)
BOARD_DIMENSIONS = (9, 9)

Vector = tuple[int, int]


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def shifted(self, vector: Vector) -> Position:
        """Position one step along the given direction. NOTE: Might fall outside the board."""
        dx, dy = vector
        return Position(self.x + dx, self.y + dy)

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])
