"""
The squares of the board and the walls that can be placed in between them.

A wall always spans the edges of two squares:
* horizontal: the bottom edges of (x, y) and (x+1, y). Blocks moving between rows y and y+1.
* vertical: the right edges of (x, y) and (x, y+1). Blocks moving between columns x and x+1.

Both squares hold a reference to the same Wall. The wall remembers its anchor (the first square of the placement)
so that each reference can tell if it is the start of the segment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from src.core.shared_types import Orientation
from src.quoridor.position import Position

if TYPE_CHECKING:
    from src.quoridor.player import Player


@dataclass(frozen=True)
class Wall:
    orientation: Orientation
    anchor: Position

    def is_anchored_at(self, position: Position) -> bool:
        return self.anchor == position


@dataclass
class Square:
    position: Position
    occupant: Optional[Player] = None
    wall_bottom: Optional[Wall] = None
    wall_right: Optional[Wall] = None

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def is_vacant(self) -> bool:
        return self.occupant is None

    def has_wall_bottom(self) -> bool:
        return self.wall_bottom is not None

    def has_wall_right(self) -> bool:
        return self.wall_right is not None
