"""
Greedy policy based on breadth-first search distances to the goal edge.

Walls count, pawns do not (they move anyway).
"""

from collections import deque
from copy import deepcopy
from typing import Optional

from src.quoridor.board import Board
from src.quoridor.moves import (
    DIRECTIONS,
    WallPlacement,
    is_blocked,
    legal_pawn_destinations,
    legal_wall_placements,
)
from src.quoridor.notation import format_pawn_move, format_wall
from src.quoridor.player import Player
from src.quoridor.position import Position


def distance_to_goal(board: Board, player: Player, start: Position) -> Optional[int]:
    """Number of single steps from `start` to the player's goal edge. None if walled off completely."""
    visited = {start}
    queue: deque[tuple[Position, int]] = deque([(start, 0)])
    while queue:
        position, distance = queue.popleft()
        if player.has_reached_goal(position):
            return distance

        origin = board.square_at(position)
        assert origin is not None
        for index, direction in enumerate(DIRECTIONS):
            neighbour = board.square_at(position.shifted(direction.vector))
            if neighbour is None or neighbour.position in visited:
                continue
            if is_blocked(origin, neighbour, index):
                continue
            visited.add(neighbour.position)
            queue.append((neighbour.position, distance + 1))
    return None


class ShortestPathPolicy:
    """
    Step along the shortest path to the goal.
    ----

    When an opponent is closer to their goal than we are to ours, look for a wall that slows them down more than it
    slows us down, and place that instead.

    NOTE: walls that cut somebody off completely are never chosen (the referee would allow them, but it would make
    the game unwinnable for that player).
    """

    name = "shortest-path"

    def choose_move(self, board: Board, player: Player) -> str:
        own_distance = self._distance(board, player)
        if player.walls > 0:
            wall = self._best_wall(board, player, own_distance)
            if wall is not None:
                return format_wall(wall.first, wall.second)

        destinations = legal_pawn_destinations(board, player)
        if not destinations:
            return ""
        best = min(
            destinations,
            key=lambda position: _or_far(distance_to_goal(board, player, position)),
        )
        return format_pawn_move(best)

    def reset(self) -> None:
        pass

    def _distance(self, board: Board, player: Player) -> int:
        location = board.player_location(player).position
        return _or_far(distance_to_goal(board, player, location))

    def _best_wall(
        self, board: Board, player: Player, own_distance: int
    ) -> Optional[WallPlacement]:
        opponents = [other for other in board.players() if other != player]
        if not opponents:
            return None
        leader = min(opponents, key=lambda other: self._distance(board, other))
        leader_distance = self._distance(board, leader)
        if leader_distance >= own_distance:
            return None

        best_wall: Optional[WallPlacement] = None
        best_gain = 0
        for wall in legal_wall_placements(board, player):
            trial = _with_wall(board, player, wall)
            new_leader = distance_to_goal(trial, leader, trial.player_location(leader).position)
            new_own = distance_to_goal(trial, player, trial.player_location(player).position)
            cuts_off = any(
                distance_to_goal(trial, other, trial.player_location(other).position) is None
                for other in trial.players()
            )
            if cuts_off or new_leader is None or new_own is None:
                continue
            gain = (new_leader - leader_distance) - (new_own - own_distance)
            if gain > best_gain:
                best_wall, best_gain = wall, gain
        return best_wall


# far enough that any reachable square is preferred
UNREACHABLE = 10_000


def _or_far(distance: Optional[int]) -> int:
    return UNREACHABLE if distance is None else distance


def _with_wall(board: Board, player: Player, wall: WallPlacement) -> Board:
    """Copy of the board with the wall placed, to look ahead without touching the real one"""
    trial = deepcopy(board)
    trial_player = trial.turn_order.find(player.name)
    assert trial_player is not None
    trial.place_wall(trial_player, wall.first, wall.second)
    return trial
