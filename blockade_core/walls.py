from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .board import ORIENTATIONS, HORIZONTAL, PLAYERS, Board, Coord, Wall, as_coord, check_orientation
from .graph import path_exists
from .rejection import Rejection
from .state import GameState


@dataclass(frozen=True)
class WallCheck:
    ok: bool
    reason: Optional[Rejection]
    walls: Optional[Tuple[Wall, ...]]  # the wall tuple with the new wall, when ok


def _reject(reason: Rejection) -> WallCheck:
    return WallCheck(ok=False, reason=reason, walls=None)


def wall_anchors(board: Board, orientation: str) -> Iterator[Coord]:
    """Every anchor whose wall lies fully inside the board."""
    check_orientation(orientation)
    if orientation == HORIZONTAL:
        rows, cols = range(1, board.rows), range(0, board.cols - 1)
    else:
        rows, cols = range(0, board.rows - 1), range(1, board.cols)
    for r in rows:
        for c in cols:
            yield (r, c)


def validate_wall(state: GameState, player: str, orientation: str, anchor: Coord) -> WallCheck:
    """
    Checks, in order: bounds, inventory, overlap with a parallel wall, crossing
    a perpendicular wall, and that both players still have a route to a goal.
    The first failing check decides the reason. Nothing is mutated; on success
    the returned check carries the extended wall tuple.
    """
    check_orientation(orientation)
    inventory = state.inventory(player)
    row, col = as_coord(anchor)
    if not state.board.wall_in_bounds(orientation, row, col):
        return _reject(Rejection.OUT_OF_BOUNDS)
    if inventory.count(orientation) <= 0:
        return _reject(Rejection.NO_WALLS_LEFT)

    new_wall = Wall(orientation=orientation, row=row, col=col, owner=player)
    new_segs = set(new_wall.segments())
    for w in state.walls:
        if w.orientation == orientation and new_segs.intersection(w.segments()):
            return _reject(Rejection.WALL_ALREADY_THERE)
    for w in state.walls:
        if new_wall.crosses(w):
            return _reject(Rejection.WALL_CROSSES_EXISTING)

    next_walls = state.walls + (new_wall,)
    for side in PLAYERS:
        if not path_exists(state, side, next_walls):
            return _reject(Rejection.PATH_WOULD_BE_SEALED)
    return WallCheck(ok=True, reason=None, walls=next_walls)


def wall_is_legal(state: GameState, player: str, orientation: str, anchor: Coord) -> Optional[Rejection]:
    """None when the placement is legal, otherwise the rejection reason."""
    return validate_wall(state, player, orientation, anchor).reason


def legal_walls(state: GameState, player: str) -> List[Wall]:
    out: List[Wall] = []
    for orientation in ORIENTATIONS:
        if state.inventory(player).count(orientation) <= 0:
            continue
        for anchor in wall_anchors(state.board, orientation):
            check = validate_wall(state, player, orientation, anchor)
            if check.ok and check.walls is not None:
                out.append(check.walls[-1])
    return out


def has_legal_wall(state: GameState, player: str) -> bool:
    for orientation in ORIENTATIONS:
        if state.inventory(player).count(orientation) <= 0:
            continue
        for anchor in wall_anchors(state.board, orientation):
            if validate_wall(state, player, orientation, anchor).ok:
                return True
    return False
