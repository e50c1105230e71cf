"""
Connectivity view of the board.

Everything here ignores token occupancy: it answers whether a token could
eventually travel somewhere given only the walls. Neighbors are derived on
demand from the wall segments, so the wall tuple stays the single source of
truth and no adjacency structure has to be kept in sync.
"""
from __future__ import annotations

import math
from collections import deque
from typing import AbstractSet, Collection, Deque, Iterable, List, Optional, Set, Tuple, Union

from .board import Board, Coord, Segment, Wall, wall_segments
from .state import GameState

ORTHOGONAL: Tuple[Coord, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: Tuple[Coord, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))

WallsLike = Union[Iterable[Wall], AbstractSet[Segment]]


def _as_segments(walls: WallsLike) -> AbstractSet[Segment]:
    if isinstance(walls, (set, frozenset)):
        return walls
    return wall_segments(walls)


def step_segment(a: Coord, b: Coord) -> Segment:
    """The unit edge crossed when stepping between orthogonally adjacent cells."""
    (ra, ca), (rb, cb) = a, b
    if ra == rb and abs(ca - cb) == 1:
        return ('v', ra, max(ca, cb))
    if ca == cb and abs(ra - rb) == 1:
        return ('h', max(ra, rb), ca)
    raise ValueError(f'Cells are not orthogonally adjacent: {a} -> {b}')


def edge_blocked(a: Coord, b: Coord, walls: WallsLike) -> bool:
    """Whether a wall sits on the edge between adjacent cells a and b."""
    return step_segment(a, b) in _as_segments(walls)


def slide_clear(start: Coord, delta: Coord, length: int, segs: AbstractSet[Segment]) -> bool:
    """Every edge along a straight slide of `length` cells is open."""
    dr, dc = delta
    prev = start
    for step in range(1, length + 1):
        nxt = (start[0] + dr * step, start[1] + dc * step)
        if step_segment(prev, nxt) in segs:
            return False
        prev = nxt
    return True


def diagonal_legs(start: Coord, delta: Coord, segs: AbstractSet[Segment]) -> Tuple[bool, bool]:
    """Openness of the (column-first, row-first) legs of a diagonal step."""
    r, c = start
    dr, dc = delta
    dest = (r + dr, c + dc)
    via_col = (r, c + dc)
    via_row = (r + dr, c)
    col_first = step_segment(start, via_col) not in segs and step_segment(via_col, dest) not in segs
    row_first = step_segment(start, via_row) not in segs and step_segment(via_row, dest) not in segs
    return col_first, row_first


def neighbors(
    board: Board,
    cell: Coord,
    walls: WallsLike,
    targets: Optional[Collection[Coord]] = None,
) -> List[Coord]:
    """
    Cells reachable from `cell` in one move, ignoring who stands where:
    a 2-cell orthogonal hop, a 1-cell orthogonal hop onto one of `targets`
    (any 1-cell hop when no targets are given), or a diagonal step with at
    least one open leg.
    """
    segs = _as_segments(walls)
    r, c = cell
    out: List[Coord] = []
    for dr, dc in ORTHOGONAL:
        for length in (2, 1):
            dest = (r + dr * length, c + dc * length)
            if not board.in_bounds(dest):
                continue
            if length == 1 and targets and dest not in targets:
                continue
            if slide_clear(cell, (dr, dc), length, segs):
                out.append(dest)
    for dr, dc in DIAGONAL:
        dest = (r + dr, c + dc)
        if not board.in_bounds(dest):
            continue
        if any(diagonal_legs(cell, (dr, dc), segs)):
            out.append(dest)
    return out


def _bfs_depth(
    board: Board,
    starts: Iterable[Coord],
    goals: Collection[Coord],
    segs: AbstractSet[Segment],
) -> Optional[int]:
    """Multi-source BFS; returns the depth of the first goal reached or None."""
    goal_set = set(goals)
    queue: Deque[Tuple[Coord, int]] = deque()
    seen: Set[Coord] = set()
    for s in starts:
        if s not in seen:
            seen.add(s)
            queue.append((s, 0))
    while queue:
        cur, depth = queue.popleft()
        if cur in goal_set:
            return depth
        for nxt in neighbors(board, cur, segs, goal_set):
            if nxt not in seen:
                seen.add(nxt)
                queue.append((nxt, depth + 1))
    return None


def path_exists(state: GameState, player: str, walls: Optional[WallsLike] = None) -> bool:
    """True if any of the player's tokens can still reach an opponent start square."""
    segs = _as_segments(state.walls if walls is None else walls)
    return _bfs_depth(state.board, state.tokens(player), state.board.goals(player), segs) is not None


def distance_to_goal(state: GameState, player: str, walls: Optional[WallsLike] = None) -> float:
    """Fewest moves from the player's closest token to an opponent start square (inf if sealed)."""
    segs = _as_segments(state.walls if walls is None else walls)
    depth = _bfs_depth(state.board, state.tokens(player), state.board.goals(player), segs)
    return math.inf if depth is None else depth
