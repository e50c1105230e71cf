from __future__ import annotations

from typing import List, Set, Tuple

from .board import Coord, wall_segments
from .graph import DIAGONAL, ORTHOGONAL, diagonal_legs, slide_clear
from .state import GameState, Tokens


def legal_moves(state: GameState, player: str, index: int) -> Set[Coord]:
    """
    Destinations reachable this turn by the selected token.

    Orthogonal moves slide exactly two cells (the middle cell may hold a token),
    or one cell when that cell is an opponent start square. Diagonal moves are
    one cell and need either leg free of walls. The destination must be empty.
    """
    board = state.board
    start = state.token(player, index)
    goals = set(board.goals(player))
    occupied = state.occupied()
    segs = wall_segments(state.walls)
    r, c = start

    results: Set[Coord] = set()
    for dr, dc in ORTHOGONAL:
        for length in (2, 1):
            dest = (r + dr * length, c + dc * length)
            if not board.in_bounds(dest):
                continue
            if length == 1 and dest not in goals:
                continue
            if dest in occupied:
                continue
            if slide_clear(start, (dr, dc), length, segs):
                results.add(dest)
    for dr, dc in DIAGONAL:
        dest = (r + dr, c + dc)
        if not board.in_bounds(dest) or dest in occupied:
            continue
        if any(diagonal_legs(start, (dr, dc), segs)):
            results.add(dest)
    return results


def all_legal_moves(state: GameState, player: str) -> List[Tuple[int, Coord]]:
    """Every (token index, destination) pair available to the player, sorted."""
    out: List[Tuple[int, Coord]] = []
    for index in range(len(state.tokens(player))):
        out.extend((index, dest) for dest in sorted(legal_moves(state, player, index)))
    return out


def move_positions(state: GameState, player: str, index: int, dest: Coord) -> Tokens:
    """The player's token tuple with one token relocated. No legality check."""
    tokens = list(state.tokens(player))
    state.token(player, index)  # validates the index
    tokens[index] = dest
    return (tokens[0], tokens[1])


def is_winning_square(state: GameState, player: str, dest: Coord) -> bool:
    return dest in state.board.goals(player)
