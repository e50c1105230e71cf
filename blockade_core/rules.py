"""
Turn and phase bookkeeping.

A turn is a move (phase `select`) followed by a wall (phase `place_wall`),
unless the mover has no walls left, in which case the turn passes right after
the move. Landing on an opponent start square ends the game. Each accepted
operation builds one new GameState; a rejected one hands back the input state
untouched together with the reason.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .board import Coord, as_coord, check_orientation, get_preset, opponent
from .debug import trace
from .moves import all_legal_moves, is_winning_square, legal_moves, move_positions
from .rejection import Rejection
from .state import FINISHED, PLACE_WALL, SELECT, GameState, initial_state
from .walls import has_legal_wall, validate_wall


@dataclass(frozen=True)
class CommitResult:
    state: GameState
    reason: Optional[Rejection] = None

    @property
    def ok(self) -> bool:
        return self.reason is None


def new_game(preset: str = 'standard') -> GameState:
    return initial_state(get_preset(preset))


def _gate(state: GameState, player: str, phase: str) -> Optional[Rejection]:
    opponent(player)  # raises for an unknown player
    if state.is_finished():
        return Rejection.GAME_ALREADY_FINISHED
    if state.turn != player or state.phase != phase:
        return Rejection.WRONG_PHASE_OR_TURN
    return None


def _rejected(state: GameState, player: str, reason: Rejection, op: str) -> CommitResult:
    trace(f"{op} by {player} rejected: {reason.name}")
    return CommitResult(state=state, reason=reason)


def commit_move(state: GameState, player: str, index: int, dest: Coord) -> CommitResult:
    state.token(player, index)  # raises on a bad player or index
    dest = as_coord(dest)
    reason = _gate(state, player, SELECT)
    if reason is not None:
        return _rejected(state, player, reason, 'move')
    if dest not in legal_moves(state, player, index):
        return _rejected(state, player, Rejection.ILLEGAL_DESTINATION, 'move')

    moved = state.with_tokens(player, move_positions(state, player, index, dest))
    if is_winning_square(state, player, dest):
        trace(f"{player} token {index} -> {dest} wins")
        return CommitResult(replace(moved, phase=FINISHED, winner=player))
    if state.inventory(player).total == 0:
        trace(f"{player} token {index} -> {dest}; no walls left, turn passes")
        return CommitResult(moved.with_turn(opponent(player), SELECT))
    trace(f"{player} token {index} -> {dest}")
    return CommitResult(moved.with_turn(player, PLACE_WALL))


def commit_wall(state: GameState, player: str, orientation: str, anchor: Coord) -> CommitResult:
    check_orientation(orientation)
    anchor = as_coord(anchor)
    reason = _gate(state, player, PLACE_WALL)
    if reason is not None:
        return _rejected(state, player, reason, 'wall')
    check = validate_wall(state, player, orientation, anchor)
    if not check.ok or check.walls is None:
        return _rejected(state, player, check.reason or Rejection.OUT_OF_BOUNDS, 'wall')

    placed = replace(state, walls=check.walls)
    placed = placed.with_inventory(player, state.inventory(player).spend(orientation))
    trace(f"{player} places {orientation} wall at {anchor}")
    return CommitResult(placed.with_turn(opponent(player), SELECT))


def pass_turn(state: GameState, player: str) -> CommitResult:
    """Forfeit the move when none of the player's tokens can move."""
    reason = _gate(state, player, SELECT)
    if reason is not None:
        return _rejected(state, player, reason, 'pass')
    if all_legal_moves(state, player):
        return _rejected(state, player, Rejection.MOVE_AVAILABLE, 'pass')
    trace(f"{player} has no legal move and passes")
    return CommitResult(state.with_turn(opponent(player), SELECT))


def skip_wall(state: GameState, player: str) -> CommitResult:
    """Give up the wall phase when no placement is legal for the player."""
    reason = _gate(state, player, PLACE_WALL)
    if reason is not None:
        return _rejected(state, player, reason, 'skip_wall')
    if has_legal_wall(state, player):
        return _rejected(state, player, Rejection.WALL_AVAILABLE, 'skip_wall')
    trace(f"{player} skips wall placement")
    return CommitResult(state.with_turn(opponent(player), SELECT))
