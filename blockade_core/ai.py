"""
Single-difficulty heuristic opponent.

The move is picked by comparing BFS distances to goal after each candidate
move, nudged toward the centre of the board. The wall is picked by how much it
lengthens the opponent's route without lengthening ours, favouring walls near
the opponent's tokens. A seeded random source adds small jitter so equal
candidates do not always resolve the same way.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import ORIENTATIONS, Coord, Wall, opponent, wall_segments
from .debug import trace
from .graph import diagonal_legs, distance_to_goal
from .moves import all_legal_moves, is_winning_square, move_positions
from .rules import commit_move, commit_wall, pass_turn, skip_wall
from .state import PLACE_WALL, SELECT, GameState
from .walls import validate_wall, wall_anchors

CENTER_WEIGHT = 0.3
HOP_PENALTY = 0.5
MOVE_NOISE = 0.2
WALL_NOISE = 0.1
PROXIMITY_RANGE = 6
PROXIMITY_CAP = 12
PROXIMITY_WEIGHT = 0.4
UNREACHABLE = 1000  # stands in for an infinite distance so scores stay finite


@dataclass(frozen=True)
class MoveChoice:
    index: int
    dest: Coord
    score: float


@dataclass(frozen=True)
class WallChoice:
    orientation: str
    anchor: Coord
    score: float


@dataclass(frozen=True)
class TurnPlan:
    state: GameState
    move: Optional[MoveChoice] = None
    wall: Optional[WallChoice] = None


def _finite(d: float) -> float:
    return UNREACHABLE if math.isinf(d) else d


def _hop_penalty(state: GameState, start: Coord, dest: Coord) -> float:
    """Discourage diagonal bypasses that squeeze round the end of a wall."""
    dr, dc = dest[0] - start[0], dest[1] - start[1]
    if abs(dr) != 1 or abs(dc) != 1:
        return 0.0
    legs = diagonal_legs(start, (dr, dc), wall_segments(state.walls))
    return 0.0 if all(legs) else HOP_PENALTY


def score_move(state: GameState, player: str, index: int, dest: Coord, rng: random.Random) -> float:
    after = state.with_tokens(player, move_positions(state, player, index, dest))
    my_dist = _finite(distance_to_goal(after, player))
    opp_dist = _finite(distance_to_goal(after, opponent(player)))
    center_r, center_c = state.board.center()
    center_bias = -CENTER_WEIGHT * (abs(dest[0] - center_r) + abs(dest[1] - center_c))
    penalty = _hop_penalty(state, state.token(player, index), dest)
    return (opp_dist - my_dist) + center_bias - penalty + rng.uniform(0, MOVE_NOISE)


def choose_move(state: GameState, player: str, rng: random.Random) -> Optional[MoveChoice]:
    """Best scoring (token, destination); a winning move always beats a non-winning one."""
    best: Optional[Tuple[bool, float, MoveChoice]] = None
    for index, dest in all_legal_moves(state, player):
        score = score_move(state, player, index, dest, rng)
        wins = is_winning_square(state, player, dest)
        if best is None or (wins, score) > best[:2]:
            best = (wins, score, MoveChoice(index=index, dest=dest, score=score))
    return None if best is None else best[2]


def score_wall(
    state: GameState,
    player: str,
    anchor: Coord,
    walls: Tuple[Wall, ...],
    rng: random.Random,
    base_opp: Optional[float] = None,
    base_self: Optional[float] = None,
) -> float:
    """
    Score of the position after a wall at `anchor`, with `walls` the wall tuple
    including it. Opponent distance gained counts double; any distance we lose
    ourselves is subtracted; walls close to an opponent token get a bonus.
    """
    opp = opponent(player)
    if base_opp is None:
        base_opp = _finite(distance_to_goal(state, opp))
    if base_self is None:
        base_self = _finite(distance_to_goal(state, player))
    dist_gain = _finite(distance_to_goal(state, opp, walls)) - base_opp
    self_penalty = max(0, _finite(distance_to_goal(state, player, walls)) - base_self)
    nearest = min([abs(r - anchor[0]) + abs(c - anchor[1]) for r, c in state.tokens(opp)] + [PROXIMITY_CAP])
    proximity_bonus = max(0, PROXIMITY_RANGE - nearest) * PROXIMITY_WEIGHT
    return dist_gain * 2 - self_penalty + proximity_bonus + rng.uniform(0, WALL_NOISE)


def choose_wall(state: GameState, player: str, rng: random.Random) -> Optional[WallChoice]:
    """Best scoring legal wall for the player, or None when nothing can be placed."""
    base_opp = _finite(distance_to_goal(state, opponent(player)))
    base_self = _finite(distance_to_goal(state, player))

    best: Optional[WallChoice] = None
    for orientation in ORIENTATIONS:
        if state.inventory(player).count(orientation) <= 0:
            continue
        for anchor in wall_anchors(state.board, orientation):
            check = validate_wall(state, player, orientation, anchor)
            if not check.ok or check.walls is None:
                continue
            score = score_wall(state, player, anchor, check.walls, rng, base_opp, base_self)
            if best is None or score > best.score:
                best = WallChoice(orientation=orientation, anchor=anchor, score=score)
    return best


def plan_turn(state: GameState, player: str, seed: Optional[int] = None) -> TurnPlan:
    """
    Plays the AI's move and optional wall through the ordinary commit
    operations. If it is not the AI's turn, or the game is over, the state is
    handed back as is.
    """
    if state.is_finished() or state.turn != player or state.phase not in (SELECT, PLACE_WALL):
        trace(f"ai({player}) asked to play out of turn; ignoring")
        return TurnPlan(state=state)
    rng = random.Random(seed)

    move: Optional[MoveChoice] = None
    if state.phase == SELECT:
        move = choose_move(state, player, rng)
        if move is None:
            trace(f"ai({player}) has no legal move; passing")
            return TurnPlan(state=pass_turn(state, player).state)
        res = commit_move(state, player, move.index, move.dest)
        if not res.ok:
            raise RuntimeError(f'AI chose a rejected move: {move} ({res.reason})')
        state = res.state
        trace(f"ai({player}) moves token {move.index} to {move.dest} (score {move.score:.2f})")
        if state.phase != PLACE_WALL:
            return TurnPlan(state=state, move=move)

    wall = choose_wall(state, player, rng)
    if wall is None:
        trace(f"ai({player}) skips wall placement")
        return TurnPlan(state=skip_wall(state, player).state, move=move)
    res = commit_wall(state, player, wall.orientation, wall.anchor)
    if not res.ok:
        raise RuntimeError(f'AI chose a rejected wall: {wall} ({res.reason})')
    trace(f"ai({player}) places {wall.orientation} wall at {wall.anchor} (score {wall.score:.2f})")
    return TurnPlan(state=res.state, move=move, wall=wall)


def ai_take_turn(state: GameState, player: str, seed: Optional[int] = None) -> GameState:
    return plan_turn(state, player, seed).state


def ai_candidates(state: GameState, player: str, seed: Optional[int] = None) -> List[MoveChoice]:
    """All scored move candidates, best first. Handy for inspecting the AI."""
    rng = random.Random(seed)
    out = [MoveChoice(i, d, score_move(state, player, i, d, rng)) for i, d in all_legal_moves(state, player)]
    return sorted(out, key=lambda m: m.score, reverse=True)
