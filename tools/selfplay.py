#!/usr/bin/env python3
"""
Play AI-vs-AI Blockade games and re-check board invariants after every turn.

- Both sides use the heuristic AI; seeds are derived from --seed so runs repeat.
- Checks after each turn:
  * no two tokens share a cell, all tokens in bounds
  * no two walls share an edge segment, no two walls truly cross
  * both players still have a route to a goal
  * walls on board + walls in inventory == starting supply, per side
- Prints a JSON summary with winners, turn counts and any violations.

Usage:
  python tools/selfplay.py                      # 10 games on the standard board
  python tools/selfplay.py --games 50 --preset large --seed 7
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Dict, List, Optional

# Ensure the repo root is importable when run as a script
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from blockade_core.ai import plan_turn  # noqa: E402
from blockade_core.board import ORIENTATIONS, PLAYERS, PRESETS  # noqa: E402
from blockade_core.graph import path_exists  # noqa: E402
from blockade_core.rules import new_game  # noqa: E402
from blockade_core.state import GameState  # noqa: E402


def check_invariants(state: GameState) -> List[str]:
    problems: List[str] = []
    tokens = list(state.black) + list(state.white)
    if len(set(tokens)) != len(tokens):
        problems.append(f"tokens share a cell: {tokens}")
    for t in tokens:
        if not state.board.in_bounds(t):
            problems.append(f"token out of bounds: {t}")

    seen: Dict[tuple, object] = {}
    for w in state.walls:
        for seg in w.segments():
            if seg in seen:
                problems.append(f"segment {seg} shared by {seen[seg]} and {w}")
            seen[seg] = w
    for i, a in enumerate(state.walls):
        for b in state.walls[i + 1:]:
            if a.crosses(b):
                problems.append(f"walls cross: {a} / {b}")

    for p in PLAYERS:
        if not path_exists(state, p):
            problems.append(f"{p} has no path to a goal")
        inv = state.inventory(p)
        for o in ORIENTATIONS:
            placed = sum(1 for w in state.walls if w.owner == p and w.orientation == o)
            if placed + inv.count(o) != state.board.walls_per_orientation:
                problems.append(f"{p} {o} supply mismatch: {placed} placed, {inv.count(o)} left")
    return problems


def play_one(preset: str, seed: int, max_turns: int) -> Dict[str, object]:
    state = new_game(preset)
    violations: List[str] = []
    turns = 0
    passes = 0
    while not state.is_finished() and turns < max_turns:
        plan = plan_turn(state, state.turn, seed * 10007 + turns)
        if plan.move is None:
            passes += 1
        state = plan.state
        turns += 1
        violations.extend(f"turn {turns}: {v}" for v in check_invariants(state))
    return {
        "seed": seed,
        "winner": state.winner,
        "turns": turns,
        "passes": passes,
        "walls": len(state.walls),
        "violations": violations,
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="AI-vs-AI Blockade self-play with invariant checks")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--preset", choices=sorted(PRESETS), default="standard")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max-turns", type=int, default=400)
    args = parser.parse_args(argv)

    results = [play_one(args.preset, args.seed + i, args.max_turns) for i in range(args.games)]
    wins = {p: sum(1 for r in results if r["winner"] == p) for p in PLAYERS}
    unfinished = sum(1 for r in results if r["winner"] is None)
    bad = [r for r in results if r["violations"]]
    summary = {
        "preset": args.preset,
        "games": args.games,
        "wins": wins,
        "unfinished": unfinished,
        "avgTurns": (sum(int(r["turns"]) for r in results) / len(results)) if results else None,
        "gamesWithViolations": len(bad),
        "samples": bad[:3],
    }
    print(json.dumps(summary, indent=2))
    return 1 if bad else 0


if __name__ == "__main__":
    sys.exit(main())
