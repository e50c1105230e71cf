from __future__ import annotations

import argparse
import os
import time
from typing import Optional

from .ai import ai_candidates, plan_turn
from .board import HORIZONTAL, PLAYERS, PRESETS, VERTICAL
from .moves import all_legal_moves, legal_moves
from .rules import commit_move, commit_wall, new_game, pass_turn, skip_wall
from .state import FINISHED, PLACE_WALL, GameState

HELP = """Commands:
  move <token> <row> <col>     move token 0 or 1
  moves [token]                list legal destinations
  h <row> <col> | v <row> <col>  place a horizontal or vertical wall
  pass | skip                  pass the move / skip the wall when nothing is legal
  hint                         show the AI's preferred moves
  quit"""


def _render(state: GameState) -> str:
    inv_b = state.black_inventory
    inv_w = state.white_inventory
    lines = [
        state.board.pretty(state.black, state.white, state.walls),
        f"black walls H:{inv_b.horizontal} V:{inv_b.vertical}   white walls H:{inv_w.horizontal} V:{inv_w.vertical}",
    ]
    if state.phase == FINISHED:
        lines.append(f"{state.winner} wins by reaching the start space!")
    else:
        lines.append(f"Turn: {state.turn} ({'place a wall' if state.phase == PLACE_WALL else 'move a token'})")
    return '\n'.join(lines)


def _parse_ints(parts, n: int):
    if len(parts) != n:
        raise ValueError(f'expected {n} numbers')
    return [int(p) for p in parts]


def _human_step(state: GameState, text: str) -> Optional[GameState]:
    """Applies one command; returns the new state, or None to quit."""
    parts = text.split()
    if not parts:
        return state
    cmd, args = parts[0].lower(), parts[1:]
    player = state.turn
    if cmd in ('q', 'quit', 'exit'):
        return None
    if cmd in ('?', 'help'):
        print(HELP)
        return state
    if cmd == 'moves':
        indices = [int(args[0])] if args else [0, 1]
        for i in indices:
            print(f"token {i} at {state.token(player, i)}: {sorted(legal_moves(state, player, i))}")
        return state
    if cmd == 'hint':
        for m in ai_candidates(state, player)[:5]:
            print(f"token {m.index} -> {m.dest}  score {m.score:.2f}")
        return state
    if cmd == 'move':
        index, r, c = _parse_ints(args, 3)
        res = commit_move(state, player, index, (r, c))
    elif cmd in ('h', 'v'):
        r, c = _parse_ints(args, 2)
        res = commit_wall(state, player, HORIZONTAL if cmd == 'h' else VERTICAL, (r, c))
    elif cmd == 'pass':
        res = pass_turn(state, player)
    elif cmd == 'skip':
        res = skip_wall(state, player)
    else:
        print("Unknown command. Type 'help'.")
        return state
    if not res.ok and res.reason is not None:
        print(res.reason.message)
    return res.state


def main() -> None:
    parser = argparse.ArgumentParser(description='Blockade: race to the opponent start while walling smartly')
    parser.add_argument('--preset', choices=sorted(PRESETS), default=os.getenv('BLOCKADE_PRESET', 'standard'),
                        help='Board layout')
    parser.add_argument('--ai', choices=['none', *PLAYERS], default='none', help='Side played by the computer')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the AI jitter')
    parser.add_argument('--delay-ms', type=int, default=int(os.getenv('BLOCKADE_AI_DELAY_MS', '250')),
                        help='Pause before the AI plays')
    args = parser.parse_args()

    state = new_game(args.preset)
    ai_side = None if args.ai == 'none' else args.ai
    turn_no = 0
    print(_render(state))
    print(HELP)
    while state.phase != FINISHED:
        if state.turn == ai_side:
            print('AI thinking...')
            time.sleep(max(0, args.delay_ms) / 1000.0)
            seed = None if args.seed is None else args.seed + turn_no
            plan = plan_turn(state, ai_side, seed)
            state = plan.state
            turn_no += 1
            if plan.move is None:
                print('AI passes its move.')
            else:
                suffix = f" and placed a {plan.wall.orientation} wall at {plan.wall.anchor}" if plan.wall else ''
                print(f"AI moved token {plan.move.index} to {plan.move.dest}{suffix}.")
            print(_render(state))
            continue
        if state.phase != PLACE_WALL and not all_legal_moves(state, state.turn):
            print('No legal moves available from here.')
        try:
            text = input(f"{state.turn}> ").strip()
        except EOFError:
            return
        try:
            nxt = _human_step(state, text)
        except ValueError as e:
            print(f"Could not parse: {e}. Try again.")
            continue
        if nxt is None:
            return
        if nxt is not state:
            state = nxt
            print(_render(state))


if __name__ == '__main__':
    main()
