from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Set, Tuple

from .board import BLACK, HORIZONTAL, WHITE, Board, Coord, Wall, check_orientation, opponent

SELECT = 'select'
PLACE_WALL = 'place_wall'
FINISHED = 'finished'
PHASES = (SELECT, PLACE_WALL, FINISHED)

Tokens = Tuple[Coord, Coord]


@dataclass(frozen=True)
class WallInventory:
    horizontal: int
    vertical: int

    @property
    def total(self) -> int:
        return self.horizontal + self.vertical

    def count(self, orientation: str) -> int:
        check_orientation(orientation)
        return self.horizontal if orientation == HORIZONTAL else self.vertical

    def spend(self, orientation: str) -> 'WallInventory':
        if self.count(orientation) <= 0:
            raise ValueError(f'No {orientation} walls left to spend')
        if orientation == HORIZONTAL:
            return WallInventory(self.horizontal - 1, self.vertical)
        return WallInventory(self.horizontal, self.vertical - 1)


@dataclass(frozen=True)
class GameState:
    """Represents one immutable snapshot of a game: tokens, walls, supplies and whose turn it is."""
    board: Board
    black: Tokens
    white: Tokens
    walls: Tuple[Wall, ...]
    black_inventory: WallInventory
    white_inventory: WallInventory
    turn: str = BLACK
    phase: str = SELECT
    winner: Optional[str] = None

    def tokens(self, player: str) -> Tokens:
        if player == BLACK:
            return self.black
        if player == WHITE:
            return self.white
        raise ValueError(f'Unknown player: {player!r}')

    def token(self, player: str, index: int) -> Coord:
        tokens = self.tokens(player)
        if not isinstance(index, int) or not 0 <= index < len(tokens):
            raise ValueError(f'Token index out of range: {index!r}')
        return tokens[index]

    def inventory(self, player: str) -> WallInventory:
        if player == BLACK:
            return self.black_inventory
        if player == WHITE:
            return self.white_inventory
        raise ValueError(f'Unknown player: {player!r}')

    def other_player(self) -> str:
        return opponent(self.turn)

    def occupied(self) -> Set[Coord]:
        return set(self.black) | set(self.white)

    def is_finished(self) -> bool:
        return self.winner is not None

    def with_tokens(self, player: str, tokens: Tokens) -> 'GameState':
        if player == BLACK:
            return replace(self, black=tokens)
        if player == WHITE:
            return replace(self, white=tokens)
        raise ValueError(f'Unknown player: {player!r}')

    def with_inventory(self, player: str, inventory: WallInventory) -> 'GameState':
        if player == BLACK:
            return replace(self, black_inventory=inventory)
        if player == WHITE:
            return replace(self, white_inventory=inventory)
        raise ValueError(f'Unknown player: {player!r}')

    def with_turn(self, next_turn: str, phase: str = SELECT) -> 'GameState':
        return replace(self, turn=next_turn, phase=phase)


def initial_state(board: Board) -> GameState:
    full = WallInventory(board.walls_per_orientation, board.walls_per_orientation)
    return GameState(
        board=board,
        black=tuple(board.black_starts),
        white=tuple(board.white_starts),
        walls=tuple(),
        black_inventory=full,
        white_inventory=full,
        turn=BLACK,
        phase=SELECT,
        winner=None,
    )
