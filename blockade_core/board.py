from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

Coord = Tuple[int, int]
Segment = Tuple[str, int, int]  # ('h' | 'v', row, col)

BLACK = 'black'
WHITE = 'white'
PLAYERS = (BLACK, WHITE)

HORIZONTAL = 'horizontal'
VERTICAL = 'vertical'
ORIENTATIONS = (HORIZONTAL, VERTICAL)


def opponent(player: str) -> str:
    """Returns the other side; anything but black/white is a caller bug."""
    if player == BLACK:
        return WHITE
    if player == WHITE:
        return BLACK
    raise ValueError(f'Unknown player: {player!r}')


def check_orientation(orientation: str) -> str:
    if orientation not in ORIENTATIONS:
        raise ValueError(f'Unknown wall orientation: {orientation!r}')
    return orientation


@dataclass(frozen=True)
class Wall:
    """A two-cell wall. Horizontal walls sit on the grid line above `row`,
    vertical walls on the grid line left of `col`."""
    orientation: str
    row: int
    col: int
    owner: Optional[str] = None  # display only

    @property
    def anchor(self) -> Coord:
        return (self.row, self.col)

    def segments(self) -> Tuple[Segment, Segment]:
        """The two unit edges covered by this wall."""
        if self.orientation == HORIZONTAL:
            return ('h', self.row, self.col), ('h', self.row, self.col + 1)
        return ('v', self.row, self.col), ('v', self.row + 1, self.col)

    def crosses(self, other: 'Wall') -> bool:
        """True crossing with a wall of the other orientation. Walls that only
        touch at an endpoint (T or L shapes) do not cross."""
        if self.orientation == other.orientation:
            return False
        h = self if self.orientation == HORIZONTAL else other
        v = other if h is self else self
        return h.col < v.col < h.col + 2 and v.row < h.row < v.row + 2


def wall_segments(walls: Iterable[Wall]) -> FrozenSet[Segment]:
    segs = set()
    for w in walls:
        segs.update(w.segments())
    return frozenset(segs)


@dataclass(frozen=True)
class Board:
    """Static board geometry: dimensions, start squares and wall supply."""
    name: str
    rows: int
    cols: int
    black_starts: Tuple[Coord, Coord]
    white_starts: Tuple[Coord, Coord]
    walls_per_orientation: int = 9

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.rows and 0 <= c < self.cols

    def coords(self) -> Iterator[Coord]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def starts(self, player: str) -> Tuple[Coord, Coord]:
        if player == BLACK:
            return self.black_starts
        if player == WHITE:
            return self.white_starts
        raise ValueError(f'Unknown player: {player!r}')

    def goals(self, player: str) -> Tuple[Coord, Coord]:
        """A player wins by reaching either of the opponent's start squares."""
        return self.starts(opponent(player))

    def center(self) -> Tuple[float, float]:
        return self.rows / 2, self.cols / 2

    def wall_in_bounds(self, orientation: str, row: int, col: int) -> bool:
        """Both segments of the wall must lie on interior grid lines."""
        if orientation == HORIZONTAL:
            return 1 <= row <= self.rows - 1 and 0 <= col <= self.cols - 2
        if orientation == VERTICAL:
            return 0 <= row <= self.rows - 2 and 1 <= col <= self.cols - 1
        return False

    def pretty(
        self,
        black: Iterable[Coord] = (),
        white: Iterable[Coord] = (),
        walls: Iterable[Wall] = (),
    ) -> str:
        """ASCII rendering: B/W tokens, b/w start squares, '|' and '---' walls."""
        segs = wall_segments(walls)
        bset = set(black)
        wset = set(white)
        lines: List[str] = ['    ' + ''.join(f'{c:<4}' for c in range(self.cols)).rstrip()]
        for r in range(self.rows):
            if r > 0:
                sep = ''.join('--- ' if ('h', r, c) in segs else '    ' for c in range(self.cols))
                lines.append('    ' + sep.rstrip())
            row = [f'{r:>2}  ']
            for c in range(self.cols):
                if (r, c) in bset:
                    cell = 'B'
                elif (r, c) in wset:
                    cell = 'W'
                elif (r, c) in self.black_starts:
                    cell = 'b'
                elif (r, c) in self.white_starts:
                    cell = 'w'
                else:
                    cell = '.'
                edge = '|' if ('v', r, c + 1) in segs else ' '
                row.append(f' {cell} {edge}' if c + 1 < self.cols else f' {cell}')
            lines.append(''.join(row).rstrip())
        return '\n'.join(lines)


STANDARD = Board(
    name='standard',
    rows=11,
    cols=14,
    black_starts=((3, 3), (7, 3)),
    white_starts=((3, 10), (7, 10)),
)

LARGE = Board(
    name='large',
    rows=14,
    cols=17,
    black_starts=((3, 3), (10, 3)),
    white_starts=((3, 13), (10, 13)),
)

PRESETS: Dict[str, Board] = {STANDARD.name: STANDARD, LARGE.name: LARGE}


def get_preset(name: str) -> Board:
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f'Unknown board preset: {name!r}') from None


def as_coord(value) -> Coord:
    """Coerces a (row, col) pair of ints; anything else is a caller bug."""
    try:
        r, c = value
    except (TypeError, ValueError):
        raise ValueError(f'Malformed coordinate: {value!r}') from None
    if isinstance(r, bool) or isinstance(c, bool) or not isinstance(r, int) or not isinstance(c, int):
        raise ValueError(f'Malformed coordinate: {value!r}')
    return (r, c)
