from __future__ import annotations

from enum import Enum


class Rejection(str, Enum):
    """Reasons an operation was refused. These are ordinary outcomes of play,
    returned alongside the unchanged state rather than raised."""
    OUT_OF_BOUNDS = 'Out of bounds'
    WALL_ALREADY_THERE = 'Wall overlaps an existing wall'
    WALL_CROSSES_EXISTING = 'Wall crosses an existing wall'
    NO_WALLS_LEFT = 'No walls of that type left'
    PATH_WOULD_BE_SEALED = 'Must leave a path open to a start space'
    ILLEGAL_DESTINATION = 'That token cannot move there'
    WRONG_PHASE_OR_TURN = 'Not your turn for that action'
    GAME_ALREADY_FINISHED = 'The game is already over'
    MOVE_AVAILABLE = 'A legal move is still available'
    WALL_AVAILABLE = 'A legal wall placement is still available'

    @property
    def message(self) -> str:
        return self.value
