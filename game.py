from __future__ import annotations

# Facade module that re-exports the Blockade core API.
# The Flask app and the tests import from here; single-responsibility
# modules live under blockade_core/*.

from blockade_core.board import (  # noqa: F401
    BLACK,
    WHITE,
    PLAYERS,
    HORIZONTAL,
    VERTICAL,
    ORIENTATIONS,
    PRESETS,
    STANDARD,
    LARGE,
    Board,
    Coord,
    Wall,
    as_coord,
    check_orientation,
    get_preset,
    opponent,
    wall_segments,
)
from blockade_core.state import (  # noqa: F401
    SELECT,
    PLACE_WALL,
    FINISHED,
    PHASES,
    GameState,
    WallInventory,
    initial_state,
)
from blockade_core.graph import (  # noqa: F401
    edge_blocked,
    neighbors,
    path_exists,
    distance_to_goal,
)
from blockade_core.moves import (  # noqa: F401
    legal_moves,
    all_legal_moves,
    move_positions,
)
from blockade_core.rejection import Rejection  # noqa: F401
from blockade_core.walls import (  # noqa: F401
    WallCheck,
    validate_wall,
    wall_is_legal,
    wall_anchors,
    legal_walls,
    has_legal_wall,
)
from blockade_core.rules import (  # noqa: F401
    CommitResult,
    new_game,
    commit_move,
    commit_wall,
    pass_turn,
    skip_wall,
)
from blockade_core.ai import (  # noqa: F401
    MoveChoice,
    WallChoice,
    TurnPlan,
    choose_move,
    choose_wall,
    plan_turn,
    ai_take_turn,
)


def main() -> None:
    # CLI driver delegated to blockade_core.cli
    from blockade_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
