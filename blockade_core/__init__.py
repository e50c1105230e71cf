"""
Blockade core Python package.

Pure rules engine for the Blockade race-and-wall game, kept free of any
presentation concerns so the CLI, the Flask app and the tests share it.
Modules:
- board.py: Board presets, Coord, Wall, players and orientations
- state.py: GameState, WallInventory, phases
- graph.py: wall-aware connectivity (neighbors, path_exists, distance_to_goal)
- moves.py: legal token moves
- walls.py: wall placement validation
- rules.py: turn/phase state machine
- ai.py: heuristic computer opponent
- debug.py: BLOCKADE_DEBUG trace printing
- cli.py: terminal client
"""
