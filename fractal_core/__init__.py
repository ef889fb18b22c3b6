"""
Fractal tic-tac-toe core Python package.

Pure rules engine for tic-tac-toe played on boards nested to any depth.
Modules:
- board.py: Board, cells, shape validation
- outcome.py: Outcome, evaluate (win / draw / in progress at any depth)
- paths.py: read_at / write_at along index paths
- locality.py: which sub-board the next move must land in
- state.py, moves.py: GameState and its transitions (take turn, descend, clear)
- session.py: GameSession, a caller-owned holder with change listeners
- conditions.py: development helpers to force a board condition
- errors.py: error hierarchy
"""
