"""
FreeCell core Python package.

Pure game-rule logic, kept free of any UI so it can be driven by the CLI,
the Flask API and tests alike.
Modules:
- cards.py: Card and the 52-card catalog
- deal.py: classic Microsoft deal shuffle
- board.py: Board, location encoding
- history.py: MoveHistory (undo and scoring)
- moves.py: move legality, placement, auto moves
- seeds.py: game numbers, known unsolvable deals
- session.py: GameSession
- config.py: environment switches and logging setup
- cli.py: terminal game
"""
