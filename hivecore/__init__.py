"""hivecore: a rules engine for the board game Hive.

- engine/: generic game-plugin contracts (models, errors, registry)
- games/hive/: the Hive board, movement rules and game state machine
"""
