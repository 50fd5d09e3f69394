"""
snake_game Package
==================

This package contains the grid Snake simulation core and its configuration:

- Grid geometry and toroidal wrap-around
- Fruit and obstacle placement
- Scoring and best-score tracking
- The Title / Playing / Paused / GameOver state machine

All tunable parameters are in game_config.yaml.
"""
