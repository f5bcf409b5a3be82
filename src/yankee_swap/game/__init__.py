"""Gift/player data model and the single-game round engine."""
