"""Strategies, batch simulation and the runners built on the game engine."""
