"""Game domain services: move rules and the game lifecycle.

This package holds the game logic imported by HTTP routes and socket
handlers, keeping transport concerns separated from core game mechanics.
"""
from .lifecycle import GameService

__all__ = ['GameService']
