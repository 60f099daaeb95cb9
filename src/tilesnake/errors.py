# src/tilesnake/errors.py
class SnakeError(Exception):
    """Base class for tilesnake errors."""


class BoardUnplayable(SnakeError):
    """The board is too small or too crowded to place the snake or its food."""
