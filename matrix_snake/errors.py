"""Error types raised by the map generator, tone synthesizer and session."""

from __future__ import annotations


class MatrixSnakeError(Exception):
    pass


class InvalidDimensions(MatrixSnakeError, ValueError):
    """Grid width or height is not positive."""


class InvalidParameter(MatrixSnakeError, ValueError):
    """A numeric parameter is out of its accepted range."""


class InvalidTransition(MatrixSnakeError, KeyError):
    """No screen transition is defined for a (screen, trigger) pair."""
