"""
Custom exceptions used across layers.

The domain layer raises these, the service layer decides what they mean for a running game
(boot a player, log a warning, close a session).
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while running a game of Quoridor."""


class GameStateError(GameError):
    """Operation not allowed in the current state of the game (game over, unknown player, diverged replica, ...)"""


class IllegalMoveError(GameError):
    """Move string that the legality engine refused to apply."""


class ProtocolError(GameError):
    """A line received over the wire could not be decoded as the expected message."""


class TransportError(GameError):
    """Connection lost, timed out or otherwise unusable."""


class InvalidConfigError(GameError):
    """Bad value supplied on the command line / in the configuration."""
