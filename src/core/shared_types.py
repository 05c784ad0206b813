"""
Type definitions used across layers
"""

from enum import Enum, StrEnum, auto


class Orientation(Enum):
    """A horizontal wall blocks vertical movement, a vertical wall blocks horizontal movement."""

    HORIZONTAL = auto()
    VERTICAL = auto()


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class SessionState(StrEnum):
    """Life cycle of a single connection (both on the referee and the agent side)"""

    AWAIT_ROSTER = "await roster"
    TURN_LOOP = "turn loop"
    CLOSED = "closed"


class MessageType(StrEnum):
    """Keywords that open a line on the wire. A move string sent back after GO? has no keyword."""

    PLAYERS = "PLAYERS"
    GO = "GO?"
    WENT = "WENT"
    BOOT = "BOOT"
    VICTOR = "VICTOR"
