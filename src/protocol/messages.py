"""
Messages sent over the wire.
----

One message per line, UTF-8 text:

| direction         | line                        |
|-------------------|-----------------------------|
| referee -> agent  | PLAYERS <name1> <name2> ... |
| referee -> agent  | GO?                         |
| agent -> referee  | <move-string>               |
| referee -> all    | WENT <name> <move-string>   |
| referee -> all    | BOOT <name>                 |
| referee -> all    | VICTOR <name>               |

NOTE: a wall move-string contains a space, so WENT keeps everything after the name as the move.
"""

from typing import ClassVar, Union

from pydantic import BaseModel, field_validator

from src.core.exceptions import ProtocolError
from src.core.shared_types import MessageType
from src.quoridor.player import MAX_PLAYERS, MIN_PLAYERS

PlayerName = str


def _validate_name(value: str) -> str:
    if not value or any(character.isspace() for character in value):
        raise ProtocolError(f"Player name must be a single non-empty word, got {value!r}.")
    return value


# --- REFEREE -> AGENT ---
class PlayersMessage(BaseModel):
    keyword: ClassVar[MessageType] = MessageType.PLAYERS
    names: list[PlayerName]

    @field_validator("names")
    @classmethod
    def validate_roster(cls, value: list[PlayerName]) -> list[PlayerName]:
        if not MIN_PLAYERS <= len(value) <= MAX_PLAYERS:
            raise ProtocolError(
                f"Roster must name {MIN_PLAYERS} to {MAX_PLAYERS} players, got {len(value)}."
            )
        if len(set(value)) != len(value):
            raise ProtocolError(f"Roster contains duplicate names: {value}")
        return [_validate_name(name) for name in value]

    def to_line(self) -> str:
        return " ".join([self.keyword, *self.names])


class GoMessage(BaseModel):
    keyword: ClassVar[MessageType] = MessageType.GO

    def to_line(self) -> str:
        return str(self.keyword)


class WentMessage(BaseModel):
    keyword: ClassVar[MessageType] = MessageType.WENT
    name: PlayerName
    move: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    def to_line(self) -> str:
        return f"{self.keyword} {self.name} {self.move}"


class BootMessage(BaseModel):
    keyword: ClassVar[MessageType] = MessageType.BOOT
    name: PlayerName

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    def to_line(self) -> str:
        return f"{self.keyword} {self.name}"


class VictorMessage(BaseModel):
    keyword: ClassVar[MessageType] = MessageType.VICTOR
    name: PlayerName

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return _validate_name(value)

    def to_line(self) -> str:
        return f"{self.keyword} {self.name}"


Message = Union[PlayersMessage, GoMessage, WentMessage, BootMessage, VictorMessage]


def decode(line: str) -> Message:
    """
    Parse a line sent by the referee.

    Raises ProtocolError if the keyword is unknown or the line does not have the expected parts.
    NOTE: the move string in WENT is not checked here. That is up to the board receiving it.
    """
    line = line.strip()
    keyword, _, rest = line.partition(" ")
    rest = rest.strip()

    if keyword == MessageType.PLAYERS:
        return PlayersMessage(names=rest.split())

    if keyword == MessageType.GO:
        if rest:
            raise ProtocolError(f"Unexpected content after {MessageType.GO}: {line!r}")
        return GoMessage()

    if keyword == MessageType.WENT:
        name, _, move = rest.partition(" ")
        if not move.strip():
            raise ProtocolError(f"WENT without a move: {line!r}")
        return WentMessage(name=name, move=move.strip())

    if keyword in (MessageType.BOOT, MessageType.VICTOR):
        if not rest or len(rest.split()) != 1:
            raise ProtocolError(f"{keyword} expects exactly one name: {line!r}")
        if keyword == MessageType.BOOT:
            return BootMessage(name=rest)
        return VictorMessage(name=rest)

    raise ProtocolError(f"Unknown message: {line!r}")
