"""
Configuration models for the referee and the move servers.

Built from the command line. Validation errors raise InvalidConfigError right away, so a bad setup never gets
as far as opening a connection.
"""

from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidConfigError
from src.quoridor.player import MAX_PLAYERS, MIN_PLAYERS


class AgentAddress(BaseModel):
    host: str
    port: int

    @classmethod
    def parse(cls, address: str) -> "AgentAddress":
        """'localhost:5000' -> AgentAddress(host='localhost', port=5000). IPv6 hosts go in brackets: '[::1]:5000'"""
        host, separator, port = address.rpartition(":")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        if not separator or not host or not port.isdigit():
            raise InvalidConfigError(f"Expected <host>:<port>, got {address!r}.")
        return cls(host=host, port=int(port))

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise InvalidConfigError(f"Port out of range: {value}")
        return value

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class RefereeConfig(BaseModel):
    agents: list[AgentAddress]
    names: list[str] = []
    move_timeout: Optional[float] = None
    turn_delay: float = 0.0

    @field_validator("agents")
    @classmethod
    def validate_agent_count(cls, value: list[AgentAddress]) -> list[AgentAddress]:
        if not MIN_PLAYERS <= len(value) <= MAX_PLAYERS:
            raise InvalidConfigError(
                f"Quoridor needs {MIN_PLAYERS} to {MAX_PLAYERS} move servers, got {len(value)}."
            )
        return value

    @field_validator("names")
    @classmethod
    def validate_names(cls, value: list[str]) -> list[str]:
        for name in value:
            if not name or any(character.isspace() for character in name):
                raise InvalidConfigError(f"Player names must be single words, got {name!r}.")
        if len(set(value)) != len(value):
            raise InvalidConfigError(f"Player names must be unique: {value}")
        return value

    @field_validator("move_timeout", "turn_delay")
    @classmethod
    def validate_non_negative(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value < 0:
            raise InvalidConfigError(f"Durations cannot be negative, got {value}.")
        return value

    @model_validator(mode="after")
    def default_names(self) -> "RefereeConfig":
        """No names given: player1, player2, ... One name per move server otherwise."""
        if not self.names:
            self.names = [f"player{number}" for number in range(1, len(self.agents) + 1)]
        if len(self.names) != len(self.agents):
            raise InvalidConfigError(
                f"Got {len(self.names)} names for {len(self.agents)} move servers."
            )
        return self

    def roster(self) -> dict[str, AgentAddress]:
        return dict(zip(self.names, self.agents))


class AgentConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int
    policy: str
    seed: Optional[int] = None
    games: Optional[int] = None

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise InvalidConfigError(f"Port out of range: {value}")
        return value

    @field_validator("policy")
    @classmethod
    def validate_policy(cls, value: str) -> str:
        # imported here: the policies depend on the domain layer, config should not have to
        from src.policies.registry import POLICIES

        if value not in POLICIES:
            raise InvalidConfigError(
                f"Unknown policy {value!r}. Pick one from {', '.join(POLICIES)}"
            )
        return value

    @field_validator("games")
    @classmethod
    def validate_games(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise InvalidConfigError(f"Number of games must be positive, got {value}.")
        return value
