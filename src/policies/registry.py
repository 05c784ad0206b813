"""
Strategy pattern: move servers pick their policy by name at start-up.

The referee has no idea which policy produced a move, and it does not need to.
"""

from typing import Callable, Optional

from src.core.exceptions import InvalidConfigError
from src.policies.base import MovePolicy, NoOpPolicy
from src.policies.human import HumanPolicy
from src.policies.random_walk import RandomPolicy
from src.policies.shortest_path import ShortestPathPolicy

PolicyFactory = Callable[[Optional[int]], MovePolicy]
POLICIES: dict[str, PolicyFactory] = {
    HumanPolicy.name: lambda seed: HumanPolicy(),
    RandomPolicy.name: lambda seed: RandomPolicy(seed=seed),
    ShortestPathPolicy.name: lambda seed: ShortestPathPolicy(),
    NoOpPolicy.name: lambda seed: NoOpPolicy(),
}


def create_policy(name: str, seed: Optional[int] = None) -> MovePolicy:
    if name not in POLICIES:
        raise InvalidConfigError(
            f"Unknown policy {name!r}. Pick one from {', '.join(POLICIES)}"
        )
    return POLICIES[name](seed)
