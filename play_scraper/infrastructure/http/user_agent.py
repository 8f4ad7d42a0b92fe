"""
User-Agent providers.

Each request asks its provider for a User-Agent string, so rotating
providers spread requests over several browser identities.
"""
import logging
import random
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class UserAgentProvider(ABC):

    @abstractmethod
    def provide(self) -> str:
        pass


class DefaultUserAgentProvider(UserAgentProvider):
    """Always the same desktop Chrome User-Agent."""

    def provide(self) -> str:
        return DEFAULT_USER_AGENT


class CustomUserAgentProvider(UserAgentProvider):
    """
    Picks from a caller-supplied list.

    Args:
        user_agents: Non-empty list of User-Agent strings
        random_order: Random pick (True) or round-robin (False)
    """

    def __init__(
        self,
        user_agents: Sequence[str],
        random_order: bool = True,
        rng: Optional[random.Random] = None,
    ):
        if not user_agents:
            raise ValueError("User-Agent list cannot be empty")
        self._user_agents = list(user_agents)
        self._random_order = random_order
        self._rng = rng or random.Random()
        self._index = 0

    def provide(self) -> str:
        if self._random_order:
            return self._rng.choice(self._user_agents)
        user_agent = self._user_agents[self._index]
        self._index = (self._index + 1) % len(self._user_agents)
        return user_agent


class FileUserAgentProvider(CustomUserAgentProvider):
    """
    Loads User-Agents from a text file, one per line.

    Blank lines and lines starting with '#' are ignored. An unreadable or
    empty file falls back to the default User-Agent.
    """

    def __init__(
        self,
        path: Union[str, Path],
        random_order: bool = True,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(self._load(Path(path)), random_order=random_order, rng=rng)

    @staticmethod
    def _load(path: Path) -> List[str]:
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            logger.warning(f"Could not read User-Agent file {path}: {e}")
            return [DEFAULT_USER_AGENT]

        user_agents = [
            line.strip()
            for line in lines
            if line.strip() and not line.strip().startswith("#")
        ]
        return user_agents or [DEFAULT_USER_AGENT]
