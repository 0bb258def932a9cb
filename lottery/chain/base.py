from __future__ import annotations

import abc
from dataclasses import dataclass


@dataclass(frozen=True)
class BlockInfo:
    """Public block data the winner selection draws its entropy from."""

    number: int
    timestamp: int
    difficulty: int


class BlockEnvironment(abc.ABC):
    """Abstract provider of the chain head seen by lottery calls."""

    @abc.abstractmethod
    def latest(self) -> BlockInfo:
        """Return the block the current call executes against."""

    def advance(self) -> None:
        """Optional hook called after each committed state-changing call."""
        return None
