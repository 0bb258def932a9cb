from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Callable, List

from .types import Identity

logger = logging.getLogger("lottery.events")


@dataclass(frozen=True)
class LotteryEvent:
    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        payload = asdict(self)
        for key, value in payload.items():
            # uint256 values travel as decimal strings.
            if isinstance(value, int) and not isinstance(value, bool):
                payload[key] = str(value)
        return {"event": self.name, "args": payload}


@dataclass(frozen=True)
class PlayerEntered(LotteryEvent):
    player: Identity


@dataclass(frozen=True)
class WinnerSelected(LotteryEvent):
    winner: Identity
    amount: int


@dataclass(frozen=True)
class PauseChanged(LotteryEvent):
    paused: bool


@dataclass(frozen=True)
class NewRoundStarted(LotteryEvent):
    round_number: int
    ticket_price: int
    max_players: int


Subscriber = Callable[[LotteryEvent], None]


class EventLog:
    """Keeps published events and fans them out to subscribers.

    Events are buffered while a call runs and only published once the call
    commits, so a reverted call never becomes observable.
    """

    def __init__(self) -> None:
        self._published: List[LotteryEvent] = []
        self._pending: List[LotteryEvent] = []
        self._subscribers: List[Subscriber] = []

    @property
    def published(self) -> tuple:
        return tuple(self._published)

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    def emit(self, event: LotteryEvent) -> None:
        self._pending.append(event)

    def discard(self) -> None:
        self._pending.clear()

    def flush(self) -> None:
        pending, self._pending = self._pending, []
        # The call has committed; every event is published before any delivery.
        self._published.extend(pending)
        for event in pending:
            logger.debug("Published %s", event)
            for subscriber in self._subscribers:
                try:
                    subscriber(event)
                except Exception as exc:
                    logger.exception("Subscriber %r failed on %s: %s", subscriber, event.name, exc)
