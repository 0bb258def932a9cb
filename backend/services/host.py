from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Any, Dict, Optional

from lottery.chain import BlockEnvironment, LocalChain, Web3BlockSource
from lottery.events import LotteryEvent
from lottery.state import LotteryState
from lottery.types import RoundRecord

from ..config import AppSettings, ChainSettings, load_settings
from .archive import ArchiveRepository


def build_chain(settings: ChainSettings) -> BlockEnvironment:
    if settings.mode == "rpc":
        if not settings.rpc_url:
            raise RuntimeError("RPC_URL is required when CHAIN_MODE=rpc")
        return Web3BlockSource.from_url(settings.rpc_url)
    return LocalChain(
        seed=settings.seed,
        genesis_timestamp=settings.genesis_timestamp,
        block_time=settings.block_time,
    )


class LotteryHost:
    """Execution context owning a single lottery.

    Calls are serialised through one lock, standing in for the ordering a
    chain gives transactions. Committed rounds and events are indexed into
    the database.
    """

    def __init__(
        self,
        state: LotteryState,
        archive: ArchiveRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._state = state
        self._archive = archive
        self._lock = threading.RLock()
        self._logger = logger or logging.getLogger("lottery.backend")
        state.events.subscribe(self._index_event)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "LotteryHost":
        chain = build_chain(settings.chain)
        state = LotteryState(
            settings.lottery.manager,
            ticket_price=settings.lottery.ticket_price,
            max_players=settings.lottery.max_players,
            chain=chain,
        )
        return cls(state, ArchiveRepository())

    @property
    def state(self) -> LotteryState:
        return self._state

    def enter(self, sender: str, value: int) -> Optional[RoundRecord]:
        with self._lock:
            block_number = self._state.chain.latest().number
            record = self._state.enter(sender, value)
            self._state.chain.advance()
            if record is not None:
                self._archive_round(record, block_number)
            return record

    def set_paused(self, sender: str, paused: bool) -> None:
        with self._lock:
            self._state.set_paused(sender, paused)
            self._state.chain.advance()

    def start_new_lottery(self, sender: str, ticket_price: int, max_players: int) -> None:
        with self._lock:
            self._state.start_new_lottery(sender, ticket_price, max_players)
            self._state.chain.advance()

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            state = self._state
            return {
                "manager": state.manager,
                "ticket_price": str(state.ticket_price),
                "max_players": state.max_players,
                "paused": state.paused,
                "current_round": state.current_round,
                "players": list(state.players),
                "balance": str(state.balance),
                "completed_rounds": len(state.lottery_rounds),
            }

    def players(self) -> list:
        with self._lock:
            return list(self._state.get_players())

    def rounds(self) -> list:
        with self._lock:
            return [record.to_dict() for record in self._state.lottery_rounds]

    def round(self, round_number: int) -> RoundRecord:
        with self._lock:
            return self._state.round(round_number)

    def _archive_round(self, record: RoundRecord, block_number: int) -> None:
        # The round is already committed; an index failure must not undo it.
        try:
            self._archive.add_round(record, block_number=block_number)
        except Exception as exc:
            self._logger.exception("Failed to index round %s: %s", record.round_number, exc)

    def _index_event(self, event: LotteryEvent) -> None:
        block_number = self._state.chain.latest().number
        self._archive.add_event(event, block_number=block_number)
        self._logger.debug("Indexed %s at block %s", event.name, block_number)


@lru_cache(maxsize=1)
def get_lottery_host() -> LotteryHost:
    return LotteryHost.from_settings(load_settings())
