from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple, TypeVar

from .chain.base import BlockEnvironment
from .errors import InvalidConfiguration, InvalidPayment, InvalidState, RoundFull, Unauthorized
from .events import EventLog, NewRoundStarted, PauseChanged, PlayerEntered, WinnerSelected
from .ledger import Ledger
from .randomness import winner_index
from .types import Identity, LotteryConfig, RoundRecord, to_identity

F = TypeVar("F", bound=Callable[..., Any])


def only_manager(method: F) -> F:
    """Reject the call with ``Unauthorized`` unless ``caller`` is the manager."""

    @functools.wraps(method)
    def wrapper(self: "LotteryState", caller: str, *args: Any, **kwargs: Any) -> Any:
        identity = to_identity(caller)
        if identity != self.manager:
            raise Unauthorized(identity)
        return method(self, identity, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def _validate_config(ticket_price: int, max_players: int) -> LotteryConfig:
    if isinstance(ticket_price, bool) or not isinstance(ticket_price, int) or ticket_price <= 0:
        raise InvalidConfiguration(f"ticket_price must be a positive integer, got {ticket_price!r}")
    if isinstance(max_players, bool) or not isinstance(max_players, int) or max_players <= 0:
        raise InvalidConfiguration(f"max_players must be a positive integer, got {max_players!r}")
    return LotteryConfig(ticket_price=ticket_price, max_players=max_players)


class LotteryState:
    """Round-based lottery: fill the roster, pay one winner, start over.

    Every public mutating call runs inside :meth:`_transaction`, so it either
    commits completely or leaves no trace (roster, balances, history, round
    counter and events are all restored).
    """

    def __init__(
        self,
        manager: str,
        ticket_price: int,
        max_players: int,
        chain: BlockEnvironment,
        ledger: Optional[Ledger] = None,
        events: Optional[EventLog] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._manager = to_identity(manager)
        self._config = _validate_config(ticket_price, max_players)
        self._chain = chain
        self._ledger = ledger or Ledger()
        self._events = events or EventLog()
        self._logger = logger or logging.getLogger("lottery.state")
        self._players: List[Identity] = []
        self._rounds: List[RoundRecord] = []
        self._current_round = 1
        self._paused = False

    # ------------------------------------------------------------------ #
    # Read-only state
    # ------------------------------------------------------------------ #

    @property
    def manager(self) -> Identity:
        return self._manager

    @property
    def ticket_price(self) -> int:
        return self._config.ticket_price

    @property
    def max_players(self) -> int:
        return self._config.max_players

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def players(self) -> Tuple[Identity, ...]:
        return tuple(self._players)

    @property
    def lottery_rounds(self) -> Tuple[RoundRecord, ...]:
        return tuple(self._rounds)

    @property
    def balance(self) -> int:
        return self._ledger.contract_balance

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def chain(self) -> BlockEnvironment:
        return self._chain

    def get_players(self) -> Tuple[Identity, ...]:
        return self.players

    def round(self, round_number: int) -> RoundRecord:
        # Rounds are numbered from 1 and archived in order.
        if 1 <= round_number <= len(self._rounds):
            return self._rounds[round_number - 1]
        raise KeyError(f"Round {round_number} has not completed")

    # ------------------------------------------------------------------ #
    # Public operations
    # ------------------------------------------------------------------ #

    def enter(self, caller: str, value: int) -> Optional[RoundRecord]:
        """Buy one ticket for ``caller``.

        Returns the archived round when this entry filled it, ``None``
        otherwise.
        """
        player = to_identity(caller)
        with self._transaction():
            if self._paused:
                raise InvalidState("Lottery is paused")
            if value != self._config.ticket_price:
                raise InvalidPayment(self._config.ticket_price, value)
            if len(self._players) >= self._config.max_players:
                raise RoundFull(f"Round {self._current_round} is full")

            self._ledger.receive(player, value)
            self._players.append(player)
            self._events.emit(PlayerEntered(player=player))
            self._logger.info(
                "Player %s entered round %s (%s/%s)",
                player,
                self._current_round,
                len(self._players),
                self._config.max_players,
            )

            if len(self._players) == self._config.max_players:
                return self._select_winner()
            return None

    @only_manager
    def set_paused(self, caller: Identity, paused: bool) -> None:
        with self._transaction():
            self._paused = bool(paused)
            self._events.emit(PauseChanged(paused=self._paused))
            self._logger.info("Lottery %s by %s", "paused" if self._paused else "resumed", caller)

    @only_manager
    def start_new_lottery(self, caller: Identity, ticket_price: int, max_players: int) -> None:
        """Reconfigure price and capacity between rounds.

        The round counter is left untouched; only a completed round advances it.
        """
        with self._transaction():
            if self._players:
                raise InvalidState("Cannot reconfigure while a round is in progress")
            self._config = _validate_config(ticket_price, max_players)
            self._events.emit(
                NewRoundStarted(
                    round_number=self._current_round,
                    ticket_price=self._config.ticket_price,
                    max_players=self._config.max_players,
                )
            )
            self._logger.info(
                "Round %s reconfigured: ticket_price=%s max_players=%s",
                self._current_round,
                ticket_price,
                max_players,
            )

    # ------------------------------------------------------------------ #
    # Internal transitions
    # ------------------------------------------------------------------ #

    def _select_winner(self) -> RoundRecord:
        if len(self._players) != self._config.max_players:
            raise InvalidState("Winner selection requires a full roster")

        block = self._chain.latest()
        winner = self._players[winner_index(block, self._players)]
        prize = self._ledger.contract_balance
        self._ledger.pay(winner, prize)

        record = RoundRecord(
            round_number=self._current_round,
            players=tuple(self._players),
            winner=winner,
            prize=prize,
        )
        self._rounds.append(record)
        self._events.emit(WinnerSelected(winner=winner, amount=prize))
        self._logger.info(
            "Round %s won by %s for %s (block %s)", record.round_number, winner, prize, block.number
        )

        self._rollover_round()
        return record

    def _rollover_round(self) -> None:
        if len(self._players) != self._config.max_players:
            raise InvalidState("Rollover requires a full roster")
        self._players = []
        self._current_round += 1
        self._events.emit(
            NewRoundStarted(
                round_number=self._current_round,
                ticket_price=self._config.ticket_price,
                max_players=self._config.max_players,
            )
        )

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        snapshot = (
            list(self._players),
            len(self._rounds),
            self._current_round,
            self._paused,
            self._config,
            self._ledger.snapshot(),
        )
        try:
            yield
        except Exception:
            players, rounds, current_round, paused, config, ledger = snapshot
            self._players = players
            del self._rounds[rounds:]
            self._current_round = current_round
            self._paused = paused
            self._config = config
            self._ledger.restore(ledger)
            self._events.discard()
            raise
        self._events.flush()
