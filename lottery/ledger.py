from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Optional, Set, Tuple

from .errors import PayoutFailure
from .types import Identity


class Ledger:
    """Balances held by the lottery contract and the accounts it pays."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._contract_balance = 0
        self._balances: Dict[Identity, int] = defaultdict(int)
        self._rejecting: Set[Identity] = set()
        self._logger = logger or logging.getLogger("lottery.ledger")

    @property
    def contract_balance(self) -> int:
        return self._contract_balance

    def balance_of(self, account: Identity) -> int:
        return self._balances.get(account, 0)

    def reject_payments(self, account: Identity, rejecting: bool = True) -> None:
        """Mark an account as one whose receive hook reverts."""
        if rejecting:
            self._rejecting.add(account)
        else:
            self._rejecting.discard(account)

    def receive(self, sender: Identity, amount: int) -> None:
        if amount < 0:
            raise ValueError("amount must not be negative")
        self._contract_balance += amount
        self._logger.debug("Received %s from %s", amount, sender)

    def pay(self, recipient: Identity, amount: int) -> None:
        if amount > self._contract_balance:
            raise PayoutFailure(
                f"Cannot pay {amount}; contract balance is {self._contract_balance}"
            )
        if recipient in self._rejecting:
            raise PayoutFailure(f"Transfer to {recipient} was rejected")
        self._contract_balance -= amount
        self._balances[recipient] += amount
        self._logger.info("Paid %s to %s", amount, recipient)

    def snapshot(self) -> Tuple[int, Dict[Identity, int]]:
        return self._contract_balance, dict(self._balances)

    def restore(self, snapshot: Tuple[int, Dict[Identity, int]]) -> None:
        contract_balance, balances = snapshot
        self._contract_balance = contract_balance
        self._balances = defaultdict(int, balances)
