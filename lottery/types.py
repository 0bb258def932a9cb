from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from eth_typing import ChecksumAddress
from web3 import Web3

Identity = ChecksumAddress


def to_identity(value: Any) -> Identity:
    """Normalise an address-like value to its EIP-55 checksum form."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"Invalid identity: {value!r}")
    return Web3.to_checksum_address(value)


@dataclass(frozen=True)
class LotteryConfig:
    ticket_price: int
    max_players: int


@dataclass(frozen=True)
class RoundRecord:
    """Snapshot of a completed round, written once right after the payout."""

    round_number: int
    players: Sequence[Identity]
    winner: Identity
    prize: int

    def to_dict(self) -> dict:
        return {
            "round_number": self.round_number,
            "players": list(self.players),
            "winner": self.winner,
            "prize": str(self.prize),
        }
