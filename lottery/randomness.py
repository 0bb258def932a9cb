"""Winner index derivation.

The index is ``keccak256(abi.encodePacked(difficulty, timestamp, players))``
reduced modulo the roster size. Every input is public, so whoever orders or
times the final entry (or produces the block) can predict and steer the
outcome. This is a known weakness kept for behavioural parity; do not use it
where fairness matters.
"""
from __future__ import annotations

from typing import Sequence

from web3 import Web3

from .chain.base import BlockInfo
from .types import Identity


def entropy(block: BlockInfo, players: Sequence[Identity]) -> int:
    digest = Web3.solidity_keccak(
        ["uint256", "uint256", "address[]"],
        [block.difficulty, block.timestamp, list(players)],
    )
    return int.from_bytes(digest, "big")


def winner_index(block: BlockInfo, players: Sequence[Identity]) -> int:
    if not players:
        raise ValueError("Cannot pick a winner from an empty roster")
    return entropy(block, players) % len(players)
