from __future__ import annotations

import logging
from typing import Optional

from web3 import Web3

from .base import BlockEnvironment, BlockInfo

DEFAULT_GENESIS_TIMESTAMP = 1_700_000_000
DEFAULT_BLOCK_TIME = 12


class LocalChain(BlockEnvironment):
    """Deterministic in-process chain.

    Block ``n`` has timestamp ``genesis + n * block_time`` and a
    ``prevrandao`` value of ``keccak256(seed, n)``. Anyone who knows the seed
    can predict every block, which is exactly as weak as the real thing.
    """

    def __init__(
        self,
        seed: int = 0,
        genesis_timestamp: int = DEFAULT_GENESIS_TIMESTAMP,
        block_time: int = DEFAULT_BLOCK_TIME,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if block_time <= 0:
            raise ValueError("block_time must be positive")
        self._seed = int(seed)
        self._genesis_timestamp = int(genesis_timestamp)
        self._block_time = int(block_time)
        self._number = 0
        self._logger = logger or logging.getLogger("lottery.chain")

    def latest(self) -> BlockInfo:
        return self.block(self._number)

    def block(self, number: int) -> BlockInfo:
        if number < 0 or number > self._number:
            raise ValueError(f"Block {number} has not been mined")
        prevrandao = Web3.solidity_keccak(["uint256", "uint256"], [self._seed, number])
        return BlockInfo(
            number=number,
            timestamp=self._genesis_timestamp + number * self._block_time,
            difficulty=int.from_bytes(prevrandao, "big"),
        )

    def mine(self, count: int = 1) -> BlockInfo:
        if count < 1:
            raise ValueError("count must be at least 1")
        self._number += count
        self._logger.debug("Mined local block %s", self._number)
        return self.latest()

    def advance(self) -> None:
        self.mine()
