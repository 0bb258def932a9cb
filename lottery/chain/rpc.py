from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .base import BlockEnvironment, BlockInfo


class Web3BlockSource(BlockEnvironment):
    """Read the chain head from a JSON-RPC node."""

    def __init__(self, web3: Web3, logger: Optional[logging.Logger] = None) -> None:
        self._web3 = web3
        self._logger = logger or logging.getLogger("lottery.chain")

    @classmethod
    def from_url(cls, rpc_url: str, timeout_seconds: int = 10) -> "Web3BlockSource":
        web3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout_seconds}))
        if not web3.is_connected():
            raise ConnectionError(f"Cannot connect to RPC endpoint: {rpc_url}")

        # PoA networks (Hardhat, Polygon) carry oversized extraData.
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        return cls(web3)

    @property
    def chain_id(self) -> Optional[int]:
        try:
            return int(self._web3.eth.chain_id)
        except Exception as exc:  # pragma: no cover - metadata only
            self._logger.warning("Unable to read chain id: %s", exc)
            return None

    def latest(self) -> BlockInfo:
        return self._parse_block(self._web3.eth.get_block("latest"))

    @staticmethod
    def _parse_block(block: Mapping[str, Any]) -> BlockInfo:
        difficulty = int(block.get("difficulty") or 0)
        if difficulty == 0:
            # After the merge DIFFICULTY returns prevrandao, exposed as mixHash.
            mix_hash = block.get("mixHash")
            if mix_hash is None:
                raise ValueError("Block carries neither difficulty nor mixHash")
            difficulty = int.from_bytes(bytes(mix_hash), "big")
        return BlockInfo(
            number=int(block["number"]),
            timestamp=int(block["timestamp"]),
            difficulty=difficulty,
        )
