from .base import BlockEnvironment, BlockInfo
from .local import LocalChain
from .rpc import Web3BlockSource

__all__ = [
    "BlockEnvironment",
    "BlockInfo",
    "LocalChain",
    "Web3BlockSource",
]
