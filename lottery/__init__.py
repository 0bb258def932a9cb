from .chain import BlockEnvironment, BlockInfo, LocalChain, Web3BlockSource
from .errors import (
    InvalidConfiguration,
    InvalidPayment,
    InvalidState,
    LotteryError,
    PayoutFailure,
    RoundFull,
    Unauthorized,
)
from .events import EventLog, LotteryEvent, NewRoundStarted, PauseChanged, PlayerEntered, WinnerSelected
from .ledger import Ledger
from .state import LotteryState
from .types import Identity, LotteryConfig, RoundRecord, to_identity

__all__ = [
    "BlockEnvironment",
    "BlockInfo",
    "EventLog",
    "Identity",
    "InvalidConfiguration",
    "InvalidPayment",
    "InvalidState",
    "Ledger",
    "LocalChain",
    "LotteryConfig",
    "LotteryError",
    "LotteryEvent",
    "LotteryState",
    "NewRoundStarted",
    "PauseChanged",
    "PayoutFailure",
    "PlayerEntered",
    "RoundFull",
    "RoundRecord",
    "Unauthorized",
    "Web3BlockSource",
    "WinnerSelected",
    "to_identity",
]
