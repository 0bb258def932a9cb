from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

CHAIN_MODES = ("local", "rpc")


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "roundlottery-dev-secret"
    debug: bool = True


@dataclass(frozen=True)
class LotterySettings:
    manager: str
    ticket_price: int = 100
    max_players: int = 3


@dataclass(frozen=True)
class ChainSettings:
    mode: str = "local"
    rpc_url: Optional[str] = None
    seed: int = 0
    genesis_timestamp: int = 1_700_000_000
    block_time: int = 12


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    lottery: LotterySettings
    chain: ChainSettings
    database_url: str
    admin_api_key: Optional[str]


def _require(key: str) -> str:
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {key}")
    return value


def _int_from_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {key} must be an integer, got {value!r}") from exc


def _load_chain_settings() -> ChainSettings:
    mode = os.getenv("CHAIN_MODE", "local").strip().lower()
    if mode not in CHAIN_MODES:
        raise RuntimeError(f"CHAIN_MODE must be one of {', '.join(CHAIN_MODES)}, got {mode!r}")
    return ChainSettings(
        mode=mode,
        rpc_url=_require("RPC_URL") if mode == "rpc" else os.getenv("RPC_URL"),
        seed=_int_from_env("CHAIN_SEED", 0),
        genesis_timestamp=_int_from_env("CHAIN_GENESIS_TIMESTAMP", 1_700_000_000),
        block_time=_int_from_env("CHAIN_BLOCK_TIME", 12),
    )


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "roundlottery-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )

    lottery_settings = LotterySettings(
        manager=_require("LOTTERY_MANAGER"),
        ticket_price=_int_from_env("LOTTERY_TICKET_PRICE", 100),
        max_players=_int_from_env("LOTTERY_MAX_PLAYERS", 3),
    )

    database_url = os.getenv("DATABASE_URL", "sqlite:///lottery.db")
    admin_api_key = os.getenv("ADMIN_API_KEY")

    return AppSettings(
        flask=flask_settings,
        lottery=lottery_settings,
        chain=_load_chain_settings(),
        database_url=database_url,
        admin_api_key=admin_api_key,
    )
