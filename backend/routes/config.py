from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify

from lottery.chain import Web3BlockSource

from ..config import load_settings
from ..services.host import get_lottery_host

bp = Blueprint("config", __name__)


def _get_chain_metadata() -> Dict[str, Any]:
    settings = load_settings()
    host = get_lottery_host()
    chain = host.state.chain
    payload: Dict[str, Any] = {
        "chain_mode": settings.chain.mode,
        "rpc_url": settings.chain.rpc_url,
        "chain_id": None,
        "manager": host.state.manager,
        "latest_block": None,
    }

    if isinstance(chain, Web3BlockSource):
        payload["chain_id"] = chain.chain_id

    try:
        block = chain.latest()
        payload["latest_block"] = {"number": block.number, "timestamp": block.timestamp}
    except Exception as exc:  # pragma: no cover - connectivity issues are reported, not raised
        current_app.logger.warning("Unable to read latest block: %s", exc)
    return payload


@bp.get("/config")
def get_config():
    return jsonify(_get_chain_metadata())
