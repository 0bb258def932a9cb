from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..schemas import EnterRequest, EnterResponse, LotterySummaryResponse, RoundResponse
from ..services.host import get_lottery_host

bp = Blueprint("lottery", __name__)


@bp.get("")
def get_lottery():
    summary = get_lottery_host().summary()
    return jsonify(LotterySummaryResponse(**summary).dict())


@bp.get("/players")
def list_players():
    return jsonify(get_lottery_host().players())


@bp.post("/enter")
def enter():
    payload = request.get_json(force=True, silent=True) or {}
    data = EnterRequest(**payload)

    host = get_lottery_host()
    record = host.enter(data.sender, data.value)
    if record is not None:
        current_app.logger.info(
            "Round %s completed; winner %s prize %s", record.round_number, record.winner, record.prize
        )

    response = EnterResponse(
        player=data.sender,
        current_round=host.state.current_round,
        players=host.players(),
        completed_round=RoundResponse(**record.to_dict()) if record is not None else None,
    )
    return jsonify(response.dict())


@bp.get("/rounds")
def list_rounds():
    return jsonify(get_lottery_host().rounds())


@bp.get("/rounds/<int:round_number>")
def get_round(round_number: int):
    try:
        record = get_lottery_host().round(round_number)
    except KeyError:
        return jsonify({"error": f"round {round_number} not found"}), 404
    return jsonify(RoundResponse(**record.to_dict()).dict())
