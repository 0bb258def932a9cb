from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..config import load_settings
from ..schemas import LotterySummaryResponse, NewLotteryRequest, PauseRequest
from ..services.archive import ArchiveRepository
from ..services.host import get_lottery_host

bp = Blueprint("admin", __name__)
archive_repo = ArchiveRepository()


def _require_admin() -> bool:
    settings = load_settings()
    api_key = settings.admin_api_key
    if api_key:
        provided = request.headers.get("X-Admin-Token")
        if provided != api_key:
            return False
    return True


@bp.before_request
def verify_admin():
    if not _require_admin():
        return jsonify({"error": "unauthorized"}), 401
    return None


@bp.get("/rounds")
def list_indexed_rounds():
    return jsonify(archive_repo.list_rounds())


@bp.get("/events")
def list_events():
    name = request.args.get("name")
    limit = request.args.get("limit", default=100, type=int)
    return jsonify(archive_repo.list_events(name=name, limit=max(1, min(limit, 1000))))


@bp.post("/pause")
def set_pause():
    payload = request.get_json(force=True, silent=True) or {}
    data = PauseRequest(**payload)

    host = get_lottery_host()
    host.set_paused(data.sender, data.paused)
    current_app.logger.info("Pause set to %s", data.paused)
    return jsonify(LotterySummaryResponse(**host.summary()).dict())


@bp.post("/lottery")
def start_new_lottery():
    payload = request.get_json(force=True, silent=True) or {}
    data = NewLotteryRequest(**payload)

    host = get_lottery_host()
    host.start_new_lottery(data.sender, data.ticket_price, data.max_players)
    return jsonify(LotterySummaryResponse(**host.summary()).dict())
