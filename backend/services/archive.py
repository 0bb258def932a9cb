from __future__ import annotations

import json
from typing import List, Optional

from lottery.events import LotteryEvent
from lottery.types import RoundRecord

from ..db import session_scope
from ..models import EventRecord, RoundArchive


class ArchiveRepository:
    """Indexes committed rounds and events for the admin views."""

    def add_round(self, record: RoundRecord, block_number: Optional[int] = None) -> RoundArchive:
        with session_scope() as session:
            row = RoundArchive(
                round_number=record.round_number,
                winner=record.winner,
                prize=str(record.prize),
                block_number=block_number,
            )
            row.set_players(list(record.players))
            session.add(row)
            session.flush()
            session.refresh(row)
            session.expunge(row)
            return row

    def list_rounds(self) -> List[dict]:
        with session_scope() as session:
            rows = session.query(RoundArchive).order_by(RoundArchive.id.desc()).all()
            return [row.to_dict() for row in rows]

    def add_event(self, event: LotteryEvent, block_number: Optional[int] = None) -> EventRecord:
        payload = event.to_dict()
        with session_scope() as session:
            row = EventRecord(
                name=payload["event"],
                args=json.dumps(payload["args"]),
                block_number=block_number,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            session.expunge(row)
            return row

    def list_events(self, name: Optional[str] = None, limit: int = 100) -> List[dict]:
        with session_scope() as session:
            query = session.query(EventRecord)
            if name:
                query = query.filter(EventRecord.name == name)
            rows = query.order_by(EventRecord.id.desc()).limit(limit).all()
            return [row.to_dict() for row in rows]
