from __future__ import annotations

import datetime as dt
import json
from typing import List

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class RoundArchive(Base):
    """Indexed copy of a completed round."""

    __tablename__ = "rounds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    round_number = Column(Integer, nullable=False, index=True)
    players = Column(Text, nullable=False)
    winner = Column(String(42), nullable=False)
    # uint256 amounts do not fit in a SQL integer.
    prize = Column(String(78), nullable=False)
    block_number = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    def set_players(self, players: List[str]) -> None:
        self.players = json.dumps(players)

    def get_players(self) -> List[str]:
        return json.loads(self.players)

    def to_dict(self) -> dict:
        return {
            "round_number": self.round_number,
            "players": self.get_players(),
            "winner": self.winner,
            "prize": self.prize,
            "block_number": self.block_number,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class EventRecord(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), nullable=False, index=True)
    args = Column(Text, nullable=False)
    block_number = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "event": self.name,
            "args": json.loads(self.args),
            "block_number": self.block_number,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
