from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, validator

from lottery.types import to_identity


class EnterRequest(BaseModel):
    sender: str = Field(..., description="Address buying the ticket.")
    value: int = Field(..., ge=0, description="Amount sent with the entry, in wei.")

    @validator("sender")
    def validate_sender(cls, value: str) -> str:
        return to_identity(value)


class PauseRequest(BaseModel):
    sender: str
    paused: bool

    @validator("sender")
    def validate_sender(cls, value: str) -> str:
        return to_identity(value)


class NewLotteryRequest(BaseModel):
    sender: str
    ticket_price: int = Field(..., gt=0)
    max_players: int = Field(..., gt=0)

    @validator("sender")
    def validate_sender(cls, value: str) -> str:
        return to_identity(value)


class RoundResponse(BaseModel):
    round_number: int
    players: List[str]
    winner: str
    prize: str


class EnterResponse(BaseModel):
    player: str
    current_round: int
    players: List[str]
    completed_round: Optional[RoundResponse] = None


class LotterySummaryResponse(BaseModel):
    manager: str
    ticket_price: str
    max_players: int
    paused: bool
    current_round: int
    players: List[str]
    balance: str
    completed_rounds: int
