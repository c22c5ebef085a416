from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from chessfed.constants import GameResult


class PlayerBrief(BaseModel):
    """Brief player info for pairings"""
    id: str
    name: str
    rating: int

    class Config:
        from_attributes = True


class PairingResponse(BaseModel):
    """Schema for pairing response"""
    id: str
    tournament_id: str
    round_number: int
    board_number: int
    white_player: Optional[PlayerBrief]
    black_player: Optional[PlayerBrief]
    result: GameResult
    notation: str  # 1-0, 0-1, 1/2-1/2, *
    played_at: Optional[datetime]
    is_bye: bool

    class Config:
        from_attributes = True


class PairingResultUpdate(BaseModel):
    """Schema for recording a game result"""
    result: GameResult

    @field_validator('result')
    @classmethod
    def validate_result(cls, v):
        if v in (GameResult.PENDING, GameResult.BYE):
            raise ValueError('Result must be a decided game result')
        return v
