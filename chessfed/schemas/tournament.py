import re
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from chessfed.models.tournament import TournamentStatus
from chessfed.utils.nigeria import normalize_state

TIME_CONTROL_PATTERN = re.compile(r"^(\d+)min(?:\s*\+\s*(\d+)sec)?$")


def validate_time_control(value: str) -> str:
    """
    Validate a time control in federation format.
    Accepts: 90min, 15min + 10sec
    """
    cleaned = value.strip()
    match = TIME_CONTROL_PATTERN.match(cleaned)
    if not match:
        raise ValueError(
            'Invalid format. Use XXmin or XXmin + YYsec (e.g., 90min or 15min + 10sec)'
        )

    minutes = int(match.group(1))
    seconds = int(match.group(2) or 0)
    if minutes == 0:
        raise ValueError('Minutes must be greater than 0')
    if seconds >= 60:
        raise ValueError('Seconds must be less than 60')
    return cleaned


class TournamentCreate(BaseModel):
    """Schema for creating a tournament"""
    name: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    venue: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = None
    total_rounds: int = Field(5, ge=1, le=15)
    time_control: str = "90min + 30sec"
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator('time_control')
    @classmethod
    def check_time_control(cls, v):
        return validate_time_control(v)

    @field_validator('state')
    @classmethod
    def validate_state(cls, v):
        if v is None:
            return v
        return normalize_state(v)

    @field_validator('end_date')
    @classmethod
    def validate_date_range(cls, v, info):
        start_date = info.data.get('start_date')
        if v is not None and start_date is not None and v < start_date:
            raise ValueError('end_date must be on or after start_date')
        return v


class TournamentUpdate(BaseModel):
    """Schema for updating a tournament. Optional details and dates may be cleared with null."""
    name: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    venue: Optional[str] = Field(None, max_length=200)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = None
    total_rounds: Optional[int] = Field(None, ge=1, le=15)
    time_control: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @field_validator('name', 'total_rounds', 'time_control')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('time_control')
    @classmethod
    def check_time_control(cls, v):
        return validate_time_control(v)

    @field_validator('state')
    @classmethod
    def validate_state(cls, v):
        if v is None:
            return v
        return normalize_state(v)

    @field_validator('end_date')
    @classmethod
    def validate_date_range(cls, v, info):
        start_date = info.data.get('start_date')
        if v is not None and start_date is not None and v < start_date:
            raise ValueError('end_date must be on or after start_date')
        return v


class TournamentResponse(BaseModel):
    """Schema for tournament response"""
    id: str
    name: str
    description: Optional[str]
    venue: Optional[str]
    city: Optional[str]
    state: Optional[str]
    total_rounds: int
    current_round: int
    time_control: str
    status: TournamentStatus
    start_date: Optional[datetime]
    end_date: Optional[datetime]
    player_count: int = 0
    created_at: datetime

    class Config:
        from_attributes = True


class TournamentPlayersAdd(BaseModel):
    """Players to enter into a tournament, in pairing-number order"""
    player_ids: List[str] = Field(..., min_length=1)


class TournamentPlayerResponse(BaseModel):
    """Player info within a tournament"""
    player_id: str
    name: str
    pairing_number: int
    seed_rating: int
    state: Optional[str] = None
    is_withdrawn: bool

    class Config:
        from_attributes = True


class StandingEntry(BaseModel):
    """One row of the standings table"""
    rank: int
    player_id: str
    player_name: str
    rating: int
    score: float
    games_played: int
    wins: int
    draws: int
    losses: int
    buchholz: float = 0.0  # Not computed
    sonneborn_berger: float = 0.0  # Not computed

    class Config:
        from_attributes = True


class StandingsResponse(BaseModel):
    """Tournament standings"""
    tournament_id: str
    tournament_name: str
    current_round: int
    total_rounds: int
    standings: List[StandingEntry]
