from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from chessfed.utils.nigeria import normalize_state


def normalize_name(value: str) -> str:
    """Collapse runs of whitespace; the result must still be 2+ characters"""
    cleaned = " ".join(value.split())
    if len(cleaned) < 2:
        raise ValueError('Name must be at least 2 characters')
    return cleaned


class PlayerCreate(BaseModel):
    """Schema for adding a player to the federation register"""
    name: str = Field(..., min_length=2, max_length=200)
    rating: Optional[int] = Field(None, ge=0, le=3500)  # None = federation floor rating
    fide_id: Optional[str] = Field(None, pattern=r"^\d{4,12}$")
    state: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return normalize_name(v)

    @field_validator('state')
    @classmethod
    def validate_state(cls, v):
        if v is None:
            return v
        return normalize_state(v)


class PlayerUpdate(BaseModel):
    """Schema for updating a player record. fide_id, state and city may be cleared with null."""
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    rating: Optional[int] = Field(None, ge=0, le=3500)
    fide_id: Optional[str] = Field(None, pattern=r"^\d{4,12}$")
    state: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None

    @field_validator('name', 'rating', 'is_active')
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be null')
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return normalize_name(v)

    @field_validator('state')
    @classmethod
    def validate_state(cls, v):
        if v is None:
            return v
        return normalize_state(v)


class PlayerResponse(BaseModel):
    """Schema for player response"""
    id: str
    name: str
    rating: int
    fide_id: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class RankedPlayerResponse(PlayerResponse):
    """Player in the national rating list"""
    rank: int
