import uuid
from datetime import datetime
from sqlalchemy import String, Boolean, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional, List, TYPE_CHECKING

from chessfed.constants import DEFAULT_RATING
from chessfed.database import Base

if TYPE_CHECKING:
    from chessfed.models.tournament import TournamentPlayer


class Player(Base):
    __tablename__ = "players"

    __table_args__ = (
        Index("ix_players_state", "state"),
        Index("ix_players_rating", "rating"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    name: Mapped[str] = mapped_column(String(200))

    # Federation rating used for seeding and tie-breaks
    rating: Mapped[int] = mapped_column(Integer, default=DEFAULT_RATING)

    # Federation details
    fide_id: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, unique=True)
    state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # Lagos, Kano, etc.
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    tournament_entries: Mapped[List["TournamentPlayer"]] = relationship(
        back_populates="player", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Player {self.name} ({self.rating})>"
