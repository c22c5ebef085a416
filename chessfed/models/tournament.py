import uuid
from datetime import datetime
from sqlalchemy import String, Integer, DateTime, Text, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional, List, TYPE_CHECKING
import enum

from chessfed.database import Base

if TYPE_CHECKING:
    from chessfed.models.player import Player
    from chessfed.models.pairing import Pairing


class TournamentStatus(str, enum.Enum):
    UPCOMING = "upcoming"    # Roster being assembled, no rounds yet
    ONGOING = "ongoing"      # Tournament in progress
    COMPLETED = "completed"  # All rounds played


class Tournament(Base):
    __tablename__ = "tournaments"

    __table_args__ = (
        Index("ix_tournaments_status", "status"),
        Index("ix_tournaments_start_date", "start_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    # Basic info
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    venue: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Tournament settings
    total_rounds: Mapped[int] = mapped_column(Integer, default=5)
    current_round: Mapped[int] = mapped_column(Integer, default=0)
    time_control: Mapped[str] = mapped_column(String(50), default="90min + 30sec")

    status: Mapped[TournamentStatus] = mapped_column(
        SQLEnum(TournamentStatus), default=TournamentStatus.UPCOMING
    )

    # Scheduling
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    players: Mapped[List["TournamentPlayer"]] = relationship(
        back_populates="tournament", cascade="all, delete-orphan"
    )
    pairings: Mapped[List["Pairing"]] = relationship(
        back_populates="tournament", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Tournament {self.name}>"


class TournamentPlayer(Base):
    """
    Roster entry for a tournament participant.

    Scores, colours and opponents are not stored here; they are replayed
    from the pairings table every time they are needed.
    """
    __tablename__ = "tournament_players"

    __table_args__ = (
        Index("ix_tp_tournament_player", "tournament_id", "player_id", unique=True),
        Index("ix_tp_tournament_number", "tournament_id", "pairing_number", unique=True),
        Index("ix_tp_tournament_withdrawn", "tournament_id", "is_withdrawn"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    tournament_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tournaments.id"), index=True
    )
    player_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id"), index=True
    )

    # Order of entry; the deterministic tie-break when seed ratings are equal
    pairing_number: Mapped[int] = mapped_column(Integer)

    # Rating when they joined (ratings may change mid-event elsewhere)
    seed_rating: Mapped[int] = mapped_column(Integer)

    # Withdrawn players are left out of future pairings
    is_withdrawn: Mapped[bool] = mapped_column(default=False)

    joined_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    tournament: Mapped["Tournament"] = relationship(back_populates="players")
    player: Mapped["Player"] = relationship(back_populates="tournament_entries")

    def __repr__(self) -> str:
        return f"<TournamentPlayer #{self.pairing_number} {self.player_id} in {self.tournament_id}>"
