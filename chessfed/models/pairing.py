import uuid
from datetime import datetime
from sqlalchemy import String, Integer, DateTime, ForeignKey, Enum as SQLEnum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional, TYPE_CHECKING

from chessfed.constants import GameResult, RESULT_NOTATION
from chessfed.database import Base

if TYPE_CHECKING:
    from chessfed.models.tournament import Tournament


class Pairing(Base):
    __tablename__ = "pairings"

    __table_args__ = (
        Index("ix_pairings_tournament_round", "tournament_id", "round_number"),
        Index(
            "ix_pairings_tournament_round_board",
            "tournament_id", "round_number", "board_number",
            unique=True,
        ),
        Index("ix_pairings_white_player", "white_player_id"),
        Index("ix_pairings_black_player", "black_player_id"),
        Index("ix_pairings_result", "tournament_id", "result"),  # Find pending games
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )

    tournament_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("tournaments.id"), index=True
    )
    round_number: Mapped[int] = mapped_column(Integer, index=True)

    # Black player is null for a BYE
    white_player_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("players.id")
    )
    black_player_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("players.id"), nullable=True
    )

    # Board number (for display: "Board 1", "Board 2", etc.); 0 for a bye
    board_number: Mapped[int] = mapped_column(Integer, default=1)

    result: Mapped[GameResult] = mapped_column(
        SQLEnum(GameResult), default=GameResult.PENDING
    )
    played_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    tournament: Mapped["Tournament"] = relationship(back_populates="pairings")

    def __repr__(self) -> str:
        return f"<Pairing R{self.round_number}: {self.white_player_id} vs {self.black_player_id}>"

    @property
    def is_bye(self) -> bool:
        return self.result == GameResult.BYE or self.black_player_id is None

    @property
    def notation(self) -> str:
        return RESULT_NOTATION[self.result]
