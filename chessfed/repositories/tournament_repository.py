"""
Persistence for tournaments, rosters and rounds.

Routers talk to storage only through this class, and the Swiss engine only
ever sees the plain value types it returns.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from fastapi import Depends
from sqlalchemy import select, func, update
from sqlalchemy.ext.asyncio import AsyncSession

from chessfed.constants import GameResult
from chessfed.database import get_db
from chessfed.models.pairing import Pairing
from chessfed.models.player import Player
from chessfed.models.tournament import Tournament, TournamentPlayer
from chessfed.services.history import Match, Round, SwissPlayer

logger = logging.getLogger(__name__)


class TournamentRepository:
    """Loads engine input from, and stores engine output to, the database"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        result = await self.db.execute(
            select(Tournament).where(Tournament.id == tournament_id)
        )
        return result.scalar_one_or_none()

    async def get_players(self, player_ids: Sequence[str]) -> Dict[str, Player]:
        if not player_ids:
            return {}
        result = await self.db.execute(select(Player).where(Player.id.in_(player_ids)))
        return {player.id: player for player in result.scalars().all()}

    async def count_players(self, tournament_id: str) -> int:
        result = await self.db.execute(
            select(func.count(TournamentPlayer.id)).where(
                TournamentPlayer.tournament_id == tournament_id,
                TournamentPlayer.is_withdrawn == False,
            )
        )
        return result.scalar() or 0

    async def get_entries(
        self, tournament_id: str, include_withdrawn: bool = False
    ) -> List[tuple]:
        """(TournamentPlayer, Player) rows in pairing-number order"""
        query = (
            select(TournamentPlayer, Player)
            .join(Player, Player.id == TournamentPlayer.player_id)
            .where(TournamentPlayer.tournament_id == tournament_id)
            .order_by(TournamentPlayer.pairing_number)
        )
        if not include_withdrawn:
            query = query.where(TournamentPlayer.is_withdrawn == False)

        result = await self.db.execute(query)
        return list(result.all())

    async def get_entry(self, tournament_id: str, player_id: str) -> Optional[TournamentPlayer]:
        result = await self.db.execute(
            select(TournamentPlayer).where(
                TournamentPlayer.tournament_id == tournament_id,
                TournamentPlayer.player_id == player_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_roster(
        self, tournament_id: str, include_withdrawn: bool = False
    ) -> List[SwissPlayer]:
        """Engine roster, rated by the seed rating recorded at entry"""
        entries = await self.get_entries(tournament_id, include_withdrawn=include_withdrawn)
        return [
            SwissPlayer(id=player.id, name=player.name, rating=tp.seed_rating)
            for tp, player in entries
        ]

    async def add_players(self, tournament_id: str, players: Sequence[Player]) -> List[TournamentPlayer]:
        """Append players to the roster with the next free pairing numbers"""
        result = await self.db.execute(
            select(func.max(TournamentPlayer.pairing_number)).where(
                TournamentPlayer.tournament_id == tournament_id
            )
        )
        next_number = (result.scalar() or 0) + 1

        entries = []
        for player in players:
            tp = TournamentPlayer(
                tournament_id=tournament_id,
                player_id=player.id,
                pairing_number=next_number,
                seed_rating=player.rating,
            )
            self.db.add(tp)
            entries.append(tp)
            next_number += 1
        return entries

    async def list_pairings(
        self, tournament_id: str, round_number: Optional[int] = None
    ) -> List[Pairing]:
        query = select(Pairing).where(Pairing.tournament_id == tournament_id)
        if round_number:
            query = query.where(Pairing.round_number == round_number)
        query = query.order_by(Pairing.round_number, Pairing.board_number)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_pairing(self, tournament_id: str, pairing_id: str) -> Optional[Pairing]:
        result = await self.db.execute(
            select(Pairing).where(
                Pairing.id == pairing_id,
                Pairing.tournament_id == tournament_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_rounds(self, tournament_id: str) -> List[Round]:
        """Full round history, rebuilt from the pairings table"""
        rounds: Dict[int, Round] = {}
        for pairing in await self.list_pairings(tournament_id):
            rnd = rounds.setdefault(pairing.round_number, Round(round_number=pairing.round_number))
            rnd.matches.append(Match(
                white_id=pairing.white_player_id,
                black_id=pairing.black_player_id,
                result=pairing.result,
            ))
        return [rounds[number] for number in sorted(rounds)]

    async def count_pending(self, tournament_id: str, round_number: int) -> int:
        result = await self.db.execute(
            select(func.count(Pairing.id)).where(
                Pairing.tournament_id == tournament_id,
                Pairing.round_number == round_number,
                Pairing.result == GameResult.PENDING,
            )
        )
        return result.scalar() or 0

    async def claim_round(self, tournament_id: str, current_round: int) -> bool:
        """
        Advance current_round by one, but only if it still equals
        `current_round`. False means another request paired this round first.
        """
        result = await self.db.execute(
            update(Tournament)
            .where(
                Tournament.id == tournament_id,
                Tournament.current_round == current_round,
            )
            .values(current_round=current_round + 1)
        )
        return result.rowcount == 1

    async def save_round(
        self, tournament_id: str, round_number: int, matches: Sequence[Match]
    ) -> List[Pairing]:
        """
        Store a generated round. Boards are numbered from 1 in engine order;
        a bye is stored on board 0 with result BYE.
        """
        created = []
        board = 1
        for match in matches:
            if match.is_bye:
                pairing = Pairing(
                    tournament_id=tournament_id,
                    round_number=round_number,
                    white_player_id=match.white_id,
                    black_player_id=None,
                    board_number=0,
                    result=GameResult.BYE,
                )
            else:
                pairing = Pairing(
                    tournament_id=tournament_id,
                    round_number=round_number,
                    white_player_id=match.white_id,
                    black_player_id=match.black_id,
                    board_number=board,
                    result=match.result,
                )
                board += 1

            self.db.add(pairing)
            created.append(pairing)

        logger.info(f"Stored round {round_number} for tournament {tournament_id}: {len(created)} pairings")
        return created

    async def record_result(self, pairing: Pairing, result: GameResult) -> Pairing:
        pairing.result = result
        pairing.played_at = datetime.utcnow()
        return pairing


async def get_tournament_repository(db: AsyncSession = Depends(get_db)) -> TournamentRepository:
    return TournamentRepository(db)
