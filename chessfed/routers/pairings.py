import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from typing import Dict, List, Optional

from chessfed.config import get_settings
from chessfed.constants import GameResult
from chessfed.models.pairing import Pairing
from chessfed.models.player import Player
from chessfed.models.tournament import TournamentStatus
from chessfed.repositories.tournament_repository import TournamentRepository, get_tournament_repository
from chessfed.routers.tournaments import get_tournament_or_404
from chessfed.schemas.pairing import PairingResponse, PairingResultUpdate, PlayerBrief
from chessfed.services.swiss import SwissPairingEngine, validate_pairings

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/api/tournaments", tags=["Pairings"])


def build_pairing_response(pairing: Pairing, players: Dict[str, Player]) -> PairingResponse:
    """Convert Pairing model to response with player details"""
    def brief(player_id: Optional[str]) -> Optional[PlayerBrief]:
        player = players.get(player_id) if player_id else None
        if not player:
            return None
        return PlayerBrief(id=player.id, name=player.name, rating=player.rating)

    return PairingResponse(
        id=pairing.id,
        tournament_id=pairing.tournament_id,
        round_number=pairing.round_number,
        board_number=pairing.board_number,
        white_player=brief(pairing.white_player_id),
        black_player=brief(pairing.black_player_id),
        result=pairing.result,
        notation=pairing.notation,
        played_at=pairing.played_at,
        is_bye=pairing.is_bye,
    )


async def build_pairing_responses(
    repo: TournamentRepository, pairings: List[Pairing]
) -> List[PairingResponse]:
    player_ids = {
        pid
        for p in pairings
        for pid in (p.white_player_id, p.black_player_id)
        if pid
    }
    players = await repo.get_players(list(player_ids))
    return [build_pairing_response(p, players) for p in pairings]


@router.post("/{tournament_id}/generate-pairings", response_model=List[PairingResponse])
async def generate_pairings(
    tournament_id: str,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """
    Generate Swiss pairings for the next round.
    The previous round must be fully decided first.
    """
    tournament = await get_tournament_or_404(repo, tournament_id)

    if tournament.status == TournamentStatus.COMPLETED:
        raise HTTPException(status_code=400, detail="Tournament is already completed")

    # Refuse to pair on top of unfinished games
    if tournament.current_round > 0:
        pending = await repo.count_pending(tournament_id, tournament.current_round)
        if pending:
            raise HTTPException(
                status_code=400,
                detail=f"Round {tournament.current_round} has unfinished games"
            )

    next_round = tournament.current_round + 1

    if next_round > tournament.total_rounds:
        tournament.status = TournamentStatus.COMPLETED
        await repo.db.commit()
        raise HTTPException(status_code=400, detail="All rounds completed")

    roster = await repo.get_roster(tournament_id)
    if len(roster) < 2:
        raise HTTPException(status_code=400, detail="Need at least 2 players")

    rounds = await repo.get_rounds(tournament_id)

    engine = SwissPairingEngine(roster, rounds, bye_score=settings.bye_score)
    matches = engine.generate_pairings(next_round)

    errors = validate_pairings(matches)
    if errors:
        logger.error(f"Invalid pairings for {tournament.name} round {next_round}: {errors}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Pairing engine produced an invalid round"
        )

    # Concurrent requests race on current_round; only one stores the round
    if not await repo.claim_round(tournament_id, next_round - 1):
        logger.warning(f"Round {next_round} of {tournament.name} was paired by another request")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Round {next_round} is already being paired"
        )

    created = await repo.save_round(tournament_id, next_round, matches)

    if tournament.status == TournamentStatus.UPCOMING:
        tournament.status = TournamentStatus.ONGOING
    tournament.current_round = next_round
    try:
        await repo.db.commit()
    except IntegrityError:
        await repo.db.rollback()
        logger.warning(f"Round {next_round} of {tournament.name} already stored, discarding duplicate")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Round {next_round} has already been paired"
        )

    for p in created:
        await repo.db.refresh(p)

    logger.info(f"Generated round {next_round} for tournament {tournament.name}")
    return await build_pairing_responses(repo, created)


@router.get("/{tournament_id}/pairings", response_model=List[PairingResponse])
async def get_tournament_pairings(
    tournament_id: str,
    round_number: Optional[int] = None,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Get pairings for a tournament, optionally filtered by round"""
    await get_tournament_or_404(repo, tournament_id)
    pairings = await repo.list_pairings(tournament_id, round_number)
    return await build_pairing_responses(repo, pairings)


@router.get("/{tournament_id}/current-round", response_model=List[PairingResponse])
async def get_current_round_pairings(
    tournament_id: str,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Get pairings for the round in progress"""
    tournament = await get_tournament_or_404(repo, tournament_id)
    if tournament.current_round == 0:
        return []

    pairings = await repo.list_pairings(tournament_id, tournament.current_round)
    return await build_pairing_responses(repo, pairings)


@router.get("/{tournament_id}/pairings/{pairing_id}", response_model=PairingResponse)
async def get_pairing(
    tournament_id: str,
    pairing_id: str,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Get a specific pairing"""
    pairing = await repo.get_pairing(tournament_id, pairing_id)

    if not pairing:
        raise HTTPException(status_code=404, detail="Pairing not found")

    responses = await build_pairing_responses(repo, [pairing])
    return responses[0]


@router.patch("/{tournament_id}/pairings/{pairing_id}/result", response_model=PairingResponse)
async def update_pairing_result(
    tournament_id: str,
    pairing_id: str,
    result_data: PairingResultUpdate,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """
    Record the result of a game.
    Standings are not stored; the next standings request replays it.
    """
    pairing = await repo.get_pairing(tournament_id, pairing_id)

    if not pairing:
        raise HTTPException(status_code=404, detail="Pairing not found")

    if pairing.is_bye:
        raise HTTPException(status_code=400, detail="Cannot record a result for a bye")

    if pairing.result != GameResult.PENDING:
        raise HTTPException(status_code=400, detail="Result already recorded")

    await repo.record_result(pairing, result_data.result)
    await repo.db.commit()
    await repo.db.refresh(pairing)

    responses = await build_pairing_responses(repo, [pairing])
    return responses[0]
