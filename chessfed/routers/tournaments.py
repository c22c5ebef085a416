from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Optional

from chessfed.config import get_settings
from chessfed.database import get_db
from chessfed.models.tournament import Tournament, TournamentPlayer, TournamentStatus
from chessfed.repositories.tournament_repository import TournamentRepository, get_tournament_repository
from chessfed.schemas.tournament import (
    TournamentCreate,
    TournamentResponse,
    TournamentUpdate,
    TournamentPlayersAdd,
    TournamentPlayerResponse,
    StandingEntry,
    StandingsResponse,
)
from chessfed.services.standings import calculate_standings, initial_standings

settings = get_settings()

router = APIRouter(prefix="/api/tournaments", tags=["Tournaments"])


def tournament_to_response(tournament: Tournament, player_count: int = 0) -> TournamentResponse:
    """Convert Tournament model to response schema"""
    return TournamentResponse(
        id=tournament.id,
        name=tournament.name,
        description=tournament.description,
        venue=tournament.venue,
        city=tournament.city,
        state=tournament.state,
        total_rounds=tournament.total_rounds,
        current_round=tournament.current_round,
        time_control=tournament.time_control,
        status=tournament.status,
        start_date=tournament.start_date,
        end_date=tournament.end_date,
        player_count=player_count,
        created_at=tournament.created_at,
    )


async def get_tournament_or_404(repo: TournamentRepository, tournament_id: str) -> Tournament:
    tournament = await repo.get_tournament(tournament_id)
    if not tournament:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tournament not found"
        )
    return tournament


@router.post("/", response_model=TournamentResponse, status_code=status.HTTP_201_CREATED)
async def create_tournament(
    tournament_data: TournamentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new tournament"""
    tournament = Tournament(**tournament_data.model_dump())

    db.add(tournament)
    await db.commit()
    await db.refresh(tournament)

    return tournament_to_response(tournament, 0)


@router.get("/", response_model=List[TournamentResponse])
async def list_tournaments(
    status: Optional[TournamentStatus] = None,
    state: Optional[str] = None,
    skip: int = 0,
    limit: int = 20,
    db: AsyncSession = Depends(get_db)
):
    """List tournaments, newest first"""
    player_count = (
        select(func.count(TournamentPlayer.id))
        .where(
            TournamentPlayer.tournament_id == Tournament.id,
            TournamentPlayer.is_withdrawn == False,
        )
        .correlate(Tournament)
        .scalar_subquery()
    )
    query = select(Tournament, player_count)

    if status:
        query = query.where(Tournament.status == status)
    if state:
        query = query.where(Tournament.state == state)

    query = query.order_by(Tournament.created_at.desc()).offset(skip).limit(limit)
    result = await db.execute(query)

    return [tournament_to_response(t, count or 0) for t, count in result.all()]


@router.get("/{tournament_id}", response_model=TournamentResponse)
async def get_tournament(
    tournament_id: str,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Get tournament details"""
    tournament = await get_tournament_or_404(repo, tournament_id)
    return tournament_to_response(tournament, await repo.count_players(tournament_id))


@router.patch("/{tournament_id}", response_model=TournamentResponse)
async def update_tournament(
    tournament_id: str,
    tournament_data: TournamentUpdate,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Update tournament details"""
    tournament = await get_tournament_or_404(repo, tournament_id)

    update_data = tournament_data.model_dump(exclude_unset=True)
    total_rounds = update_data.get("total_rounds")
    if total_rounds is not None and total_rounds < tournament.current_round:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tournament has already played {tournament.current_round} rounds"
        )

    # A single date can be moved past the stored other end
    start_date = update_data.get("start_date", tournament.start_date)
    end_date = update_data.get("end_date", tournament.end_date)
    if start_date is not None and end_date is not None and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must be on or after start_date"
        )

    for field, value in update_data.items():
        setattr(tournament, field, value)

    await repo.db.commit()
    await repo.db.refresh(tournament)

    return tournament_to_response(tournament, await repo.count_players(tournament_id))


@router.post(
    "/{tournament_id}/players",
    response_model=List[TournamentPlayerResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_tournament_players(
    tournament_id: str,
    data: TournamentPlayersAdd,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Enter players into a tournament. Pairing numbers follow request order."""
    tournament = await get_tournament_or_404(repo, tournament_id)

    if tournament.status == TournamentStatus.COMPLETED:
        raise HTTPException(status_code=400, detail="Tournament is already completed")

    if len(set(data.player_ids)) != len(data.player_ids):
        raise HTTPException(status_code=400, detail="Duplicate player in request")

    players = await repo.get_players(data.player_ids)
    missing = [pid for pid in data.player_ids if pid not in players]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Player not found: {missing[0]}"
        )

    for player_id in data.player_ids:
        if await repo.get_entry(tournament_id, player_id):
            raise HTTPException(
                status_code=400,
                detail=f"{players[player_id].name} is already in this tournament"
            )

    entries = await repo.add_players(
        tournament_id, [players[pid] for pid in data.player_ids]
    )
    await repo.db.commit()

    return [
        TournamentPlayerResponse(
            player_id=tp.player_id,
            name=players[tp.player_id].name,
            pairing_number=tp.pairing_number,
            seed_rating=tp.seed_rating,
            state=players[tp.player_id].state,
            is_withdrawn=tp.is_withdrawn,
        )
        for tp in entries
    ]


@router.get("/{tournament_id}/players", response_model=List[TournamentPlayerResponse])
async def get_tournament_players(
    tournament_id: str,
    include_withdrawn: bool = False,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Get the tournament roster in pairing-number order"""
    await get_tournament_or_404(repo, tournament_id)
    entries = await repo.get_entries(tournament_id, include_withdrawn=include_withdrawn)

    return [
        TournamentPlayerResponse(
            player_id=player.id,
            name=player.name,
            pairing_number=tp.pairing_number,
            seed_rating=tp.seed_rating,
            state=player.state,
            is_withdrawn=tp.is_withdrawn,
        )
        for tp, player in entries
    ]


@router.post("/{tournament_id}/players/{player_id}/withdraw")
async def withdraw_player(
    tournament_id: str,
    player_id: str,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """Withdraw a player; they are left out of all later rounds"""
    await get_tournament_or_404(repo, tournament_id)

    tp = await repo.get_entry(tournament_id, player_id)
    if not tp:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Player is not registered for this tournament"
        )

    tp.is_withdrawn = True
    await repo.db.commit()

    return {"message": "Player withdrawn from tournament"}


@router.get("/{tournament_id}/standings", response_model=StandingsResponse)
async def get_standings(
    tournament_id: str,
    repo: TournamentRepository = Depends(get_tournament_repository)
):
    """
    Live standings, replayed from every recorded round.
    Before round 1 the field is listed by rating.
    """
    tournament = await get_tournament_or_404(repo, tournament_id)

    # Withdrawn players keep their place in the table
    roster = await repo.get_roster(tournament_id, include_withdrawn=True)
    rounds = await repo.get_rounds(tournament_id)

    if rounds:
        standings = calculate_standings(roster, rounds, bye_score=settings.bye_score)
    else:
        standings = initial_standings(roster)

    return StandingsResponse(
        tournament_id=tournament.id,
        tournament_name=tournament.name,
        current_round=tournament.current_round,
        total_rounds=tournament.total_rounds,
        standings=[StandingEntry.model_validate(s) for s in standings],
    )
