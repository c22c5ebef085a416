from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from typing import List, Optional

from chessfed.config import get_settings
from chessfed.database import get_db
from chessfed.models.player import Player
from chessfed.schemas.player import (
    PlayerCreate,
    PlayerResponse,
    PlayerUpdate,
    RankedPlayerResponse,
)
from chessfed.utils.nigeria import normalize_state

settings = get_settings()

router = APIRouter(prefix="/api/players", tags=["Players"])

DUPLICATE_FIDE_ID = "A player with this FIDE ID already exists"


async def fide_id_taken(db: AsyncSession, fide_id: Optional[str], player_id: Optional[str] = None) -> bool:
    """True if another player already holds `fide_id`"""
    if not fide_id:
        return False
    query = select(Player.id).where(Player.fide_id == fide_id)
    if player_id:
        query = query.where(Player.id != player_id)
    result = await db.execute(query)
    return result.first() is not None


@router.post("/", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
async def create_player(
    player_data: PlayerCreate,
    db: AsyncSession = Depends(get_db)
):
    """Add a player to the federation register"""
    if await fide_id_taken(db, player_data.fide_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_FIDE_ID)

    player = Player(
        name=player_data.name,
        rating=player_data.rating if player_data.rating is not None else settings.default_rating,
        fide_id=player_data.fide_id,
        state=player_data.state,
        city=player_data.city,
    )
    db.add(player)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=DUPLICATE_FIDE_ID
        )
    await db.refresh(player)
    return player


@router.get("/", response_model=List[PlayerResponse])
async def list_players(
    search: Optional[str] = None,  # Search in name
    state: Optional[str] = None,
    active_only: bool = True,
    skip: int = 0,
    limit: int = 50,
    db: AsyncSession = Depends(get_db)
):
    """List registered players"""
    query = select(Player)

    if search:
        query = query.where(Player.name.ilike(f"%{search}%"))
    if state:
        try:
            query = query.where(Player.state == normalize_state(state))
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if active_only:
        query = query.where(Player.is_active == True)

    query = query.order_by(Player.name).offset(skip).limit(limit)
    result = await db.execute(query)
    return result.scalars().all()


@router.get("/rankings", response_model=List[RankedPlayerResponse])
async def get_rankings(
    state: Optional[str] = None,
    limit: int = 100,
    db: AsyncSession = Depends(get_db)
):
    """National rating list (highest rated first)"""
    query = select(Player).where(Player.is_active == True)
    if state:
        try:
            query = query.where(Player.state == normalize_state(state))
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    query = query.order_by(Player.rating.desc(), Player.name).limit(limit)
    result = await db.execute(query)

    return [
        RankedPlayerResponse(
            id=player.id,
            name=player.name,
            rating=player.rating,
            fide_id=player.fide_id,
            state=player.state,
            city=player.city,
            is_active=player.is_active,
            created_at=player.created_at,
            rank=idx + 1,
        )
        for idx, player in enumerate(result.scalars().all())
    ]


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Get player by ID"""
    result = await db.execute(select(Player).where(Player.id == player_id))
    player = result.scalar_one_or_none()

    if not player:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Player not found"
        )
    return player


@router.patch("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: str,
    player_data: PlayerUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a player record"""
    result = await db.execute(select(Player).where(Player.id == player_id))
    player = result.scalar_one_or_none()

    if not player:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Player not found"
        )

    update_data = player_data.model_dump(exclude_unset=True)
    if await fide_id_taken(db, update_data.get("fide_id"), player_id=player.id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_FIDE_ID)

    for field, value in update_data.items():
        setattr(player, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=DUPLICATE_FIDE_ID
        )
    await db.refresh(player)
    return player
