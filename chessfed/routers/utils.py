from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import List, Dict

from chessfed.database import get_db
from chessfed.models.player import Player
from chessfed.models.tournament import Tournament, TournamentStatus
from chessfed.utils.nigeria import NIGERIAN_STATES, NIGERIA_ZONES

router = APIRouter(prefix="/api/utils", tags=["Utilities"])


@router.get("/states", response_model=List[str])
async def get_states():
    """Get list of all Nigerian states"""
    return NIGERIAN_STATES


@router.get("/zones", response_model=Dict[str, List[str]])
async def get_zones():
    """Get geopolitical zones with their states"""
    return NIGERIA_ZONES


@router.get("/time-controls")
async def get_time_controls():
    """Common federation time controls, in the "XXmin + YYsec" format"""
    return {
        "blitz": [
            {"value": "3min + 2sec", "label": "3|2 (Blitz)"},
            {"value": "5min + 3sec", "label": "5|3 (Blitz)"},
        ],
        "rapid": [
            {"value": "10min + 5sec", "label": "10|5 (Rapid)"},
            {"value": "15min + 10sec", "label": "15|10 (Rapid)"},
            {"value": "25min + 10sec", "label": "25|10 (Rapid)"},
        ],
        "classical": [
            {"value": "60min + 30sec", "label": "60|30 (Classical)"},
            {"value": "90min + 30sec", "label": "90|30 (Classical)"},
        ]
    }


@router.get("/public-stats")
async def get_public_stats(db: AsyncSession = Depends(get_db)):
    """Federation-wide counts for the homepage"""
    result = await db.execute(
        select(func.count(Player.id)).where(Player.is_active == True)
    )
    player_count = result.scalar() or 0

    counts = {}
    for tournament_status in TournamentStatus:
        result = await db.execute(
            select(func.count(Tournament.id)).where(Tournament.status == tournament_status)
        )
        counts[tournament_status.value] = result.scalar() or 0

    result = await db.execute(
        select(func.count(func.distinct(Player.state))).where(
            Player.state.isnot(None),
            Player.is_active == True
        )
    )
    state_count = result.scalar() or 0

    return {
        "players": player_count,
        "tournaments": sum(counts.values()),
        "upcoming_tournaments": counts[TournamentStatus.UPCOMING.value],
        "ongoing_tournaments": counts[TournamentStatus.ONGOING.value],
        "completed_tournaments": counts[TournamentStatus.COMPLETED.value],
        "states": state_count,
    }
