"""
Pytest configuration and fixtures for ChessFed tests.
"""
import os
import uuid
from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment BEFORE importing app modules
os.environ["TESTING"] = "1"

# Clear any cached settings to ensure test config is used
from chessfed.config import get_settings
get_settings.cache_clear()

from chessfed.database import Base, get_db, engine
from chessfed.main import app
from chessfed.models.player import Player
from chessfed.models.tournament import Tournament, TournamentPlayer, TournamentStatus
from chessfed.services.history import SwissPlayer


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test with transaction rollback."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with engine.connect() as conn:
        # Begin a transaction that we'll rollback at the end
        trans = await conn.begin()

        session = AsyncSession(bind=conn, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database session override."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def four_players() -> List[SwissPlayer]:
    """Engine roster P1..P4, rated 1800 down to 1500."""
    return [
        SwissPlayer(id="P1", name="Player One", rating=1800),
        SwissPlayer(id="P2", name="Player Two", rating=1700),
        SwissPlayer(id="P3", name="Player Three", rating=1600),
        SwissPlayer(id="P4", name="Player Four", rating=1500),
    ]


@pytest_asyncio.fixture
async def players(db_session: AsyncSession) -> List[Player]:
    """Four registered players, highest rated first."""
    records = [
        Player(id=str(uuid.uuid4()), name="Adebayo Okafor", rating=1800, state="Lagos"),
        Player(id=str(uuid.uuid4()), name="Chinedu Eze", rating=1700, state="Enugu"),
        Player(id=str(uuid.uuid4()), name="Fatima Bello", rating=1600, state="Kano"),
        Player(id=str(uuid.uuid4()), name="Ngozi Adeyemi", rating=1500, state="Oyo"),
    ]
    db_session.add_all(records)
    await db_session.commit()
    for player in records:
        await db_session.refresh(player)
    return records


@pytest_asyncio.fixture
async def tournament(db_session: AsyncSession) -> Tournament:
    """An upcoming 3-round Swiss tournament."""
    tournament = Tournament(
        id=str(uuid.uuid4()),
        name="Lagos Open",
        venue="Teslim Balogun Stadium",
        city="Surulere",
        state="Lagos",
        total_rounds=3,
        current_round=0,
        time_control="90min + 30sec",
        status=TournamentStatus.UPCOMING,
    )
    db_session.add(tournament)
    await db_session.commit()
    await db_session.refresh(tournament)
    return tournament


@pytest_asyncio.fixture
async def tournament_with_players(
    db_session: AsyncSession,
    tournament: Tournament,
    players: List[Player],
) -> Tournament:
    """Tournament with all four players entered in rating order."""
    entries = [
        TournamentPlayer(
            tournament_id=tournament.id,
            player_id=player.id,
            pairing_number=idx + 1,
            seed_rating=player.rating,
        )
        for idx, player in enumerate(players)
    ]
    db_session.add_all(entries)
    await db_session.commit()
    await db_session.refresh(tournament)
    return tournament
