"""
Database engine and session factory for the federation register.

Tournament data lives in a single SQLite file in production; the test suite
runs against an in-memory database shared through one connection.
"""
import logging
from typing import Any, Dict

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from chessfed.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Applied to every file-backed SQLite connection
SQLITE_PRAGMAS = {
    "journal_mode": "WAL",      # Standings reads while results are being entered
    "synchronous": "NORMAL",
    "busy_timeout": "30000",    # Two arbiters saving results at once wait, not fail
    "foreign_keys": "ON",
}


def is_memory_database(url: str) -> bool:
    return ":memory:" in url or "mode=memory" in url


def engine_options(url: str, echo: bool = False) -> Dict[str, Any]:
    """Keyword arguments for create_async_engine"""
    if is_memory_database(url):
        # One shared connection, otherwise every session sees an empty database
        return {
            "echo": echo,
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"echo": echo, "pool_pre_ping": True}


def apply_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    for pragma, value in SQLITE_PRAGMAS.items():
        cursor.execute(f"PRAGMA {pragma}={value};")
    cursor.close()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    new_engine = create_async_engine(url, **engine_options(url, echo))
    if url.startswith("sqlite") and not is_memory_database(url):
        event.listen(new_engine.sync_engine, "connect", apply_sqlite_pragmas)
    return new_engine


engine = build_engine(settings.database_url, echo=settings.debug)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Create the players, tournaments, roster and pairings tables"""
    import chessfed.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.database_url.startswith("sqlite"):
        async with engine.connect() as conn:
            result = await conn.execute(text("PRAGMA journal_mode;"))
            logger.info(f"Database ready at {settings.database_url} (journal mode {result.scalar()})")
