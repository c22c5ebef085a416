"""
Script to add demo players to the federation register.
Players whose FIDE ID is already registered are skipped.
Usage: python scripts/seed_players.py
"""
import asyncio
import sys
from sqlalchemy import select

# Add parent directory to path
sys.path.insert(0, ".")

from chessfed.database import async_session_maker, init_db
from chessfed.models.player import Player

DEMO_PLAYERS = [
    {"name": "John Doe", "rating": 1500, "fide_id": "90000001", "state": "Lagos", "city": "Victoria Island"},
    {"name": "Jane Smith", "rating": 1600, "fide_id": "90000002", "state": "Federal Capital Territory", "city": "Wuse"},
    {"name": "Ahmed Hassan", "rating": 1400, "fide_id": "90000003", "state": "Kano", "city": "Kano"},
    {"name": "Chioma Obi", "rating": 1720, "fide_id": "90000004", "state": "Anambra", "city": "Awka"},
    {"name": "Emeka Nwosu", "rating": 1350, "fide_id": "90000005", "state": "Rivers", "city": "Port Harcourt"},
    {"name": "Grace Adeleke", "rating": 1810, "fide_id": "90000006", "state": "Oyo", "city": "Ibadan"},
]


async def seed_players():
    await init_db()

    async with async_session_maker() as db:
        result = await db.execute(
            select(Player.fide_id).where(
                Player.fide_id.in_([p["fide_id"] for p in DEMO_PLAYERS])
            )
        )
        existing = set(result.scalars().all())

        added = 0
        for data in DEMO_PLAYERS:
            if data["fide_id"] in existing:
                continue
            db.add(Player(**data))
            added += 1

        await db.commit()
        print(f"Added {added} players ({len(existing)} already registered).")


if __name__ == "__main__":
    asyncio.run(seed_players())
