"""
Tests for reference data endpoints.
"""
import pytest
from httpx import AsyncClient

from chessfed.models.tournament import Tournament
from chessfed.schemas.tournament import validate_time_control


class TestReferenceData:

    @pytest.mark.asyncio
    async def test_states(self, client: AsyncClient):
        response = await client.get("/api/utils/states")

        assert response.status_code == 200
        states = response.json()
        assert len(states) == 37
        assert "Lagos" in states
        assert "Federal Capital Territory" in states

    @pytest.mark.asyncio
    async def test_zones_cover_every_state(self, client: AsyncClient):
        states = (await client.get("/api/utils/states")).json()
        zones = (await client.get("/api/utils/zones")).json()

        assert len(zones) == 6
        assert sorted(s for members in zones.values() for s in members) == sorted(states)

    @pytest.mark.asyncio
    async def test_time_controls_are_valid(self, client: AsyncClient):
        response = await client.get("/api/utils/time-controls")

        assert response.status_code == 200
        for options in response.json().values():
            for option in options:
                assert validate_time_control(option["value"]) == option["value"]

    @pytest.mark.asyncio
    async def test_public_stats(self, client: AsyncClient, tournament_with_players: Tournament):
        response = await client.get("/api/utils/public-stats")

        assert response.status_code == 200
        data = response.json()
        assert data["players"] == 4
        assert data["tournaments"] == 1
        assert data["upcoming_tournaments"] == 1
        assert data["states"] == 4

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}
