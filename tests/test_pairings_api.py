"""
Tests for round generation and result entry.

Tests cover:
- Generating rounds and persisting them
- Recording results and the standings that follow
- Round gating: unfinished games, too few players, completion
- Byes and withdrawn players
- Overlapping requests for the same round
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import update

from chessfed.models.pairing import Pairing
from chessfed.models.tournament import Tournament
from chessfed.repositories.tournament_repository import TournamentRepository


async def record(client: AsyncClient, tournament_id: str, pairing: dict, result: str):
    return await client.patch(
        f"/api/tournaments/{tournament_id}/pairings/{pairing['id']}/result",
        json={"result": result},
    )


class TestGeneratePairings:

    @pytest.mark.asyncio
    async def test_first_round(self, client: AsyncClient, tournament_with_players: Tournament, players: list):
        tid = tournament_with_players.id
        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")

        assert response.status_code == 200
        data = response.json()
        assert [p["board_number"] for p in data] == [1, 2]
        assert data[0]["white_player"]["id"] == players[0].id
        assert data[0]["black_player"]["id"] == players[1].id
        assert data[1]["white_player"]["id"] == players[2].id
        assert data[1]["black_player"]["id"] == players[3].id
        assert all(p["result"] == "pending" and p["notation"] == "*" for p in data)

        tournament = (await client.get(f"/api/tournaments/{tid}")).json()
        assert tournament["status"] == "ongoing"
        assert tournament["current_round"] == 1

    @pytest.mark.asyncio
    async def test_two_round_flow(self, client: AsyncClient, tournament_with_players: Tournament, players: list):
        """Top board wins, second board draws; leaders then meet."""
        tid = tournament_with_players.id
        p1, p2, p3, p4 = (p.id for p in players)

        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()
        response = await record(client, tid, round1[0], "white_wins")
        assert response.status_code == 200
        assert response.json()["notation"] == "1-0"
        assert response.json()["played_at"] is not None
        await record(client, tid, round1[1], "draw")

        standings = (await client.get(f"/api/tournaments/{tid}/standings")).json()
        assert [(s["player_id"], s["score"]) for s in standings["standings"]] == [
            (p1, 1.0), (p3, 0.5), (p4, 0.5), (p2, 0.0),
        ]

        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")
        assert response.status_code == 200
        round2 = response.json()
        assert [(p["white_player"]["id"], p["black_player"]["id"]) for p in round2] == [
            (p1, p3), (p4, p2),
        ]
        assert all(p["round_number"] == 2 for p in round2)

        current = (await client.get(f"/api/tournaments/{tid}/current-round")).json()
        assert [p["id"] for p in current] == [p["id"] for p in round2]

        all_pairings = (await client.get(f"/api/tournaments/{tid}/pairings")).json()
        assert len(all_pairings) == 4

        first_round = (await client.get(
            f"/api/tournaments/{tid}/pairings", params={"round_number": 1}
        )).json()
        assert [p["id"] for p in first_round] == [p["id"] for p in round1]

    @pytest.mark.asyncio
    async def test_unfinished_round_blocks_next(self, client: AsyncClient, tournament_with_players: Tournament):
        tid = tournament_with_players.id
        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()
        await record(client, tid, round1[0], "black_wins")

        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")

        assert response.status_code == 400
        assert "unfinished" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_needs_two_players(self, client: AsyncClient, tournament: Tournament, players: list):
        await client.post(
            f"/api/tournaments/{tournament.id}/players",
            json={"player_ids": [players[0].id]},
        )

        response = await client.post(f"/api/tournaments/{tournament.id}/generate-pairings")

        assert response.status_code == 400
        assert response.json()["detail"] == "Need at least 2 players"

    @pytest.mark.asyncio
    async def test_unknown_tournament(self, client: AsyncClient):
        response = await client.post("/api/tournaments/missing/generate-pairings")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_completion_after_last_round(self, client: AsyncClient, tournament_with_players: Tournament):
        tid = tournament_with_players.id
        await client.patch(f"/api/tournaments/{tid}", json={"total_rounds": 1})

        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()
        for pairing in round1:
            await record(client, tid, pairing, "draw")

        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")
        assert response.status_code == 400
        assert response.json()["detail"] == "All rounds completed"

        tournament = (await client.get(f"/api/tournaments/{tid}")).json()
        assert tournament["status"] == "completed"

        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")
        assert response.status_code == 400


class TestByesAndWithdrawals:

    @pytest.mark.asyncio
    async def test_withdrawn_player_left_out(
        self, client: AsyncClient, tournament_with_players: Tournament, players: list
    ):
        tid = tournament_with_players.id
        await client.post(f"/api/tournaments/{tid}/players/{players[1].id}/withdraw")

        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")

        assert response.status_code == 200
        data = response.json()
        bye = next(p for p in data if p["is_bye"])
        assert bye["is_bye"] is True
        assert bye["board_number"] == 0
        assert bye["black_player"] is None
        assert bye["white_player"]["id"] == players[3].id
        assert bye["result"] == "bye"
        assert bye["notation"] == "BYE"

        game = next(p for p in data if not p["is_bye"])
        assert game["board_number"] == 1
        assert (game["white_player"]["id"], game["black_player"]["id"]) == (players[0].id, players[2].id)

        response = await record(client, tid, bye, "white_wins")
        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot record a result for a bye"

        standings = (await client.get(f"/api/tournaments/{tid}/standings")).json()["standings"]
        bye_row = next(s for s in standings if s["player_id"] == players[3].id)
        assert bye_row["score"] == 1.0
        assert bye_row["games_played"] == 0
        # Withdrawn players stay in the table
        assert len(standings) == 4


class TestResultEntry:

    @pytest.mark.asyncio
    async def test_result_already_recorded(self, client: AsyncClient, tournament_with_players: Tournament):
        tid = tournament_with_players.id
        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()
        await record(client, tid, round1[0], "draw")

        response = await record(client, tid, round1[0], "white_wins")

        assert response.status_code == 400
        assert response.json()["detail"] == "Result already recorded"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("result", ["pending", "bye", "resigned"])
    async def test_rejected_result_values(
        self, client: AsyncClient, tournament_with_players: Tournament, result: str
    ):
        tid = tournament_with_players.id
        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()

        response = await record(client, tid, round1[0], result)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_forfeit_result(self, client: AsyncClient, tournament_with_players: Tournament, players: list):
        tid = tournament_with_players.id
        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()

        response = await record(client, tid, round1[0], "white_forfeit")

        assert response.status_code == 200
        assert response.json()["notation"] == "0-1F"

        standings = (await client.get(f"/api/tournaments/{tid}/standings")).json()["standings"]
        assert standings[0]["player_id"] == players[1].id
        assert standings[0]["score"] == 1.0

    @pytest.mark.asyncio
    async def test_get_pairing(self, client: AsyncClient, tournament_with_players: Tournament):
        tid = tournament_with_players.id
        round1 = (await client.post(f"/api/tournaments/{tid}/generate-pairings")).json()

        response = await client.get(f"/api/tournaments/{tid}/pairings/{round1[1]['id']}")
        assert response.status_code == 200
        assert response.json()["board_number"] == 2

        response = await client.get(f"/api/tournaments/{tid}/pairings/missing")
        assert response.status_code == 404


class TestConcurrentPairing:
    """Two requests pairing the same round store it only once."""

    @pytest.mark.asyncio
    async def test_claim_round_only_once(self, db_session, tournament_with_players: Tournament):
        repo = TournamentRepository(db_session)

        assert await repo.claim_round(tournament_with_players.id, 0) is True
        assert await repo.claim_round(tournament_with_players.id, 0) is False
        assert await repo.claim_round(tournament_with_players.id, 1) is True

    @pytest.mark.asyncio
    async def test_losing_request_stores_nothing(
        self, client: AsyncClient, tournament_with_players: Tournament, monkeypatch
    ):
        """Another request advances the round while this one is still pairing."""
        tid = tournament_with_players.id
        load_rounds = TournamentRepository.get_rounds

        async def get_rounds_after_other_request(self, tournament_id):
            await self.db.execute(
                update(Tournament).where(Tournament.id == tournament_id).values(current_round=1)
            )
            return await load_rounds(self, tournament_id)

        monkeypatch.setattr(TournamentRepository, "get_rounds", get_rounds_after_other_request)

        response = await client.post(f"/api/tournaments/{tid}/generate-pairings")

        assert response.status_code == 409
        monkeypatch.undo()
        pairings = (await client.get(f"/api/tournaments/{tid}/pairings")).json()
        assert pairings == []

    def test_board_numbers_unique_per_round(self):
        index = next(
            idx for idx in Pairing.__table__.indexes
            if idx.name == "ix_pairings_tournament_round_board"
        )

        assert index.unique
        assert [col.name for col in index.columns] == ["tournament_id", "round_number", "board_number"]
