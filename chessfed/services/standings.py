"""
Tournament standings, recomputed from the full round history on every call.
"""
from dataclasses import dataclass
from typing import List, Sequence

from chessfed.constants import BYE_SCORE
from chessfed.services.history import Round, SwissPlayer, replay_history
from chessfed.services.tiebreak import sort_by_rating, standing_order_key


@dataclass
class Standing:
    player_id: str
    player_name: str
    rating: int
    score: float = 0.0
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    rank: int = 0
    # Placeholders, not computed
    buchholz: float = 0.0
    sonneborn_berger: float = 0.0


def initial_standings(players: Sequence[SwissPlayer]) -> List[Standing]:
    """Standings before round 1: everyone on zero, ordered by rating"""
    return [
        Standing(
            player_id=player.id,
            player_name=player.name,
            rating=player.rating,
            rank=idx + 1,
        )
        for idx, player in enumerate(sort_by_rating(players))
    ]


def calculate_standings(
    players: Sequence[SwissPlayer],
    all_rounds: Sequence[Round],
    bye_score: float = BYE_SCORE,
) -> List[Standing]:
    """
    Rank players by score, then rating.

    Pending games are skipped. A bye adds `bye_score` but does not count as a
    game played.
    """
    aggregates = replay_history(players, all_rounds, bye_score=bye_score)

    ordered = sorted(
        aggregates.values(),
        key=lambda agg: standing_order_key(agg.score, agg.rating, agg.position),
    )

    return [
        Standing(
            player_id=agg.id,
            player_name=agg.player.name,
            rating=agg.rating,
            score=agg.score,
            games_played=agg.games_played,
            wins=agg.wins,
            draws=agg.draws,
            losses=agg.losses,
            rank=idx + 1,
        )
        for idx, agg in enumerate(ordered)
    ]
