"""
Round history replay for the Swiss engine.

Every pairing or standings call rebuilds its per-player aggregates from the
full list of rounds; nothing is cached between calls.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from chessfed.constants import (
    BYE_SCORE,
    Color,
    FORFEIT_RESULTS,
    GameResult,
    RESULT_POINTS,
)

logger = logging.getLogger(__name__)


@dataclass
class SwissPlayer:
    """Roster entry the engine pairs (read-only)"""
    id: str
    name: str
    rating: int


@dataclass
class Match:
    """A single board. black_id is None for a bye."""
    white_id: str
    black_id: Optional[str] = None
    result: GameResult = GameResult.PENDING

    @property
    def is_bye(self) -> bool:
        return self.black_id is None or self.result == GameResult.BYE

    @classmethod
    def bye(cls, player_id: str) -> "Match":
        return cls(white_id=player_id, black_id=None, result=GameResult.BYE)


@dataclass
class Round:
    round_number: int
    matches: List[Match] = field(default_factory=list)


@dataclass
class PlayerAggregate:
    """Derived per-player state for one engine call"""
    player: SwissPlayer
    position: int  # Index in the roster, the deterministic tie-break
    score: float = 0.0
    opponents: List[str] = field(default_factory=list)
    color_history: List[Tuple[int, Color]] = field(default_factory=list)
    byes: int = 0
    games_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def id(self) -> str:
        return self.player.id

    @property
    def rating(self) -> int:
        return self.player.rating

    @property
    def colors(self) -> List[Color]:
        return [color for _, color in self.color_history]

    @property
    def color_balance(self) -> int:
        """Positive = more white games, negative = more black games"""
        return sum(1 if color == Color.WHITE else -1 for _, color in self.color_history)

    def has_played(self, opponent_id: str) -> bool:
        return opponent_id in self.opponents

    def last_round_as(self, color: Color) -> Optional[int]:
        """Round number of the most recent game played with `color`"""
        for round_number, played in reversed(self.color_history):
            if played == color:
                return round_number
        return None

    def _record_points(self, points: float):
        self.score += points
        self.games_played += 1
        if points == 1.0:
            self.wins += 1
        elif points == 0.5:
            self.draws += 1
        else:
            self.losses += 1


def build_aggregates(players: Sequence[SwissPlayer]) -> Dict[str, PlayerAggregate]:
    """Fresh zero-score aggregates keyed by player id, in roster order"""
    aggregates: Dict[str, PlayerAggregate] = {}
    for position, player in enumerate(players):
        if player.id in aggregates:
            logger.warning(f"Duplicate roster entry for player {player.id}, ignoring")
            continue
        aggregates[player.id] = PlayerAggregate(player=player, position=position)
    return aggregates


def replay_history(
    players: Sequence[SwissPlayer],
    rounds: Sequence[Round],
    bye_score: float = BYE_SCORE,
) -> Dict[str, PlayerAggregate]:
    """
    Replay every match in `rounds` onto fresh aggregates for `players`.

    Rounds are replayed in round-number order. Matches that reference players
    outside the roster only update the side that is known (a withdrawn
    opponent's games still count for the player who faced them).
    """
    aggregates = build_aggregates(players)

    for rnd in sorted(rounds, key=lambda r: r.round_number):
        for match in rnd.matches:
            _apply_match(aggregates, rnd.round_number, match, bye_score)

    return aggregates


def _apply_match(
    aggregates: Dict[str, PlayerAggregate],
    round_number: int,
    match: Match,
    bye_score: float,
):
    if match.is_bye:
        agg = aggregates.get(match.white_id)
        if agg is None:
            logger.warning(f"Round {round_number}: bye for unknown player {match.white_id}, skipping")
            return
        agg.byes += 1
        agg.score += bye_score
        return

    if match.white_id == match.black_id:
        logger.warning(f"Round {round_number}: player {match.white_id} paired with themselves, skipping")
        return

    white = aggregates.get(match.white_id)
    black = aggregates.get(match.black_id)
    for side, player_id in ((white, match.white_id), (black, match.black_id)):
        if side is None:
            logger.warning(f"Round {round_number}: match references unknown player {player_id}")

    # Opponents are recorded for every scheduled game, played or not
    if white:
        white.opponents.append(match.black_id)
    if black:
        black.opponents.append(match.white_id)

    # Forfeited games were never played over the board, so no colour
    if match.result not in FORFEIT_RESULTS:
        if white:
            white.color_history.append((round_number, Color.WHITE))
        if black:
            black.color_history.append((round_number, Color.BLACK))

    points = RESULT_POINTS.get(match.result)
    if points is None:
        return  # Undecided

    white_points, black_points = points
    if white:
        white._record_points(white_points)
    if black:
        black._record_points(black_points)


def has_played_before(player1_id: str, player2_id: str, rounds: Sequence[Round]) -> bool:
    """Check if two players have been paired in any of `rounds`"""
    return any(
        {match.white_id, match.black_id} == {player1_id, player2_id}
        for rnd in rounds
        for match in rnd.matches
        if not match.is_bye
    )
