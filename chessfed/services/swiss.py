"""
Swiss System pairing engine

Players with equal scores are paired together, highest score group first.
Within a group the field is sorted by rating and paired first-fit, skipping
opponents already played. Anyone left over is paired across groups, where a
repeat pairing is tolerated so that a round can always be produced.

The engine is stateless: scores, colours and opponents are replayed from the
round history on every call.
"""
import logging
from typing import Dict, List, Optional, Sequence, Set

from chessfed.constants import BYE_SCORE, Color
from chessfed.services.history import (
    Match,
    PlayerAggregate,
    Round,
    SwissPlayer,
    replay_history,
)
from chessfed.services.tiebreak import rating_order_key, standing_order_key

logger = logging.getLogger(__name__)


class SwissPairingEngine:
    """
    Greedy Swiss pairing.

    This is first-fit within score groups, not a maximum matching; a group can
    leave a player for the cross-group pool even when a perfect in-group
    pairing exists.
    """

    def __init__(
        self,
        players: Sequence[SwissPlayer],
        prior_rounds: Optional[Sequence[Round]] = None,
        bye_score: float = BYE_SCORE,
    ):
        self.players = list(players)
        self.prior_rounds = list(prior_rounds or [])
        self.aggregates = replay_history(self.players, self.prior_rounds, bye_score=bye_score)
        self.pairings: List[Match] = []

    def generate_pairings(self, round_number: int) -> List[Match]:
        """Pair the next round. `round_number` is only used for logging."""
        self.pairings = []

        if len(self.aggregates) < 2:
            logger.info(f"Round {round_number}: fewer than 2 players, nothing to pair")
            return self.pairings

        leftovers: List[PlayerAggregate] = []
        for _, group in self._score_groups():
            leftovers.extend(self._pair_score_group(group))

        self._pair_pool(leftovers, round_number)

        logger.info(
            f"Round {round_number}: {len(self.pairings)} pairings for "
            f"{len(self.aggregates)} players ({len(leftovers)} in the cross-group pool)"
        )
        return self.pairings

    def _score_groups(self):
        """Yield (score, players) from highest score to lowest"""
        groups: Dict[float, List[PlayerAggregate]] = {}
        for agg in self.aggregates.values():
            groups.setdefault(agg.score, []).append(agg)

        for score in sorted(groups, reverse=True):
            yield score, groups[score]

    def _pair_score_group(self, group: List[PlayerAggregate]) -> List[PlayerAggregate]:
        """Pair within one score group; return the players left unpaired"""
        available = sorted(group, key=lambda p: rating_order_key(p.rating, p.position))
        unpaired: List[PlayerAggregate] = []

        while available:
            player1 = available.pop(0)

            for i, player2 in enumerate(available):
                # Skip if already played each other
                if player1.has_played(player2.id):
                    continue

                self.pairings.append(self._assign_colors(player1, player2))
                available.pop(i)
                break
            else:
                unpaired.append(player1)

        return unpaired

    def _pair_pool(self, pool: List[PlayerAggregate], round_number: int):
        """
        Pair leftovers head to head in (score, rating) order.
        Repeat pairings are allowed here; the last odd player gets the bye.
        """
        pool = sorted(pool, key=lambda p: standing_order_key(p.score, p.rating, p.position))

        for i in range(0, len(pool) - 1, 2):
            player1, player2 = pool[i], pool[i + 1]
            if player1.has_played(player2.id):
                logger.warning(
                    f"Round {round_number}: no new opponent for {player1.player.name}, "
                    f"repeating pairing with {player2.player.name}"
                )
            self.pairings.append(self._assign_colors(player1, player2))

        if len(pool) % 2 == 1:
            bye_player = pool[-1]
            if bye_player.byes:
                logger.warning(
                    f"Round {round_number}: {bye_player.player.name} receiving a second bye"
                )
            self.pairings.append(Match.bye(bye_player.id))

    def _assign_colors(self, p1: PlayerAggregate, p2: PlayerAggregate) -> Match:
        """
        The player with more blacks gets white. On equal balance, whoever had
        black most recently gets white; failing that, p1 does.
        """
        if p1.color_balance != p2.color_balance:
            if p1.color_balance < p2.color_balance:
                return Match(white_id=p1.id, black_id=p2.id)
            return Match(white_id=p2.id, black_id=p1.id)

        last_black_1 = p1.last_round_as(Color.BLACK) or 0
        last_black_2 = p2.last_round_as(Color.BLACK) or 0
        if last_black_2 > last_black_1:
            return Match(white_id=p2.id, black_id=p1.id)
        return Match(white_id=p1.id, black_id=p2.id)


def generate_pairings(
    players: Sequence[SwissPlayer],
    prior_rounds: Sequence[Round],
    round_number: int,
    bye_score: float = BYE_SCORE,
) -> List[Match]:
    """Pairings for the next round of a Swiss tournament"""
    engine = SwissPairingEngine(players, prior_rounds, bye_score=bye_score)
    return engine.generate_pairings(round_number)


def validate_pairings(matches: Sequence[Match]) -> List[str]:
    """
    Check a round for structural problems.
    Returns a list of error messages; empty means the round is valid.
    """
    errors: List[str] = []
    seen: Set[str] = set()

    for board, match in enumerate(matches, start=1):
        if not match.is_bye and match.white_id == match.black_id:
            errors.append(f"Board {board}: player {match.white_id} paired with themselves")
            continue

        for player_id in (match.white_id, match.black_id):
            if player_id is None:
                continue
            if player_id in seen:
                errors.append(f"Board {board}: player {player_id} appears in multiple pairings")
            seen.add(player_id)

    return errors
