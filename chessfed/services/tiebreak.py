"""
Ordering keys shared by seeding, standings and the pairing engine.

Rating is the only tie-break. Roster position is the final key so that two
calls with the same input always produce the same order.
"""
from typing import List, Sequence, Tuple

from chessfed.services.history import SwissPlayer


def rating_order_key(rating: float, position: int) -> Tuple[float, int]:
    """Rating descending, then roster position"""
    return (-rating, position)


def standing_order_key(score: float, rating: float, position: int) -> Tuple[float, float, int]:
    """Score descending, then rating descending, then roster position"""
    return (-score, -rating, position)


def sort_by_rating(players: Sequence[SwissPlayer]) -> List[SwissPlayer]:
    indexed = sorted(enumerate(players), key=lambda item: rating_order_key(item[1].rating, item[0]))
    return [player for _, player in indexed]
