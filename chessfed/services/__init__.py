from chessfed.services.history import SwissPlayer, Match, Round, replay_history, has_played_before
from chessfed.services.swiss import SwissPairingEngine, generate_pairings, validate_pairings
from chessfed.services.standings import Standing, calculate_standings, initial_standings

__all__ = [
    "SwissPlayer",
    "Match",
    "Round",
    "replay_history",
    "has_played_before",
    "SwissPairingEngine",
    "generate_pairings",
    "validate_pairings",
    "Standing",
    "calculate_standings",
    "initial_standings",
]
