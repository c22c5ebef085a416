from chessfed.models.player import Player
from chessfed.models.tournament import Tournament, TournamentPlayer, TournamentStatus
from chessfed.models.pairing import Pairing

__all__ = [
    "Player",
    "Tournament",
    "TournamentPlayer",
    "TournamentStatus",
    "Pairing",
]
