from chessfed.repositories.tournament_repository import TournamentRepository, get_tournament_repository

__all__ = ["TournamentRepository", "get_tournament_repository"]
