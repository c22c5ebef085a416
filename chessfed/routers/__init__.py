from chessfed.routers.players import router as players_router
from chessfed.routers.tournaments import router as tournaments_router
from chessfed.routers.pairings import router as pairings_router
from chessfed.routers.utils import router as utils_router

__all__ = [
    "players_router", "tournaments_router",
    "pairings_router", "utils_router"
]
