from chessfed.schemas.player import (
    PlayerCreate,
    PlayerResponse,
    PlayerUpdate,
    RankedPlayerResponse,
)
from chessfed.schemas.tournament import (
    TournamentCreate,
    TournamentResponse,
    TournamentUpdate,
    TournamentPlayersAdd,
    TournamentPlayerResponse,
    StandingEntry,
    StandingsResponse,
)
from chessfed.schemas.pairing import (
    PairingResponse,
    PairingResultUpdate,
    PlayerBrief,
)

__all__ = [
    "PlayerCreate",
    "PlayerResponse",
    "PlayerUpdate",
    "RankedPlayerResponse",
    "TournamentCreate",
    "TournamentResponse",
    "TournamentUpdate",
    "TournamentPlayersAdd",
    "TournamentPlayerResponse",
    "StandingEntry",
    "StandingsResponse",
    "PairingResponse",
    "PairingResultUpdate",
    "PlayerBrief",
]
