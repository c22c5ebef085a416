"""
Shared chess constants: game results, colours and score values
"""
import enum

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Default bye value (full point); overridable through Settings.bye_score
BYE_SCORE = WIN_SCORE

# Floor rating given to unrated players by the federation
DEFAULT_RATING = 800


class Color(str, enum.Enum):
    WHITE = "white"  # First mover
    BLACK = "black"  # Second mover


class GameResult(str, enum.Enum):
    PENDING = "pending"           # Not played yet
    WHITE_WINS = "white_wins"     # 1-0
    BLACK_WINS = "black_wins"     # 0-1
    DRAW = "draw"                 # 0.5-0.5
    WHITE_FORFEIT = "white_forfeit"  # White didn't show up (0-1F)
    BLACK_FORFEIT = "black_forfeit"  # Black didn't show up (1F-0)
    DOUBLE_FORFEIT = "double_forfeit"  # Neither showed up (0F-0F)
    BYE = "bye"                   # Odd number of players, one gets a bye


# Points awarded to (white, black) for each decided result
RESULT_POINTS = {
    GameResult.WHITE_WINS: (WIN_SCORE, LOSS_SCORE),
    GameResult.BLACK_WINS: (LOSS_SCORE, WIN_SCORE),
    GameResult.DRAW: (DRAW_SCORE, DRAW_SCORE),
    GameResult.WHITE_FORFEIT: (LOSS_SCORE, WIN_SCORE),
    GameResult.BLACK_FORFEIT: (WIN_SCORE, LOSS_SCORE),
    GameResult.DOUBLE_FORFEIT: (LOSS_SCORE, LOSS_SCORE),
}

FORFEIT_RESULTS = {
    GameResult.WHITE_FORFEIT,
    GameResult.BLACK_FORFEIT,
    GameResult.DOUBLE_FORFEIT,
}

# Scoresheet notation for display
RESULT_NOTATION = {
    GameResult.PENDING: "*",
    GameResult.WHITE_WINS: "1-0",
    GameResult.BLACK_WINS: "0-1",
    GameResult.DRAW: "1/2-1/2",
    GameResult.WHITE_FORFEIT: "0-1F",
    GameResult.BLACK_FORFEIT: "1F-0",
    GameResult.DOUBLE_FORFEIT: "0F-0F",
    GameResult.BYE: "BYE",
}
