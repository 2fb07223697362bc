from typing import Dict, Iterable, Optional, Tuple

from .game import GameResult
from .move_tree import MoveTreeView


def _counts(games: Iterable) -> Tuple[int, int, int]:
    white = black = draws = 0
    for game in games:
        result: Optional[GameResult] = game.result
        if result is GameResult.WHITE_WON:
            white += 1
        elif result is GameResult.BLACK_WON:
            black += 1
        elif result is GameResult.DRAW:
            draws += 1
    return white, black, draws


def results(games: Iterable) -> Tuple[float, float, float]:
    """Return the white win, black win and draw rates in ``games``.

    Games without a result are left out. With no finished games every rate
    is 0.0.
    """
    white, black, draws = _counts(games)
    total = white + black + draws
    if total == 0:
        return 0.0, 0.0, 0.0
    return white / total, black / total, draws / total


def summarize(games: Iterable) -> Dict[str, float]:
    white, black, draws = _counts(games)
    total = white + black + draws
    if total == 0:
        return {
            "whiteWins": 0,
            "blackWins": 0,
            "draws": 0,
            "total": 0,
            "whiteWinRate": 0.0,
            "blackWinRate": 0.0,
            "drawRate": 0.0,
        }
    return {
        "whiteWins": white,
        "blackWins": black,
        "draws": draws,
        "total": total,
        "whiteWinRate": white / total,
        "blackWinRate": black / total,
        "drawRate": draws / total,
    }


def branch_stats(view: MoveTreeView) -> Dict[str, Dict[str, float]]:
    """Summaries for each move played next from ``view``, keyed by notation."""
    return {move.to_notation(): summarize(view.with_next(move)) for move in view.branches()}
