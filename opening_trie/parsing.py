import io
from typing import Iterator, List, Optional, TextIO, Tuple

import chess.pgn
from tqdm import tqdm

from .game import Game, GameResult

# Seven-tag-roster placeholders that mean "unknown"
_UNKNOWN_NAMES = {"", "?"}


class PGNGame:
    """Moves, result and players extracted from one PGN game."""

    def __init__(
        self,
        moves: List[str],
        result: Optional[GameResult] = None,
        white_player: Optional[str] = None,
        black_player: Optional[str] = None,
    ) -> None:
        self.moves = moves
        self.result = result
        self.white_player = white_player
        self.black_player = black_player

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return (
            f"PGNGame(moves={self.moves!r}, result={self.result}, "
            f"white={self.white_player!r}, black={self.black_player!r})"
        )


def _player(name: Optional[str]) -> Optional[str]:
    if name is None or name.strip() in _UNKNOWN_NAMES:
        return None
    return name


def _from_chess_game(game: chess.pgn.Game) -> PGNGame:
    headers = game.headers
    board = game.board()
    moves_san: List[str] = []
    for move in game.mainline_moves():
        moves_san.append(board.san(move))
        board.push(move)

    return PGNGame(
        moves_san,
        GameResult.from_token(headers.get("Result", "*")),
        _player(headers.get("White")),
        _player(headers.get("Black")),
    )


def parse_game(pgn_text: str) -> PGNGame:
    game = chess.pgn.read_game(io.StringIO(pgn_text))
    if game is None:
        raise ValueError("Invalid PGN")
    return _from_chess_game(game)


def _read_chess_games(handle: TextIO) -> Iterator[chess.pgn.Game]:
    while True:
        game = chess.pgn.read_game(handle)
        if game is None:
            break
        yield game


def read_games(handle: TextIO) -> Iterator[PGNGame]:
    """Yield games from a PGN stream one at a time, mainline only.

    Raises ``ValueError`` on a game whose ``Result`` tag is not a PGN result.
    """
    for game in _read_chess_games(handle):
        yield _from_chess_game(game)


def load_games(handle: TextIO, *, quiet: bool = True, desc: str = "Reading PGN") -> Tuple[List[Game], int]:
    """Read every game from ``handle``.

    Returns the games and the number skipped because one of their moves is
    not well-formed notation or their result tag is unknown.
    """
    games: List[Game] = []
    skipped = 0
    bar = tqdm(disable=quiet, desc=desc, unit="game")
    try:
        for chess_game in _read_chess_games(handle):
            try:
                games.append(Game.from_pgn(_from_chess_game(chess_game)))
            except ValueError as e:
                # NotationError is a ValueError too
                skipped += 1
                if not quiet:
                    tqdm.write(f"Skipping game: {e}")
            bar.update(1)
    finally:
        bar.close()
    return games, skipped
