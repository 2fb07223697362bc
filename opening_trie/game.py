from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Iterable, Iterator, Optional, Protocol, Tuple, Type, TypeVar

from .moves import AlgebraicMove, Move

if TYPE_CHECKING:  # pragma: no cover
    from .parsing import PGNGame

M = TypeVar("M", bound=Move)


class ListMoves(Protocol):
    """Anything that can list its moves in order, such as a :class:`Game`."""

    def list_moves(self) -> Iterator[Move]: ...


class GameResult(Enum):
    """Outcome of a finished game."""

    WHITE_WON = "1-0"
    BLACK_WON = "0-1"
    DRAW = "1/2-1/2"

    @classmethod
    def from_token(cls, token: str) -> Optional["GameResult"]:
        """Map a PGN result token to a result, or ``None`` for an unfinished game."""
        value = token.strip()
        if value == "1-0":
            return cls.WHITE_WON
        if value == "0-1":
            return cls.BLACK_WON
        if value in ("1/2-1/2", "½-½"):
            return cls.DRAW
        if value in ("*", ""):
            return None
        raise ValueError(f"Unknown result token: {token}")


class Game(Generic[M]):
    """An ordered, immutable list of moves with optional result and players."""

    __slots__ = ("_moves", "_result", "_white_player", "_black_player")

    def __init__(
        self,
        moves: Iterable[M] = (),
        result: Optional[GameResult] = None,
        white_player: Optional[str] = None,
        black_player: Optional[str] = None,
    ) -> None:
        self._moves: Tuple[M, ...] = tuple(moves)
        self._result = result
        self._white_player = white_player
        self._black_player = black_player

    @classmethod
    def from_notation(
        cls,
        notations: Iterable[str],
        result: Optional[GameResult] = None,
        white_player: Optional[str] = None,
        black_player: Optional[str] = None,
        *,
        move_type: Type[Move] = AlgebraicMove,
    ) -> "Game[Move]":
        """Build a game from notation strings; raises ``NotationError`` on the first bad move."""
        moves = [move_type.try_from_notation(n) for n in notations]
        return cls(moves, result, white_player, black_player)

    @classmethod
    def from_pgn(cls, pgn_game: "PGNGame", *, move_type: Type[Move] = AlgebraicMove) -> "Game[Move]":
        return cls.from_notation(
            pgn_game.moves,
            pgn_game.result,
            pgn_game.white_player,
            pgn_game.black_player,
            move_type=move_type,
        )

    @property
    def moves(self) -> Tuple[M, ...]:
        return self._moves

    @property
    def result(self) -> Optional[GameResult]:
        return self._result

    @property
    def white_player(self) -> Optional[str]:
        return self._white_player

    @property
    def black_player(self) -> Optional[str]:
        return self._black_player

    def list_moves(self) -> Iterator[M]:
        """Return a fresh iterator over the moves; each call starts from the first move."""
        return iter(self._moves)

    def _key(self) -> Tuple:
        return (self._moves, self._result, self._white_player, self._black_player)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Game):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __len__(self) -> int:
        return len(self._moves)

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        moves = " ".join(m.to_notation() for m in self._moves)
        return (
            f"Game(moves={moves!r}, result={self._result}, "
            f"white={self._white_player!r}, black={self._black_player!r})"
        )
