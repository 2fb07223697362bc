"""Move types that can be built from, and rendered back to, algebraic notation.

Validation is grammar-only: a move such as ``Qh8`` is accepted whether or not
a queen could actually reach h8. No board state is tracked here.
"""

from __future__ import annotations

from typing import Optional, Type, TypeVar

FILES = "abcdefgh"
RANKS = "12345678"
PIECES = "NBRQK"
EFFECTS = "+#"
SHORT_CASTLE = "O-O"
LONG_CASTLE = "O-O-O"

M = TypeVar("M", bound="Move")


class NotationError(ValueError):
    """Raised when a string is not well-formed move notation.

    ``notation`` is the full input, ``symbol`` the offending character or
    substring and ``role`` what that part of the move was expected to be.
    """

    role = "move"

    def __init__(self, message: str, notation: str, symbol: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.notation = notation
        self.symbol = symbol


class EmptyInputError(NotationError):
    role = "move"

    def __init__(self, notation: str = "") -> None:
        super().__init__("Empty string", notation)


class TooShortError(NotationError):
    role = "move"

    def __init__(self, notation: str) -> None:
        super().__init__(f"Move is too short: {notation}", notation, notation)


class TooLongError(NotationError):
    role = "move"

    def __init__(self, notation: str, stripped: str) -> None:
        super().__init__(f"Move is too long: {stripped}", notation, stripped)


class _SymbolError(NotationError):
    label = ""

    def __init__(self, notation: str, symbol: str) -> None:
        super().__init__(f"Invalid {self.label}: {symbol}", notation, symbol)


class InvalidFileError(_SymbolError):
    role = label = "file"


class InvalidRankError(_SymbolError):
    role = label = "rank"


class InvalidRankOrFileError(_SymbolError):
    role = "rank or file"
    label = "rank/file"


class InvalidPieceError(_SymbolError):
    role = label = "piece"


class InvalidPieceOrFileError(_SymbolError):
    role = "piece or file"
    label = "piece/file"


class InvalidTakesSymbolError(_SymbolError):
    role = "takes symbol"
    label = "takes symbol"


class InvalidPromotionSymbolError(_SymbolError):
    role = "promotion symbol"
    label = "promotion symbol"


class InvalidDisambiguationError(_SymbolError):
    # Two kings of one colour can never reach the same square.
    role = "disambiguated piece"
    label = "disambiguation"


class Move:
    """Interface for moves that can be converted from algebraic notation.

    Subclasses implement :meth:`try_from_notation` and :meth:`to_notation`
    and must be hashable so they can key a level of a
    :class:`~opening_trie.move_tree.MoveTree`.
    """

    __slots__ = ()

    @classmethod
    def try_from_notation(cls: Type[M], notation: str) -> M:
        """Return a new move, or raise a :class:`NotationError` describing the fault."""
        raise NotImplementedError

    @classmethod
    def from_notation(cls: Type[M], notation: str) -> M:
        """Return a new move from notation that is already known to be valid.

        Meant for literals and data that was validated upstream. Invalid input
        here is a bug in the caller, so it surfaces as ``RuntimeError`` rather
        than a :class:`NotationError` that data-handling code might catch.
        """
        try:
            return cls.try_from_notation(notation)
        except NotationError as e:
            raise RuntimeError(f"Untrusted notation {notation!r}: {e.message}") from e

    def to_notation(self) -> str:
        raise NotImplementedError


def _check_file(notation: str, file: str) -> None:
    if file not in FILES:
        raise InvalidFileError(notation, file)


def _check_rank(notation: str, rank: str) -> None:
    if rank not in RANKS:
        raise InvalidRankError(notation, rank)


def _check_coordinate(notation: str, coordinate: str) -> None:
    _check_file(notation, coordinate[0])
    _check_rank(notation, coordinate[1])


def _check_rank_or_file(notation: str, symbol: str) -> None:
    if symbol not in RANKS and symbol not in FILES:
        raise InvalidRankOrFileError(notation, symbol)


def _check_piece(notation: str, piece: str) -> None:
    if piece not in PIECES:
        raise InvalidPieceError(notation, piece)


def _check_piece_or_file(notation: str, symbol: str) -> None:
    if symbol not in PIECES and symbol not in FILES:
        raise InvalidPieceOrFileError(notation, symbol)


def _check_takes(notation: str, symbol: str) -> None:
    if symbol != "x":
        raise InvalidTakesSymbolError(notation, symbol)


def _check_promotion(notation: str, symbol: str) -> None:
    if symbol != "=":
        raise InvalidPromotionSymbolError(notation, symbol)


def _check_disambiguated_piece(notation: str, piece: str) -> None:
    _check_piece(notation, piece)
    if piece == "K":
        raise InvalidDisambiguationError(notation, piece)


def validate_notation(notation: str) -> None:
    """Raise a :class:`NotationError` if ``notation`` is not well-formed SAN."""
    if not notation:
        raise EmptyInputError(notation)

    text = notation[:-1] if notation[-1] in EFFECTS else notation
    length = len(text)

    if length < 2:
        raise TooShortError(notation)

    if length == 2:
        # Pawn push, only the destination is given.
        _check_coordinate(notation, text)
    elif length == 3:
        if text != SHORT_CASTLE:
            _check_piece(notation, text[0])
            _check_coordinate(notation, text[1:])
    elif length == 4:
        if text[1] == "x":
            _check_piece_or_file(notation, text[0])
            _check_coordinate(notation, text[2:])
        elif text[2] == "=":
            _check_piece(notation, text[3])
            _check_promotion(notation, text[2])
            _check_coordinate(notation, text[:2])
        else:
            # Two pieces can reach the square, so a rank or file is given.
            _check_rank_or_file(notation, text[1])
            _check_disambiguated_piece(notation, text[0])
            _check_coordinate(notation, text[2:])
    elif length == 5:
        if text != LONG_CASTLE:
            _check_takes(notation, text[2])
            _check_rank_or_file(notation, text[1])
            _check_disambiguated_piece(notation, text[0])
            _check_coordinate(notation, text[3:])
    elif length == 6:
        # Only a pawn capture that promotes is this long.
        _check_piece(notation, text[5])
        _check_promotion(notation, text[4])
        _check_takes(notation, text[1])
        _check_file(notation, text[0])
        _check_coordinate(notation, text[2:4])
    else:
        raise TooLongError(notation, text)


class AlgebraicMove(Move):
    """A move stored as its standard algebraic notation string."""

    __slots__ = ("_notation",)

    def __init__(self, notation: str) -> None:
        validate_notation(notation)
        self._notation = notation

    @classmethod
    def try_from_notation(cls, notation: str) -> "AlgebraicMove":
        if not isinstance(notation, str):
            raise TypeError(f"notation must be str, not {type(notation).__name__}")
        return cls(notation)

    def to_notation(self) -> str:
        return self._notation

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AlgebraicMove):
            return NotImplemented
        return self._notation == other._notation

    def __hash__(self) -> int:
        return hash(self._notation)

    def __str__(self) -> str:
        return self._notation

    def __repr__(self) -> str:
        return f"AlgebraicMove({self._notation!r})"
