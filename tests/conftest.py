from pathlib import Path
from typing import List

import pytest

from opening_trie import AlgebraicMove, Game


def make_game(*notations: str, **kwargs) -> Game:
    return Game([AlgebraicMove.from_notation(n) for n in notations], **kwargs)


def unplayed_game() -> Game:
    return Game([])


def italian_game() -> Game:
    return make_game("e4", "e5", "Nf3", "Nc6", "Bc4")


def ruy_lopez() -> Game:
    return make_game("e4", "e5", "Nf3", "Nc6", "Bb5")


def sicilian_najdorf() -> Game:
    return make_game("e4", "c5", "Nf3", "d3", "e5", "cxe5", "Nxe5", "Nf6", "Nc3", "a6")


def sicilian_dragon() -> Game:
    return make_game("e4", "c5", "Nf3", "d3", "e5", "cxe5", "Nxe5", "Nf6", "Nc3", "g6")


def queens_gambit() -> Game:
    return make_game("d4", "d5", "c4")


@pytest.fixture(scope="session")
def sample_pgn_path() -> Path:
    return Path(__file__).parent / "fixtures" / "sample.pgn"


@pytest.fixture()
def opening_games() -> List[Game]:
    return [italian_game(), ruy_lopez(), sicilian_najdorf(), sicilian_dragon(), queens_gambit()]
