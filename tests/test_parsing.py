import io

import pytest

from opening_trie import GameResult
from opening_trie.parsing import load_games, parse_game, read_games


@pytest.mark.parametrize(
    "pgn, expected_moves",
    [
        ("1. e4 e5 2. Nf3 Nc6", ["e4", "e5", "Nf3", "Nc6"]),
        ("1. d4 Nf6 2. c4 g6 3. Nc3", ["d4", "Nf6", "c4", "g6", "Nc3"]),
        ("1. e4 e5 (1... c5 2. Nf3) 2. Qh5 Nc6 3. Bc4 Nf6 4. Qxf7#", ["e4", "e5", "Qh5", "Nc6", "Bc4", "Nf6", "Qxf7#"]),
    ],
)
def test_parse_game_finds_mainline_moves(pgn, expected_moves):
    assert parse_game(pgn).moves == expected_moves


@pytest.mark.parametrize(
    "pgn, expected_result",
    [
        ('[Result "0-1"]\n\n1. e4 e5 2. Ke2', GameResult.BLACK_WON),
        ('[Result "1/2-1/2"]\n\n1. e4 e5 2. Nf3 Nf6 3. Nxe5', GameResult.DRAW),
        ("1. e4 e5 2. Nf3 Nf6 3. Nxe5", None),
    ],
)
def test_parse_game_finds_result(pgn, expected_result):
    assert parse_game(pgn).result is expected_result


@pytest.mark.parametrize(
    "pgn, white, black",
    [
        ('[White "J.J. Jameson"]\n[Black "Hikaru Nakamura"]\n\n1. e4 e5', "J.J. Jameson", "Hikaru Nakamura"),
        ('[White "Nick"]\n[Black "Paul"]\n\n1. e4 e5', "Nick", "Paul"),
        ("1. e4 e5 2. Nf3 Nf6 3. Nxe5", None, None),
    ],
)
def test_parse_game_finds_players(pgn, white, black):
    parsed = parse_game(pgn)
    assert parsed.white_player == white
    assert parsed.black_player == black


def test_parse_game_rejects_empty_text():
    with pytest.raises(ValueError, match="Invalid PGN"):
        parse_game("")


def test_read_games_streams_every_game(sample_pgn_path):
    with sample_pgn_path.open("r", encoding="utf-8") as f:
        games = list(read_games(f))
    assert len(games) == 4
    assert games[0].white_player == "Hero"
    assert games[2].moves == ["d4", "d5", "c4", "e6"]
    assert [g.result for g in games] == [
        GameResult.WHITE_WON,
        GameResult.BLACK_WON,
        GameResult.DRAW,
        GameResult.WHITE_WON,
    ]


def test_load_games_builds_games(sample_pgn_path):
    with sample_pgn_path.open("r", encoding="utf-8") as f:
        games, skipped = load_games(f)
    assert skipped == 0
    assert len(games) == 4
    assert games[1].black_player == "Hero"
    assert [m.to_notation() for m in games[3].list_moves()][:2] == ["e4", "e5"]


def test_load_games_skips_unreadable_notation():
    # Three queens can reach e1, so python-chess writes the fully
    # disambiguated "Qh4e1", which the notation grammar does not cover.
    pgn = '[FEN "1k6/8/8/8/4Q2Q/8/8/K6Q w - - 0 1"]\n[SetUp "1"]\n\n1. Qh4e1 *\n\n1. e4 e5 *\n'
    games, skipped = load_games(io.StringIO(pgn))
    assert skipped == 1
    assert len(games) == 1


def test_load_games_skips_unknown_result_tag():
    pgn = '[Result "1/2"]\n\n1. e4 e5 *\n\n[Result "1-0"]\n\n1. d4 d5 1-0\n'
    games, skipped = load_games(io.StringIO(pgn))
    assert skipped == 1
    assert len(games) == 1
    assert games[0].result is GameResult.WHITE_WON
    assert [m.to_notation() for m in games[0].list_moves()] == ["d4", "d5"]


def test_read_games_raises_on_unknown_result_tag():
    with pytest.raises(ValueError, match="Unknown result token"):
        list(read_games(io.StringIO('[Result "1/2"]\n\n1. e4 e5 *\n')))
