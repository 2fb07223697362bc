import io
import sys
from unittest.mock import patch

import pytest

import opening_trie.cli as cli
from opening_trie.scraping import ClientError


def test_stats_cli_filters_by_moves(sample_pgn_path, capsys):
    cli.main(["stats", "e4", "c5", "--input", str(sample_pgn_path), "--quiet"])
    out = capsys.readouterr().out
    assert "2 games" in out
    assert "White Wins: 50.00%" in out
    assert "Black Wins: 50.00%" in out
    assert "Draw: 0.00%" in out


def test_stats_cli_reads_stdin(sample_pgn_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO(sample_pgn_path.read_text(encoding="utf-8")))
    cli.main(["stats", "--quiet"])
    out = capsys.readouterr().out
    assert "4 games" in out


def test_stats_cli_branches(sample_pgn_path, capsys):
    cli.main(["stats", "e4", "--branches", "-i", str(sample_pgn_path), "--quiet"])
    out = capsys.readouterr().out
    assert "3 games" in out
    assert "c5" in out
    assert "e5" in out


def test_stats_cli_no_branches_left(sample_pgn_path, capsys):
    cli.main(["stats", "c4", "--branches", "-i", str(sample_pgn_path), "--quiet"])
    out = capsys.readouterr().out
    assert "0 games" in out
    assert "No moves" in out


def test_stats_cli_bad_move(sample_pgn_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["stats", "D4", "-i", str(sample_pgn_path), "--quiet"])
    assert excinfo.value.code == 1
    assert "Invalid file: D" in capsys.readouterr().err


def test_scrape_cli_prints_pgn(capsys):
    with patch.object(cli.ChessComAPI, "get_games", return_value="1. e4 e5 *") as get_games:
        cli.main(["scrape", "hero", "2024-01-01T00:00:00Z", "2024-02-01T00:00:00+00:00", "--quiet"])
    assert "1. e4 e5 *" in capsys.readouterr().out
    player, since, until = get_games.call_args.args
    assert player == "hero"
    assert since.year == 2024 and since.month == 1
    assert until.month == 2


def test_scrape_cli_reports_api_errors(capsys):
    with patch.object(cli.ChessComAPI, "get_games", side_effect=ClientError(404, "Not Found")):
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["scrape", "nobody", "2024-01-01", "2024-02-01", "--quiet"])
    assert excinfo.value.code == 1
    assert "Client Error: 404 Not Found" in capsys.readouterr().err


def test_scrape_cli_rejects_bad_time():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["scrape", "hero", "yesterday", "2024-02-01"])
    assert excinfo.value.code == 2


def test_stats_cli_reads_latin1_pgn(tmp_path, capsys):
    pgn = tmp_path / "latin1.pgn"
    pgn.write_bytes('[White "Müller"]\n[Black "Gómez"]\n[Result "1-0"]\n\n1. e4 e5 1-0\n'.encode("latin-1"))
    cli.main(["stats", "e4", "-i", str(pgn), "--quiet"])
    out = capsys.readouterr().out
    assert "1 games" in out
    assert "White Wins: 100.00%" in out
