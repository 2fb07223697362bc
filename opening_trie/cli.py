import argparse
import datetime as dt
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from .constants import CHESS_COM_API_ROOT, DEFAULT_BRANCH_LIMIT
from .game import Game
from .move_tree import MoveTree, MoveTreeView
from .moves import AlgebraicMove, NotationError
from .parsing import load_games
from .scraping import APIError, ChessComAPI
from .stats import branch_stats, summarize

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _read_inputs(inputs: Iterable[Path], quiet: bool) -> Tuple[List[Game], int]:
    games: List[Game] = []
    skipped = 0
    paths = list(inputs)
    if not paths:
        return load_games(sys.stdin, quiet=quiet, desc="stdin")
    for path in paths:
        # Undecodable bytes, e.g. Latin-1 player names, become U+FFFD
        with path.open("r", encoding="utf-8", errors="replace") as f:
            found, bad = load_games(f, quiet=quiet, desc=path.name)
        games.extend(found)
        skipped += bad
    return games, skipped


def narrow(tree: MoveTree, moves: Iterable[str]) -> MoveTreeView:
    """Follow ``moves`` from the root; raises ``NotationError`` on the first bad one."""
    view = tree.view()
    for notation in moves:
        view = view.with_next(AlgebraicMove.try_from_notation(notation))
    return view


def _format_summary(stats: Dict[str, float]) -> str:
    return (
        f"White Wins: {stats['whiteWinRate'] * 100:.2f}%\n"
        f"Black Wins: {stats['blackWinRate'] * 100:.2f}%\n"
        f"Draw: {stats['drawRate'] * 100:.2f}%"
    )


def _branch_table(view: MoveTreeView, top: int) -> Optional[Table]:
    items = list(branch_stats(view).items())
    if not items:
        return None
    items.sort(key=lambda kv: (kv[1].get("total", 0), kv[0]), reverse=True)
    table = Table("Move", "Games", "White", "Draw", "Black")
    for move, st in items[:top]:
        table.add_row(
            move,
            str(st["total"]),
            f"{st['whiteWinRate'] * 100:.1f}%",
            f"{st['drawRate'] * 100:.1f}%",
            f"{st['blackWinRate'] * 100:.1f}%",
        )
    return table


def run_stats(args: argparse.Namespace) -> int:
    games, skipped = _read_inputs([Path(p) for p in args.input], args.quiet)
    if skipped and not args.quiet:
        err_console.print(f"Skipped {skipped} games with unreadable moves")

    tree = MoveTree(games)
    try:
        view = narrow(tree, args.moves)
    except NotationError as e:
        err_console.print(e.message)
        return 1

    filtered = list(view.iter())
    console.print(f"{len(filtered)} games")
    console.print(_format_summary(summarize(filtered)))

    if args.branches:
        table = _branch_table(view, args.top)
        if table is None:
            console.print("No moves")
        else:
            console.print(table)
    return 0


def _parse_time(value: str) -> dt.datetime:
    try:
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO 8601 time: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def run_scrape(args: argparse.Namespace) -> int:
    with ChessComAPI(args.api_root) as api:
        try:
            pgn = api.get_games(args.player, args.since, args.until, show_progress=not args.quiet)
        except APIError as e:
            err_console.print(str(e))
            return 1
    # PGN goes to stdout untouched so it can be piped into `stats`
    sys.stdout.write(pgn + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opening-trie",
        description="Find patterns in sets of chess games by the moves played.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    st = sub.add_parser("stats", help="Read PGN and give statistics on the games found")
    st.add_argument("moves", nargs="*", help="Filter games by moves played, e.g. e4 c5 Nf3")
    st.add_argument("--input", "-i", action="append", default=[], help="PGN file to read; repeatable (default stdin)")
    st.add_argument("--branches", "-b", action="store_true", help="Show the moves played next and their results")
    st.add_argument("--top", type=int, default=DEFAULT_BRANCH_LIMIT, help="How many next moves to display")
    st.add_argument("--quiet", action="store_true", help="Suppress progress output")
    st.set_defaults(func=run_stats)

    sc = sub.add_parser("scrape", help="Collect games from chess.com and print them as PGN")
    sc.add_argument("player", help="The chess.com account to collect games from")
    sc.add_argument("since", type=_parse_time, help="Collected games end at or after this ISO 8601 time")
    sc.add_argument("until", type=_parse_time, help="Collected games end before this ISO 8601 time")
    sc.add_argument("--api-root", default=CHESS_COM_API_ROOT, help="API root without trailing slash")
    sc.add_argument("--quiet", action="store_true", help="Suppress progress output")
    sc.set_defaults(func=run_scrape)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    code = args.func(args)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
