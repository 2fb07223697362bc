"""Download games from the chess.com published-data API."""
import datetime as dt
from typing import Callable, Dict, List, Optional

import requests
from tqdm import tqdm

from .constants import CHESS_COM_API_ROOT, REQUEST_TIMEOUT, USER_AGENT

HEADERS = {"User-Agent": USER_AGENT, "Accept-Encoding": "gzip, deflate"}


class APIError(Exception):
    """A request to a game archive failed."""


class ClientError(APIError):
    def __init__(self, code: int, reason: str) -> None:
        super().__init__(f"Client Error: {code} {reason}")
        self.code = code
        self.reason = reason


class APIConnectionError(APIError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Could not connect to {url}")
        self.url = url


class APIDecodeError(APIError):
    def __init__(self) -> None:
        super().__init__("Could not decode API response as JSON")


class APITimeoutError(APIError):
    def __init__(self) -> None:
        super().__init__("Request for monthly archive timed out")


def _make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(HEADERS)
    return session


def month_start(when: dt.datetime) -> dt.datetime:
    """Return the first instant of the month containing ``when``."""
    return when.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_month(when: dt.datetime) -> dt.datetime:
    """Return the start of the month after ``when``."""
    start = month_start(when)
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)


def _is_archived_game(game: object) -> bool:
    if not isinstance(game, dict):
        return False
    end_time = game.get("end_time")
    return isinstance(end_time, int) and not isinstance(end_time, bool) and isinstance(game.get("pgn"), str)


def _ended_at(game: Dict) -> dt.datetime:
    return dt.datetime.fromtimestamp(game["end_time"], tz=dt.timezone.utc)


def _as_utc(when: dt.datetime) -> dt.datetime:
    if when.tzinfo is None:
        return when.replace(tzinfo=dt.timezone.utc)
    return when.astimezone(dt.timezone.utc)


class ChessComAPI:
    """Client for the chess.com monthly game archives.

    ``root`` must not have a trailing slash.
    """

    def __init__(self, root: str = CHESS_COM_API_ROOT, *, session: Optional[requests.Session] = None) -> None:
        self.root = root.rstrip("/")
        self._owns_session = session is None
        self.session = session if session is not None else _make_session()

    def close(self) -> None:
        # A session passed in by the caller stays open
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "ChessComAPI":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def archive_url(self, username: str, year: int, month: int) -> str:
        return f"{self.root}/pub/player/{username}/games/{year:04d}/{month:02d}"

    def request_monthly_archive(self, username: str, year: int, month: int) -> List[Dict]:
        url = self.archive_url(username, year, month)
        try:
            r = self.session.get(url, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.Timeout as e:
            raise APITimeoutError() from e
        except requests.exceptions.ConnectionError as e:
            raise APIConnectionError(url) from e
        except requests.exceptions.RequestException as e:
            raise APIError(str(e)) from e

        if 400 <= r.status_code < 500:
            raise ClientError(r.status_code, r.reason or "")
        try:
            r.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise APIError(str(e)) from e

        try:
            payload = r.json()
        except ValueError as e:
            raise APIDecodeError() from e
        games = payload.get("games") if isinstance(payload, dict) else None
        if not isinstance(games, list):
            raise APIDecodeError()
        for game in games:
            if not _is_archived_game(game):
                raise APIDecodeError()
        return games

    def _month_pgns(
        self,
        username: str,
        when: dt.datetime,
        keep: Callable[[dt.datetime], bool] = lambda _: True,
    ) -> List[str]:
        games = self.request_monthly_archive(username, when.year, when.month)
        return [g["pgn"] for g in games if g["pgn"] and keep(_ended_at(g))]

    def get_games(
        self,
        username: str,
        since: dt.datetime,
        until: dt.datetime,
        *,
        show_progress: bool = False,
    ) -> str:
        """Return the PGN of every game that ended at or after ``since`` and before ``until``.

        One request is made per month in the range; the first and last months
        are filtered by end time.
        """
        since = _as_utc(since)
        until = _as_utc(until)
        if until <= since:
            return ""

        first = month_start(since)
        last = month_start(until)
        if first == last:
            pgns = self._month_pgns(username, first, lambda t: since <= t < until)
            return "\n\n".join(pgns)

        months: List[dt.datetime] = []
        current = add_month(first)
        while current < last:
            months.append(current)
            current = add_month(current)

        total = len(months) + 1 + (1 if last < until else 0)
        pgns: List[str] = []
        with tqdm(total=total, disable=not show_progress, desc="Fetching archives") as pbar:
            pgns.extend(self._month_pgns(username, first, lambda t: t >= since))
            pbar.update(1)
            for month in months:
                pgns.extend(self._month_pgns(username, month))
                pbar.update(1)
            if last < until:
                pgns.extend(self._month_pgns(username, last, lambda t: t < until))
                pbar.update(1)

        return "\n\n".join(pgns)
