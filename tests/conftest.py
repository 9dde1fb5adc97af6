"""
Pytest configuration and shared fixtures.
"""

import os
import tempfile

# Keep log files out of the working tree; must run before careerlog imports
os.environ.setdefault("CAREERLOG_LOG_DIR", tempfile.mkdtemp(prefix="careerlog-logs-"))

import pytest
import requests
from typing import Dict, List, Sequence

from careerlog.config import Settings
from careerlog.models import Category, Player

FILLER = (
    "Game logs list every game a player appeared in during the selected season, "
    "with passing, rushing and receiving numbers as well as fantasy points scored. "
    "Totals at the bottom of the table add up every game of the season. "
    "Use the season selector above the table to browse previous seasons."
)

QB_HEADERS = [
    "Week", "Opp", "CMP", "ATT", "PCT", "YDS", "Y/A", "TD", "INT", "SACKS",
    "ATT", "YDS", "Y/A", "LG", "TD", "FUM", "LOST", "FPTS",
]
QB_TOTALS = [
    "Totals", "", "307", "483", "63.6%", "3,731", "7.7", "28", "6", "14",
    "102", "531", "5.2", "30", "12", "5", "2", "385.8",
]

WR_HEADERS = [
    "Week", "Opp", "REC", "TGT", "YDS", "Y/R", "LG", "TD", "ATT", "YDS", "Y/A", "LG", "TD", "FUM", "LOST", "FPTS",
]
WR_TOTALS = [
    "Totals", "", "127", "175", "1,708", "13.4", "70", "17", "3", "32", "10.7", "14", "0", "1", "0", "403.0",
]

RB_HEADERS = [
    "Week", "Opp", "ATT", "YDS", "Y/A", "LG", "TD", "REC", "TGT", "YDS", "Y/R", "LG", "TD", "FUM", "LOST", "FPTS",
]
RB_TOTALS = [
    "Totals", "", "326", "1,921", "5.9", "68", "16", "33", "37", "278", "8.4", "26", "1", "2", "1", "333.9",
]


def build_gamelog_page(title: str, headers: Sequence[str], totals: Sequence[str] | None) -> str:
    head = "".join(f"<th>{h}</th>" for h in headers)
    rows = "<tr>" + "".join(f"<td>{c}</td>" for c in ["1", "ARI"] + ["1"] * (len(headers) - 2)) + "</tr>"
    if totals is not None:
        rows += "<tr>" + "".join(f"<td>{c}</td>" for c in totals) + "</tr>"
    return f"""
    <html>
    <head><title>{title} Game Log</title></head>
    <body>
        <h1>{title}</h1>
        <h2>Game Log</h2>
        <p>{FILLER}</p>
        <table>
            <thead><tr>{head}</tr></thead>
            <tbody>{rows}</tbody>
        </table>
    </body>
    </html>
    """


INJURY_PAGE = f"""
<html>
<head><title>Josh Allen Injuries | FOX Sports</title></head>
<body>
    <nav>NEWS STATS GAME LOG INJURIES</nav>
    <div class="entity-header-wrapper">
        <h1>Josh Allen</h1>
        <span>#17 - QUARTERBACK - BUFFALO BILLS</span>
    </div>
    <p>{FILLER}</p>
    <p>{FILLER}</p>
    <table>
        <thead><tr><th>SEASON</th><th>WEEK</th><th>INJURY</th><th>STATUS</th></tr></thead>
        <tbody>
            <tr><td>2024</td><td>Week 11</td><td>Elbow</td><td>Questionable</td></tr>
            <tr><td>2023</td><td>Week 4</td><td>Hand</td><td>Probable</td></tr>
            <tr><td>2019</td><td>Week 2</td><td>Concussion</td><td>Out</td></tr>
        </tbody>
    </table>
</body>
</html>
"""

NO_GAME_DATA_PAGE = f"""
<html>
<head><title>Rook Ie Game Log</title></head>
<body>
    <h1>Rook Ie - RB - Team</h1>
    <h2>Game Log</h2>
    <p>{FILLER}</p>
    <p>Rook Ie does not have any game data for this season.</p>
</body>
</html>
"""

NOT_FOUND_PAGE = """
<html><head><title>Page Not Found</title></head>
<body><h1>Page not found</h1><p>Sorry, the page you requested does not exist.</p></body>
</html>
"""


@pytest.fixture
def qb_gamelog_html() -> str:
    """QB game log with a complete totals row."""
    return build_gamelog_page("Josh Allen - QB - Buffalo Bills", QB_HEADERS, QB_TOTALS)


@pytest.fixture
def wr_gamelog_html() -> str:
    return build_gamelog_page("Ja'Marr Chase - WR - Cincinnati Bengals", WR_HEADERS, WR_TOTALS)


@pytest.fixture
def rb_gamelog_html() -> str:
    return build_gamelog_page("Saquon Barkley - RB - Philadelphia Eagles", RB_HEADERS, RB_TOTALS)


@pytest.fixture
def te_gamelog_html() -> str:
    """Tight ends get the receiver table layout."""
    return build_gamelog_page("Sam LaPorta - TE - Detroit Lions", WR_HEADERS, WR_TOTALS)


@pytest.fixture
def no_totals_gamelog_html() -> str:
    """Game log page with games but no totals row."""
    return build_gamelog_page("Josh Allen - QB - Buffalo Bills", QB_HEADERS, None)


@pytest.fixture
def dashes_gamelog_html() -> str:
    """Totals row where every stat is a placeholder (player did not play)."""
    return build_gamelog_page(
        "Josh Allen - QB - Buffalo Bills", QB_HEADERS, ["Totals", ""] + ["-"] * (len(QB_HEADERS) - 2)
    )


@pytest.fixture
def injury_page_html() -> str:
    return INJURY_PAGE


@pytest.fixture
def not_found_html() -> str:
    return NOT_FOUND_PAGE


@pytest.fixture
def no_game_data_html() -> str:
    """Player page served with 200 for a season the player did not play."""
    return NO_GAME_DATA_PAGE


@pytest.fixture
def fast_settings() -> Settings:
    """Default settings; delays are harmless because tests pass a recording pause."""
    return Settings()


@pytest.fixture
def josh_allen() -> Player:
    return Player(name="Josh Allen", category=Category.QB, affiliation="BUF", rank=1.5)


class RecordingPause:
    """Awaitable stand-in for asyncio.sleep that only records durations."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeSession:
    """
    requests-style session serving canned responses.

    Routes map a URL to a body (200), a status code, a (status, body)
    tuple, an exception instance, or a list of those served in order
    (the last one repeats). Unknown URLs answer 404.
    """

    def __init__(self, routes: Dict[str, object] | None = None):
        self.routes = dict(routes or {})
        self.calls: List[dict] = []

    def get(self, url, timeout=None, headers=None):
        self.calls.append({"url": url, "timeout": timeout, "headers": headers})
        route = self.routes.get(url, 404)
        if isinstance(route, list):
            route = route.pop(0) if len(route) > 1 else route[0]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            status, text = route, ""
        elif isinstance(route, tuple):
            status, text = route
        else:
            status, text = 200, route

        resp = requests.Response()
        resp.status_code = status
        resp._content = text.encode("utf-8")
        resp.encoding = "utf-8"
        resp.url = url
        return resp

    @property
    def urls(self) -> List[str]:
        return [c["url"] for c in self.calls]


@pytest.fixture
def pause() -> RecordingPause:
    return RecordingPause()


@pytest.fixture
def make_session():
    def _make(routes=None) -> FakeSession:
        return FakeSession(routes)
    return _make


@pytest.fixture
def make_gamelog_page():
    """Factory for game-log pages with custom headers and totals."""
    return build_gamelog_page
