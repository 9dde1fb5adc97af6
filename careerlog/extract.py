"""
Table extraction for player pages.

Season totals are read from the row whose first label cell is 'Totals'.
Header text on the game-log tables is irregular across positions (group
headers, repeated 'YDS' columns), so cells are mapped by position using
a fixed column schema per player category rather than by header name.
That mapping breaks silently if the site reorders columns; the schemas
below have to be checked against the live tables when that happens.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from .models import (
    Category,
    Injury,
    NO_DATA_START,
    NO_VALID_STATS,
    UNKNOWN_CATEGORY,
)

TOTALS_MARKER = "totals"
PLACEHOLDERS = {"", "-", "--"}


@dataclass(frozen=True)
class ColumnSchema:
    """Ordered stat names for the totals row of one player category."""

    columns: Tuple[str, ...]
    identifiers: Tuple[str, ...]


COLUMN_SCHEMAS: Dict[Category, ColumnSchema] = {
    Category.QB: ColumnSchema(
        columns=(
            "pass_cmp", "pass_att", "pass_pct", "pass_yds", "pass_ya", "pass_td", "pass_int", "pass_sacks",
            "rush_att", "rush_yds", "rush_ya", "rush_lg", "rush_td", "fum", "fuml", "fantasy_points",
        ),
        identifiers=("CMP", "ATT", "PCT"),
    ),
    Category.RB: ColumnSchema(
        columns=(
            "rush_att", "rush_yds", "rush_ya", "rush_lg", "rush_td", "rec", "rec_tgt", "rec_yds", "rec_yr",
            "rec_lg", "rec_td", "fum", "fuml", "fantasy_points",
        ),
        identifiers=("ATT", "YDS", "Y/A", "REC"),
    ),
    Category.WR: ColumnSchema(
        columns=(
            "rec", "rec_tgt", "rec_yds", "rec_yr", "rec_lg", "rec_td", "rush_att", "rush_yds", "rush_ya",
            "rush_lg", "rush_td", "fum", "fuml", "fantasy_points",
        ),
        identifiers=("REC", "TGT", "YDS", "Y/R"),
    ),
}

DEFAULT_CATEGORY = Category.RB


@dataclass(frozen=True)
class Extraction:
    stats: Mapping[str, float] = field(default_factory=dict)
    category: Optional[Category] = None
    reason: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.reason is not None


def detect_category(headers: Sequence[str]) -> Category:
    """
    Pick the column schema for a totals table from its header labels.

    Passing columns mean a quarterback. Otherwise whichever of receptions
    (REC) and rushing attempts (ATT) comes first decides between the
    receiver and running-back layouts.
    """
    labels = [h.strip().upper() for h in headers]
    if all(token in labels for token in COLUMN_SCHEMAS[Category.QB].identifiers):
        return Category.QB

    rec = labels.index("REC") if "REC" in labels else None
    att = labels.index("ATT") if "ATT" in labels else None
    if rec is not None and att is not None:
        return Category.WR if rec < att else Category.RB
    if rec is not None:
        return Category.WR
    return DEFAULT_CATEGORY


def parse_number(cell: str) -> Optional[float]:
    """Parse '1,234', '67.5%' or '12'. Returns None for placeholders and junk."""
    value = cell.strip()
    if value in PLACEHOLDERS:
        return None
    value = value.replace(",", "").replace("%", "")
    try:
        number = float(value)
    except ValueError:
        return None
    if number.is_integer():
        return int(number)
    return number


def map_totals_cells(cells: Sequence[str], schema: ColumnSchema) -> Dict[str, float]:
    """Map the cells of a totals row onto ``schema.columns`` by position."""
    start = None
    for i, cell in enumerate(cells):
        if cell.strip().lower() == TOTALS_MARKER:
            start = i + 1
            while start < len(cells) and not cells[start].strip():
                start += 1
            break
    if start is None:
        return {}

    stats: Dict[str, float] = {}
    for name, cell in zip(schema.columns, cells[start:]):
        number = parse_number(cell)
        if number is not None:
            stats[name] = number
    return stats


def _cell_texts(row: Tag) -> List[str]:
    return [c.get_text(strip=True) for c in row.find_all(["td", "th"])]


def _header_labels(table: Tag) -> List[str]:
    headers = []
    thead = table.find("thead")
    if thead is not None:
        for row in thead.find_all("tr"):
            headers.extend(t.upper() for t in _cell_texts(row))
    if not headers:
        first = table.find("tr")
        if first is not None:
            headers = [t.upper() for t in _cell_texts(first)]
    return headers


def find_totals_row(soup: BeautifulSoup) -> Optional[Tuple[List[str], List[str]]]:
    """Return (cells, header labels) of the first totals row in any table."""
    for cell in soup.find_all(["td", "th"]):
        if cell.get_text(strip=True).lower() != TOTALS_MARKER:
            continue
        row = cell.find_parent("tr")
        if row is None:
            continue
        table = row.find_parent("table")
        headers = _header_labels(table) if table is not None else []
        return _cell_texts(row), headers
    return None


def extract_totals(html: str) -> Extraction:
    """Extract the season totals row of a game-log page."""
    soup = BeautifulSoup(html, "html.parser")
    found = find_totals_row(soup)
    if found is None:
        return Extraction(reason=NO_DATA_START)
    cells, headers = found

    category = detect_category(headers)
    # TE tables share the receiver layout and detect as WR. A category that
    # detect_category learns before it gets a schema lands here.
    schema = COLUMN_SCHEMAS.get(category)
    if schema is None:
        return Extraction(category=category, reason=UNKNOWN_CATEGORY)

    stats = map_totals_cells(cells, schema)
    if not stats:
        return Extraction(category=category, reason=NO_VALID_STATS)
    return Extraction(stats=stats, category=category)


SEASON_CELL = re.compile(r"^\d{4}$")


def extract_injuries(html: str) -> List[Injury]:
    """Read injury rows: season, week, injury, status (header rows skipped)."""
    soup = BeautifulSoup(html, "html.parser")
    injuries = []
    for row in soup.find_all("tr"):
        cells = _cell_texts(row)
        if len(cells) < 4 or not SEASON_CELL.match(cells[0]):
            continue
        injuries.append(Injury(season=int(cells[0]), week=cells[1], injury=cells[2], status=cells[3]))
    return injuries
