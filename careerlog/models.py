"""
Data model for roster players, per-season records and run results.
"""

import re
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class Category(str, Enum):
    """Player position. The roster is limited to skill positions."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["Category"]:
        if not value:
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


# Reason codes for an empty season record
NO_DATA_START = "no_data_start"
NO_VALID_STATS = "no_valid_stats"
UNKNOWN_CATEGORY = "unknown_category"
# Page fetched but it says the player has no games that season
NO_GAME_DATA = "no_game_data"
# Locator answered 404/410
PAGE_NOT_FOUND = "page_not_found"

# NFL season rolls over in August
SEASON_ROLLOVER_MONTH = 8


def current_season(today: Optional[date] = None) -> int:
    """Return the NFL season year that is operative on ``today``."""
    today = today or date.today()
    return today.year if today.month >= SEASON_ROLLOVER_MONTH else today.year - 1


def entity_key(name: str) -> str:
    """Key used for a player in run output: lower-case, non-letters -> '_'."""
    return re.sub(r"[^a-z]", "_", name.lower())


@dataclass(frozen=True)
class Player:
    name: str
    category: Category
    affiliation: str = ""
    rank: float = 0

    @property
    def key(self) -> str:
        return entity_key(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": self.category.value,
            "team": self.affiliation,
            "adp": self.rank,
        }


@dataclass(frozen=True)
class YearRecord:
    """
    One player's statistics for one season.

    An empty record carries a ``reason`` instead of stats. Any reason
    other than PAGE_NOT_FOUND means the player's page was reached but held
    no usable stats; the history walk uses that to tell a rookie apart
    from a name the source does not know at all.
    """

    year: int
    stats: Mapping[str, float] = field(default_factory=dict)
    locator: Optional[str] = None
    captured_at: Optional[str] = None
    detected_category: Optional[Category] = None
    reason: Optional[str] = None

    @classmethod
    def empty(cls, year: int, reason: str) -> "YearRecord":
        return cls(year=year, reason=reason)

    @property
    def is_empty(self) -> bool:
        return self.reason is not None or not self.stats

    @property
    def page_seen(self) -> bool:
        return not self.is_empty or self.reason != PAGE_NOT_FOUND

    def to_dict(self) -> Dict[str, Any]:
        if self.is_empty:
            return {"year": self.year, "isEmpty": True, "reason": self.reason or NO_VALID_STATS}
        data: Dict[str, Any] = {"year": self.year, "urlUsed": self.locator}
        data.update(self.stats)
        if self.detected_category is not None:
            data["detectedPosition"] = self.detected_category.value
        data["scraped_at"] = self.captured_at
        return data


@dataclass
class Timeline:
    """A player's season -> record history, newest season first."""

    player: Player
    seasons: Dict[int, YearRecord] = field(default_factory=dict)
    likely_new_entrant: bool = False
    captured_at: Optional[str] = None

    def add(self, record: YearRecord) -> None:
        self.seasons[record.year] = record
        self.seasons = dict(sorted(self.seasons.items(), reverse=True))

    @property
    def total_years(self) -> int:
        return len(self.seasons)

    def to_dict(self) -> Dict[str, Any]:
        data = self.player.to_dict()
        data.update({
            "seasons": {str(y): r.to_dict() for y, r in self.seasons.items()},
            "total_seasons": self.total_years,
            "is_likely_rookie": self.likely_new_entrant,
            "scraped_at": self.captured_at,
        })
        return data


@dataclass(frozen=True)
class Injury:
    season: int
    week: str
    injury: str
    status: str

    def to_dict(self) -> Dict[str, Any]:
        return {"season": str(self.season), "week": self.week, "injury": self.injury, "status": self.status}


@dataclass(frozen=True)
class InjuryReport:
    """Injury history read from the first accepted injury page for a player."""

    player: Player
    injuries: List[Injury]
    locator: str
    has_recent_injuries: bool
    detected_category: Optional[Category] = None
    captured_at: Optional[str] = None

    @property
    def total_injuries(self) -> int:
        return len(self.injuries)

    def to_dict(self) -> Dict[str, Any]:
        data = self.player.to_dict()
        data.update({
            "injuries": [i.to_dict() for i in self.injuries],
            "total_injuries": self.total_injuries,
            "has_recent_injuries": self.has_recent_injuries,
            "detected_position": self.detected_category.value if self.detected_category else None,
            "url_used": self.locator,
            "scraped_at": self.captured_at,
        })
        return data


@dataclass(frozen=True)
class RunStats:
    resolved: int = 0
    failed: int = 0
    no_match: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"resolved": self.resolved, "failed": self.failed, "no_match": self.no_match}


@dataclass(frozen=True)
class RunResult:
    """Output of one orchestrator run. Built once, never mutated."""

    pipeline: str
    timestamp: str
    current_season: int
    stats: RunStats
    data: Mapping[str, Any]
    extras: Mapping[str, Any] = field(default_factory=dict)

    @property
    def total_players(self) -> int:
        return len(self.data)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "success": True,
            "pipeline": self.pipeline,
            "timestamp": self.timestamp,
            "current_nfl_season": self.current_season,
            "stats": self.stats.to_dict(),
            "total_players": self.total_players,
        }
        out.update(self.extras)
        out["data"] = {k: (v.to_dict() if hasattr(v, "to_dict") else v) for k, v in self.data.items()}
        return out
