"""
Backward walk over seasons that assembles a player's timeline.

Starting at the current season, each season is looked up through a
``season_source`` (for game logs: candidates -> fetch -> validate ->
extract). The walk stops when:

- two consecutive seasons are empty after data was found (retired or
  history complete);
- two consecutive seasons are empty, nothing was ever found but the
  player's page exists; one more season is probed to confirm, and if it
  is empty too the player is a likely rookie;
- ``max_lookback`` seasons below the start have been probed.

A player with data only in older seasons is reported INACTIVE and a
player the source never knew is UNMATCHED; neither yields a timeline.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional

from .logger import get_logger
from .models import Player, Timeline, YearRecord

logger = get_logger()

SeasonSource = Callable[[Player, int], Awaitable[YearRecord]]

EMPTY_SEASONS_TO_STOP = 2
MAX_LOOKBACK = 10


class WalkEnd(str, Enum):
    """Why the season walk stopped."""

    RETIRED = "retired"
    NEW_ENTRANT = "new_entrant"
    LOOKBACK_EXHAUSTED = "lookback_exhausted"


class ResolutionStatus(str, Enum):
    """What the walk yields after the recency check."""

    COMPLETE = "complete"
    NEW_ENTRANT = "new_entrant"
    INACTIVE = "inactive"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class Resolution:
    status: ResolutionStatus
    walk_end: WalkEnd
    timeline: Optional[Timeline] = None
    probed: int = 0


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HistoryResolver:
    def __init__(
        self,
        season_source: SeasonSource,
        max_lookback: int = MAX_LOOKBACK,
        clock: Callable[[], str] = _now,
    ):
        self.season_source = season_source
        self.max_lookback = max_lookback
        self.clock = clock

    async def resolve(self, player: Player, start_year: int) -> Resolution:
        timeline = Timeline(player=player)
        floor = start_year - self.max_lookback
        consecutive_empty = 0
        found_any = False
        page_seen = False
        probed = 0
        walk_end = WalkEnd.LOOKBACK_EXHAUSTED

        year = start_year
        while year >= floor:
            record = await self.season_source(player, year)
            probed += 1
            page_seen = page_seen or record.page_seen

            if not record.is_empty:
                timeline.add(record)
                consecutive_empty = 0
                found_any = True
                year -= 1
                continue

            consecutive_empty += 1
            logger.debug(f"{player.name} {year}: no data", reason=record.reason)

            if consecutive_empty >= EMPTY_SEASONS_TO_STOP and found_any:
                logger.info(f"{player.name}: stopping after {consecutive_empty} consecutive empty seasons")
                walk_end = WalkEnd.RETIRED
                break

            if consecutive_empty >= EMPTY_SEASONS_TO_STOP and page_seen:
                confirm_year = year - 1
                if confirm_year < floor:
                    break
                confirm = await self.season_source(player, confirm_year)
                probed += 1
                if confirm.is_empty:
                    logger.info(f"{player.name}: confirmed rookie, no data in {probed} seasons")
                    timeline.likely_new_entrant = True
                    timeline.captured_at = self.clock()
                    return Resolution(ResolutionStatus.NEW_ENTRANT, WalkEnd.NEW_ENTRANT, timeline, probed)
                logger.info(f"{player.name}: found data in {confirm_year}, not a rookie")
                timeline.add(confirm)
                found_any = True
                consecutive_empty = 0
                year = confirm_year - 1
                continue

            year -= 1

        if not found_any:
            logger.info(f"{player.name}: no data found anywhere")
            return Resolution(ResolutionStatus.UNMATCHED, walk_end, probed=probed)

        if start_year not in timeline.seasons and start_year - 1 not in timeline.seasons:
            logger.info(f"{player.name}: no recent activity, possibly retired")
            return Resolution(ResolutionStatus.INACTIVE, walk_end, probed=probed)

        timeline.captured_at = self.clock()
        return Resolution(ResolutionStatus.COMPLETE, walk_end, timeline, probed)
