"""
Season game-log scraper (FantasyPros-style pages).

URL: https://www.fantasypros.com/nfl/games/<slug>[-<pos>].php?season=<year>
One page per player and season; the totals row holds the season stats.
"""

from datetime import date, datetime, timezone
from typing import Callable, Optional

from ..candidates import CandidateGrammar, GAMELOG_GRAMMAR
from ..errors import PageNotFound, PermanentFetchError
from ..evaluator import CandidateOutcome, CandidatePolicy, GreedyPolicy
from ..extract import extract_totals
from ..history import HistoryResolver, Resolution
from ..logger import get_logger
from ..models import NO_GAME_DATA, PAGE_NOT_FOUND, Player, Timeline, YearRecord, current_season
from ..retry import RetryError
from ..validate import GAMELOG_PAGE_RULES, PageRules, VerdictStatus, validate_page
from .common import FetchClient

logger = get_logger()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class GameLogScraper:
    def __init__(
        self,
        client: FetchClient,
        policy: Optional[CandidatePolicy] = None,
        grammar: CandidateGrammar = GAMELOG_GRAMMAR,
        rules: PageRules = GAMELOG_PAGE_RULES,
        today: Optional[date] = None,
        clock: Callable[[], str] = _now,
    ):
        self.client = client
        self.policy = policy or GreedyPolicy()
        self.grammar = grammar
        self.rules = rules
        self.clock = clock
        self.start_year = current_season(today)
        self.resolver = HistoryResolver(self.season, clock=clock)

    @property
    def source(self) -> str:
        return self.grammar.name

    async def season(self, player: Player, year: int) -> YearRecord:
        """Look up one season, trying every candidate locator in order."""
        empty_reason = PAGE_NOT_FOUND

        async def probe(candidate: str) -> Optional[CandidateOutcome]:
            nonlocal empty_reason
            url = self.grammar.locate(candidate, season=year)
            logger.debug(f"{player.name} {year}: trying {candidate}", url=url)
            logger.record_candidate_attempt(self.source)
            try:
                page = await self.client.fetch(url, source=self.source)
            except PageNotFound:
                return None
            except (PermanentFetchError, RetryError) as e:
                logger.error(f"Error with {candidate} {year}", error=str(e))
                return None

            verdict = validate_page(page.text, self.rules, expected=player.category)
            if not verdict.accepted:
                # A 200 "no game data" page still proves the locator exists
                if verdict.status == VerdictStatus.NOT_FOUND and empty_reason == PAGE_NOT_FOUND:
                    empty_reason = NO_GAME_DATA
                return CandidateOutcome(candidate, verdict)

            extraction = extract_totals(page.text)
            if extraction.is_empty:
                if empty_reason == PAGE_NOT_FOUND:
                    empty_reason = extraction.reason
                return CandidateOutcome(candidate, verdict)
            return CandidateOutcome(candidate, verdict, extraction)

        outcome = await self.policy.select(
            self.grammar.candidates(player.name, player.category), probe
        )
        if outcome is None:
            return YearRecord.empty(year, empty_reason)

        logger.record_candidate_success(self.source)
        extraction = outcome.payload
        fantasy_points = extraction.stats.get("fantasy_points", 0)
        logger.info(f"{player.name} {year}: {fantasy_points} fantasy points", locator=outcome.candidate)
        return YearRecord(
            year=year,
            stats=dict(extraction.stats),
            locator=outcome.candidate,
            captured_at=self.clock(),
            detected_category=extraction.category,
        )

    async def history(self, player: Player) -> Resolution:
        logger.info(f"Processing: {player.name} ({player.category.value})")
        return await self.resolver.resolve(player, self.start_year)

    async def resolve(self, player: Player) -> Optional[Timeline]:
        """Timeline for a player, or None when there is nothing to report."""
        resolution = await self.history(player)
        return resolution.timeline
