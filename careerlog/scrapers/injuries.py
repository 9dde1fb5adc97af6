"""
Injury history scraper (FoxSports-style player injury pages).

URL: https://www.foxsports.com/nfl/<slug>[-2|-3|-jr|-sr]-player-injuries
A single page lists every reported injury, so there is no season walk.
"""

from datetime import date, datetime, timezone
from typing import Callable, Optional

from ..candidates import CandidateGrammar, INJURY_GRAMMAR
from ..errors import PageNotFound, PermanentFetchError
from ..evaluator import CandidateOutcome, CandidatePolicy, GreedyPolicy
from ..extract import extract_injuries
from ..logger import get_logger
from ..models import InjuryReport, Player, current_season
from ..retry import RetryError
from ..validate import INJURY_PAGE_RULES, PageRules, validate_page
from .common import FetchClient

logger = get_logger()

# Seasons counted as "recent" below the current one
RECENT_SEASONS = 2


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InjuryScraper:
    def __init__(
        self,
        client: FetchClient,
        policy: Optional[CandidatePolicy] = None,
        grammar: CandidateGrammar = INJURY_GRAMMAR,
        rules: PageRules = INJURY_PAGE_RULES,
        today: Optional[date] = None,
        clock: Callable[[], str] = _now,
    ):
        self.client = client
        self.policy = policy or GreedyPolicy()
        self.grammar = grammar
        self.rules = rules
        self.clock = clock
        self.current_season = current_season(today)

    @property
    def source(self) -> str:
        return self.grammar.name

    async def _probe(self, player: Player, candidate: str) -> Optional[CandidateOutcome]:
        url = self.grammar.locate(candidate)
        logger.debug(f"{player.name}: trying {candidate}", url=url)
        logger.record_candidate_attempt(self.source)
        try:
            page = await self.client.fetch(url, source=self.source)
        except PageNotFound:
            return None
        except (PermanentFetchError, RetryError) as e:
            logger.error(f"Error with {candidate}", error=str(e))
            return None

        verdict = validate_page(page.text, self.rules, expected=player.category)
        if not verdict.accepted:
            logger.debug(f"{candidate}: not a player page", status=verdict.status.value)
            return CandidateOutcome(candidate, verdict)
        if verdict.category_mismatch:
            logger.warning(
                f"{player.name}: page position differs from roster",
                candidate=candidate,
                roster=player.category.value,
                page=verdict.detected_category.value,
            )
        # Injury table is optional; a valid page with no injuries is a result
        return CandidateOutcome(candidate, verdict, extract_injuries(page.text))

    async def resolve(self, player: Player) -> Optional[InjuryReport]:
        logger.info(f"Processing: {player.name} ({player.category.value})")

        async def probe(candidate: str) -> Optional[CandidateOutcome]:
            return await self._probe(player, candidate)

        outcome = await self.policy.select(self.grammar.candidates(player.name, player.category), probe)
        if outcome is None:
            logger.info(f"{player.name}: could not find valid URL")
            return None

        logger.record_candidate_success(self.source)
        injuries = outcome.payload
        recent = any(i.season >= self.current_season - RECENT_SEASONS for i in injuries)
        logger.info(
            f"{player.name}: found valid player page at {outcome.candidate}",
            injuries=len(injuries),
            recent=recent,
        )
        return InjuryReport(
            player=player,
            injuries=injuries,
            locator=outcome.candidate,
            has_recent_injuries=recent,
            detected_category=outcome.verdict.detected_category,
            captured_at=self.clock(),
        )
