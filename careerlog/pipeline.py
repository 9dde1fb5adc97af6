"""
End-to-end runs: roster -> per-player scraping in batches -> RunResult.
"""

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from .config import Settings
from .evaluator import CandidatePolicy
from .logger import get_logger
from .models import Player, RunResult
from .orchestrator import BatchOrchestrator
from .retry import Pause
from .roster import fetch_roster
from .scrapers.common import FetchClient
from .scrapers.gamelog import GameLogScraper
from .scrapers.injuries import InjuryScraper

logger = get_logger()

PIPELINES = ("gamelogs", "injuries")


def _injury_totals(data: Mapping[str, Any]) -> Mapping[str, Any]:
    return {"total_injuries": sum(report.total_injuries for report in data.values())}


async def run_pipeline(
    pipeline: str,
    settings: Settings,
    players: Optional[Sequence[Player]] = None,
    policy: Optional[CandidatePolicy] = None,
    session=None,
    pause: Optional[Pause] = None,
    today: Optional[date] = None,
) -> RunResult:
    """Run one pipeline over the roster.

    Args:
        pipeline: 'gamelogs' or 'injuries'
        settings: Batch, delay, timeout and retry settings
        players: Roster to use; fetched from the ADP API when None
        policy: Candidate acceptance policy (default GreedyPolicy)
        session: requests-style session for all HTTP calls
        pause: Awaitable sleep used for every delay
        today: Date used to derive the current season

    Raises:
        ValueError: Unknown pipeline
        RosterSchemaError, RetryError, PermanentFetchError: roster fetch failed
    """
    if pipeline not in PIPELINES:
        raise ValueError(f"Unknown pipeline {pipeline!r}, expected one of {', '.join(PIPELINES)}")

    client = FetchClient(settings, session=session, pause=pause)
    if players is None:
        players = await fetch_roster(client)

    if pipeline == "gamelogs":
        scraper = GameLogScraper(client, policy=policy, today=today)
        season = scraper.start_year
        summarize = None
    else:
        scraper = InjuryScraper(client, policy=policy, today=today)
        season = scraper.current_season
        summarize = _injury_totals

    logger.info(f"Starting {pipeline} scraping", source=scraper.source, season=season)
    orchestrator = BatchOrchestrator(
        batch_size=settings.batch_size,
        batch_delay=settings.batch_delay,
        pause=pause,
    )
    result = await orchestrator.run(players, scraper.resolve, pipeline, season, summarize=summarize)

    logger.info(
        f"{pipeline.capitalize()} scraping complete",
        **result.stats.to_dict(),
        total_players=result.total_players,
    )
    logger.log_metrics_summary()
    return result
