"""
Runs a per-player coroutine over the whole roster in paced batches.

Players in a batch run concurrently; the next batch starts only after
every player of the current one has finished, and after a pause. One
player raising never stops the run: it is counted as failed.
"""

import asyncio
import math
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .logger import get_logger
from .models import Player, RunResult, RunStats
from .retry import Pause

logger = get_logger()

Resolve = Callable[[Player], Awaitable[Optional[Any]]]
Summarize = Callable[[Mapping[str, Any]], Mapping[str, Any]]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class BatchOrchestrator:
    """
    Args:
        batch_size: Players resolved concurrently per batch
        batch_delay: Seconds to wait between batches
        pause: Awaitable sleep (default asyncio.sleep)
        clock: Returns the run timestamp
    """

    def __init__(
        self,
        batch_size: int = 5,
        batch_delay: float = 4.0,
        pause: Optional[Pause] = None,
        clock: Callable[[], str] = _now,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {batch_size}")
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.pause = pause or asyncio.sleep
        self.clock = clock

    async def run(
        self,
        players: Sequence[Player],
        resolve: Resolve,
        pipeline: str,
        current_season: int,
        summarize: Optional[Summarize] = None,
    ) -> RunResult:
        results: Dict[str, Tuple[Tuple[float, int], Any]] = {}
        resolved = failed = no_match = 0
        total_batches = math.ceil(len(players) / self.batch_size)

        logger.info(f"Processing {len(players)} players in batches of {self.batch_size}")
        for batch_num, start in enumerate(range(0, len(players), self.batch_size), 1):
            batch = players[start:start + self.batch_size]
            labels = ", ".join(f"{p.name} (#{start + i + 1})" for i, p in enumerate(batch))
            logger.info(f"Batch {batch_num}/{total_batches}: {labels}")

            outcomes = await asyncio.gather(*(resolve(p) for p in batch), return_exceptions=True)

            for offset, (player, outcome) in enumerate(zip(batch, outcomes)):
                position = start + offset + 1
                if isinstance(outcome, BaseException):
                    failed += 1
                    logger.record_player_outcome("failed")
                    logger.error(f"#{position}: {player.name} - Error: {outcome}", error_type=type(outcome).__name__)
                elif outcome is None:
                    no_match += 1
                    logger.record_player_outcome("no_match")
                    logger.info(f"#{position}: {player.name} - no valid data")
                elif player.key in results:
                    # Roster order wins: the earlier entry stays, this one is dropped
                    no_match += 1
                    logger.record_player_outcome("no_match")
                    logger.warning(f"#{position}: {player.name} - duplicate player key {player.key}, skipped")
                else:
                    resolved += 1
                    logger.record_player_outcome("resolved")
                    results[player.key] = ((player.rank, position), outcome)
                    logger.info(f"#{position}: {player.name} - done")

            logger.info(
                f"Batch {batch_num} complete. Running total: {resolved} resolved, "
                f"{failed} failed, {no_match} no match"
            )

            if start + self.batch_size < len(players):
                logger.info(f"Waiting {self.batch_delay} seconds before next batch...")
                await self.pause(self.batch_delay)

        # Completion order within a batch is arbitrary; emit in roster rank order
        ordered: List[Tuple[str, Any]] = [
            (key, outcome) for key, (_, outcome) in sorted(results.items(), key=lambda kv: kv[1][0])
        ]
        data = dict(ordered)

        return RunResult(
            pipeline=pipeline,
            timestamp=self.clock(),
            current_season=current_season,
            stats=RunStats(resolved=resolved, failed=failed, no_match=no_match),
            data=data,
            extras=dict(summarize(data)) if summarize else {},
        )
