"""
Candidate acceptance policies.

A policy walks the ordered candidate locators for a player, probes each
one and returns the first outcome it accepts. Walking stops at the first
acceptance; later candidates are never fetched. Swapping the policy
changes how strict identity matching is without touching the pipelines
or the history walk.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional

from .validate import Verdict


@dataclass(frozen=True)
class CandidateOutcome:
    """Result of probing one candidate locator.

    ``payload`` is the pipeline's extracted data, None when the page held
    nothing usable.
    """

    candidate: str
    verdict: Verdict
    payload: Any = None


Probe = Callable[[str], Awaitable[Optional[CandidateOutcome]]]


class CandidatePolicy:
    """Base policy: first accepted page with a payload wins."""

    name = "base"

    def accepts(self, outcome: CandidateOutcome) -> bool:
        return outcome.verdict.accepted and outcome.payload is not None

    async def select(self, candidates: Iterable[str], probe: Probe) -> Optional[CandidateOutcome]:
        for candidate in candidates:
            outcome = await probe(candidate)
            if outcome is not None and self.accepts(outcome):
                return outcome
        return None


class GreedyPolicy(CandidatePolicy):
    """Accept the first page that validates, even if its position differs.

    Positions on the roster are sometimes stale (position changes, TE
    listed as WR), so a mismatch is tolerated. Common names can resolve
    to the wrong player under this policy.
    """

    name = "greedy"


class StrictCategoryPolicy(CandidatePolicy):
    """Reject pages whose detected position differs from the roster's."""

    name = "strict"

    def accepts(self, outcome: CandidateOutcome) -> bool:
        return super().accepts(outcome) and not outcome.verdict.category_mismatch


POLICIES = {
    GreedyPolicy.name: GreedyPolicy,
    StrictCategoryPolicy.name: StrictCategoryPolicy,
}
