"""
Candidate locators for player pages.

Source sites address players by a slug derived from the display name,
with a numeric or generational suffix when several players share a
name. We cannot know which applies, so each grammar yields an ordered
list of guesses, most likely first.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import Category
from .normalize import slugify

# Disambiguation suffixes in priority order ("" = bare slug)
NUMERIC_SUFFIXES = ("2", "3")
GENERATIONAL_SUFFIXES = ("jr", "sr")
CATEGORY_SUFFIX = "{category}"


@dataclass(frozen=True)
class CandidateGrammar:
    """
    How one source site spells player locators.

    Args:
        name: Grammar name used in logs and metrics
        suffixes: Ordered disambiguation suffixes; CATEGORY_SUFFIX stands
            for the player's position
        topic: Fixed trailing path segment (e.g. 'player-injuries')
        url_template: Format string with {candidate} and optionally {season}
    """

    name: str
    suffixes: Sequence[str]
    url_template: str
    topic: str = ""

    def candidates(self, name: str, category: Optional[Category] = None) -> List[str]:
        """Return the ordered, deduplicated candidate slugs for a player name."""
        base = slugify(name)
        if not base:
            return []

        result: List[str] = []
        for suffix in self.suffixes:
            if suffix == CATEGORY_SUFFIX:
                if category is None:
                    continue
                suffix = category.value.lower()
            parts = [base]
            if suffix:
                parts.append(suffix)
            if self.topic:
                parts.append(self.topic)
            candidate = "-".join(parts)
            if candidate not in result:
                result.append(candidate)
        return result

    def locate(self, candidate: str, season: Optional[int] = None) -> str:
        return self.url_template.format(candidate=candidate, season=season)


INJURY_GRAMMAR = CandidateGrammar(
    name="foxsports",
    suffixes=("",) + NUMERIC_SUFFIXES + GENERATIONAL_SUFFIXES,
    topic="player-injuries",
    url_template="https://www.foxsports.com/nfl/{candidate}",
)

GAMELOG_GRAMMAR = CandidateGrammar(
    name="fantasypros",
    suffixes=("", CATEGORY_SUFFIX),
    url_template="https://www.fantasypros.com/nfl/games/{candidate}.php?season={season}",
)

GRAMMARS = {
    "injuries": INJURY_GRAMMAR,
    "gamelogs": GAMELOG_GRAMMAR,
}
