"""
Heuristic check that a fetched page is the intended player's page.

Source sites answer unknown slugs with a soft 404, a landing page or a
different player who happens to share the name, so an HTTP 200 proves
nothing. Checks run in order:

1. Too-short pages and pages containing a not-found phrase -> NOT_FOUND
2. Pages without any player-profile section marker -> WRONG_ENTITY
3. Position detected from the page header is compared with the expected
   one; a mismatch is only flagged, the caller decides (see evaluator.py)

False positives remain possible for players sharing a name and
position. That is a known limitation of slug-based lookup.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from .models import Category


class VerdictStatus(str, Enum):
    ACCEPTED = "accepted"
    WRONG_ENTITY = "wrong_entity"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Verdict:
    status: VerdictStatus
    detected_category: Optional[Category] = None
    category_mismatch: bool = False

    @property
    def accepted(self) -> bool:
        return self.status == VerdictStatus.ACCEPTED


@dataclass(frozen=True)
class PageRules:
    """Validation thresholds and phrases for one source site."""

    min_length: int
    not_found_phrases: Tuple[str, ...]
    # Matched case-sensitively against the page text
    section_markers: Tuple[str, ...]
    header_selectors: str = ".entity-header-wrapper, .player-header, h1, h2"


INJURY_PAGE_RULES = PageRules(
    min_length=500,
    not_found_phrases=("page not found", "404 error", "does not exist"),
    section_markers=("INJURIES", "STATS", "GAME LOG", "NEWS"),
)

GAMELOG_PAGE_RULES = PageRules(
    min_length=200,
    not_found_phrases=("does not have any game data", "no games found", "player not found"),
    section_markers=("Game Log", "Totals", "Stats"),
)

# Longer phrases first so 'WIDE RECEIVER' wins over a stray 'WR'
POSITION_PHRASES: Sequence[Tuple[str, Category]] = (
    ("QUARTERBACK", Category.QB),
    ("RUNNING BACK", Category.RB),
    ("WIDE RECEIVER", Category.WR),
    ("TIGHT END", Category.TE),
    ("QB", Category.QB),
    ("RB", Category.RB),
    ("WR", Category.WR),
    ("TE", Category.TE),
)


def detect_page_category(soup: BeautifulSoup, rules: PageRules) -> Optional[Category]:
    """Find the player's position in the page header (falls back to the body)."""
    header_text = " ".join(el.get_text(" ", strip=True) for el in soup.select(rules.header_selectors))
    for text in (header_text, soup.get_text(" ", strip=True)):
        text = text.upper()
        if not text:
            continue
        for phrase, category in POSITION_PHRASES:
            if re.search(rf"\b{phrase}\b", text):
                return category
    return None


def validate_page(html: str, rules: PageRules, expected: Optional[Category] = None) -> Verdict:
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body or soup
    text = body.get_text(" ", strip=True)
    lowered = text.lower()

    if len(text) < rules.min_length:
        return Verdict(VerdictStatus.NOT_FOUND)
    if any(phrase in lowered for phrase in rules.not_found_phrases):
        return Verdict(VerdictStatus.NOT_FOUND)

    if not any(marker in text for marker in rules.section_markers):
        return Verdict(VerdictStatus.WRONG_ENTITY)

    detected = detect_page_category(soup, rules)
    mismatch = expected is not None and detected is not None and detected != expected
    return Verdict(VerdictStatus.ACCEPTED, detected_category=detected, category_mismatch=mismatch)
