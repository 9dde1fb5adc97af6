"""
Ranked player list from the ADP API.

The API runs on a free tier that hibernates when idle and answers 503
until it wakes up, which is why the fetch uses the long retry delay.
"""

import json
from typing import Any, Dict, List, Optional

from .errors import RosterSchemaError
from .logger import get_logger
from .models import Category, Player
from .normalize import normalize_position
from .schema import validate_roster_payload
from .scrapers.common import FetchClient

logger = get_logger()

SKILL_POSITIONS = (Category.QB, Category.RB, Category.WR, Category.TE)


def parse_roster(data: Dict[str, Any], limit: Optional[int] = None) -> List[Player]:
    """Validate an API payload and return skill-position players in rank order.

    Raises:
        RosterSchemaError: If the payload does not have the expected shape
    """
    errors = validate_roster_payload(data)
    if errors:
        raise RosterSchemaError(errors)

    players: List[Player] = []
    for i, entry in enumerate(data["players"]):
        category = normalize_position(entry.get("position") or "")
        if category not in SKILL_POSITIONS:
            continue
        rank = entry.get("adp") or entry.get("overallRank") or i + 1
        players.append(Player(
            name=entry["name"].strip(),
            category=category,
            affiliation=entry.get("team") or "",
            rank=rank,
        ))
        if limit is not None and len(players) >= limit:
            break

    logger.info(f"Found {len(data['players'])} total players, {len(players)} skill position players kept")
    return players


async def fetch_roster(client: FetchClient, url: Optional[str] = None, limit: Optional[int] = None) -> List[Player]:
    """Fetch and parse the ranked list.

    Raises:
        RetryError: API still unavailable after all attempts
        PermanentFetchError: API answered with a non-retryable error
        RosterSchemaError: Response is not the expected JSON shape
    """
    settings = client.settings
    url = url or settings.roster_url
    logger.info("Fetching ADP data", url=url)
    page = await client.fetch(url, timeout=settings.roster_timeout, source="roster")
    try:
        data = json.loads(page.text)
    except json.JSONDecodeError as e:
        raise RosterSchemaError([f"Response is not valid JSON: {e}"])
    return parse_roster(data, limit if limit is not None else settings.roster_limit)
