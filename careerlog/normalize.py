import re

from .models import Category


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def slugify(name: str) -> str:
    """Turn a display name into a URL slug: 'Ja'Marr Chase' -> 'jamarr-chase'."""
    s = name.lower()
    s = re.sub(r"[.']", "", s)
    s = re.sub(r"[^a-z\s]", "", s)
    s = "-".join(s.split())
    return s.strip("-")


POSITION_SYNS = {
    "quarterback": Category.QB,
    "running back": Category.RB,
    "halfback": Category.RB,
    "wide receiver": Category.WR,
    "tight end": Category.TE,
}


def normalize_position(position: str) -> Category | None:
    pos = normalize_text(position)
    if pos in POSITION_SYNS:
        return POSITION_SYNS[pos]
    return Category.parse(pos)
