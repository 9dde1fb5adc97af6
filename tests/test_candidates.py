"""
Tests for slug normalization and candidate locator grammars.
"""

import pytest

from careerlog.candidates import GAMELOG_GRAMMAR, INJURY_GRAMMAR
from careerlog.models import Category
from careerlog.normalize import normalize_position, slugify


class TestSlugify:
    """Test display name -> slug normalization."""

    @pytest.mark.parametrize("name,expected", [
        ("Josh Allen", "josh-allen"),
        ("Ja'Marr Chase", "jamarr-chase"),
        ("A.J. Brown", "aj-brown"),
        ("D.K. Metcalf", "dk-metcalf"),
        ("Odell Beckham Jr.", "odell-beckham-jr"),
        ("Amon-Ra St. Brown", "amonra-st-brown"),
        ("  Kenneth   Walker III ", "kenneth-walker-iii"),
        ("Marvin Harrison Jr", "marvin-harrison-jr"),
    ])
    def test_known_names(self, name, expected):
        assert slugify(name) == expected

    def test_strips_digits_and_symbols(self):
        assert slugify("Player #1 (rookie)") == "player-rookie"

    def test_empty_name(self):
        assert slugify("") == ""
        assert slugify(" . ' ") == ""


class TestCandidateGrammars:
    """Test candidate ordering and determinism."""

    def test_injury_candidates_in_priority_order(self):
        assert INJURY_GRAMMAR.candidates("Josh Allen") == [
            "josh-allen-player-injuries",
            "josh-allen-2-player-injuries",
            "josh-allen-3-player-injuries",
            "josh-allen-jr-player-injuries",
            "josh-allen-sr-player-injuries",
        ]

    def test_injury_candidates_ignore_category(self):
        assert INJURY_GRAMMAR.candidates("Josh Allen", Category.QB) == INJURY_GRAMMAR.candidates("Josh Allen")

    def test_gamelog_candidates_add_category_suffix(self):
        assert GAMELOG_GRAMMAR.candidates("Josh Allen", Category.QB) == ["josh-allen", "josh-allen-qb"]

    def test_gamelog_candidates_without_category(self):
        assert GAMELOG_GRAMMAR.candidates("Josh Allen") == ["josh-allen"]

    def test_empty_slug_yields_nothing(self):
        assert GAMELOG_GRAMMAR.candidates("...", Category.WR) == []
        assert INJURY_GRAMMAR.candidates("") == []

    def test_deterministic(self):
        for grammar in (INJURY_GRAMMAR, GAMELOG_GRAMMAR):
            first = grammar.candidates("Amon-Ra St. Brown", Category.WR)
            assert all(grammar.candidates("Amon-Ra St. Brown", Category.WR) == first for _ in range(5))

    def test_no_duplicates(self):
        for grammar in (INJURY_GRAMMAR, GAMELOG_GRAMMAR):
            candidates = grammar.candidates("Travis Kelce", Category.TE)
            assert len(candidates) == len(set(candidates))

    @pytest.mark.parametrize("name", [
        "Josh Allen", "A.J. Brown", "Ja'Marr Chase", "D'Andre Swift",
        "T.J.  Hockenson", " C. J. Stroud ", "De'Von Achane.", "o'neil'l  ..  smith",
    ])
    def test_first_candidate_is_clean(self, name):
        for grammar in (INJURY_GRAMMAR, GAMELOG_GRAMMAR):
            first = grammar.candidates(name, Category.RB)[0]
            assert "--" not in first
            assert not first.startswith("-") and not first.endswith("-")
            assert all(c.islower() or c.isdigit() or c == "-" for c in first)

    def test_locate_builds_urls(self):
        assert GAMELOG_GRAMMAR.locate("josh-allen", season=2023) == (
            "https://www.fantasypros.com/nfl/games/josh-allen.php?season=2023"
        )
        assert INJURY_GRAMMAR.locate("josh-allen-player-injuries") == (
            "https://www.foxsports.com/nfl/josh-allen-player-injuries"
        )


class TestNormalizePosition:
    def test_abbreviations_and_long_forms(self):
        assert normalize_position("qb") == Category.QB
        assert normalize_position(" Wide  Receiver ") == Category.WR
        assert normalize_position("TE") == Category.TE

    def test_unknown(self):
        assert normalize_position("K") is None
        assert normalize_position("") is None
