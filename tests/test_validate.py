"""
Tests for player page validation.
"""

from careerlog.models import Category
from careerlog.validate import (
    GAMELOG_PAGE_RULES,
    INJURY_PAGE_RULES,
    VerdictStatus,
    validate_page,
)


class TestNotFound:
    def test_short_page_is_not_found(self, not_found_html):
        verdict = validate_page(not_found_html, INJURY_PAGE_RULES)
        assert verdict.status == VerdictStatus.NOT_FOUND
        assert not verdict.accepted

    def test_not_found_phrase_on_long_page(self, injury_page_html):
        html = injury_page_html.replace("</body>", "<p>This player does not exist.</p></body>")
        verdict = validate_page(html, INJURY_PAGE_RULES)
        assert verdict.status == VerdictStatus.NOT_FOUND

    def test_no_game_data_message(self, qb_gamelog_html):
        html = qb_gamelog_html.replace("</body>", "<p>Josh Allen does not have any game data for 2012.</p></body>")
        assert validate_page(html, GAMELOG_PAGE_RULES).status == VerdictStatus.NOT_FOUND


class TestSectionMarkers:
    def test_landing_page_is_wrong_entity(self):
        html = "<html><body><h1>Welcome</h1><p>" + "Latest headlines from around the league. " * 20 + "</p></body></html>"
        verdict = validate_page(html, INJURY_PAGE_RULES)
        assert verdict.status == VerdictStatus.WRONG_ENTITY

    def test_markers_are_case_sensitive(self):
        html = "<html><body><p>" + "injuries and news in lower case only. " * 20 + "</p></body></html>"
        assert validate_page(html, INJURY_PAGE_RULES).status == VerdictStatus.WRONG_ENTITY


class TestCategoryDetection:
    def test_accepts_and_detects_category(self, injury_page_html):
        verdict = validate_page(injury_page_html, INJURY_PAGE_RULES, expected=Category.QB)
        assert verdict.accepted
        assert verdict.detected_category == Category.QB
        assert not verdict.category_mismatch

    def test_mismatch_is_flagged_not_rejected(self, injury_page_html):
        verdict = validate_page(injury_page_html, INJURY_PAGE_RULES, expected=Category.WR)
        assert verdict.accepted
        assert verdict.category_mismatch

    def test_no_expected_category_never_mismatches(self, injury_page_html):
        verdict = validate_page(injury_page_html, INJURY_PAGE_RULES)
        assert verdict.accepted
        assert not verdict.category_mismatch

    def test_gamelog_header_abbreviation(self, wr_gamelog_html):
        verdict = validate_page(wr_gamelog_html, GAMELOG_PAGE_RULES, expected=Category.WR)
        assert verdict.accepted
        assert verdict.detected_category == Category.WR

    def test_abbreviation_inside_word_is_ignored(self):
        html = (
            "<html><body><h1>Justin Herbert</h1><p>STATS</p><p>"
            + "Quarterback of the Chargers since the 2020 draft. " * 12
            + "</p></body></html>"
        )
        verdict = validate_page(html, INJURY_PAGE_RULES, expected=Category.QB)
        assert verdict.accepted
        assert verdict.detected_category == Category.QB
