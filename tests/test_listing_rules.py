"""Tests for listing breakdown rules."""
from __future__ import annotations

from breakdown.category import REVENUE_SOURCES, TRAFFIC_SOURCES
from policy.listing_rules import slot_issue, validate_breakdown, validate_breakdowns


def traffic_record(**values) -> dict:
    return {"digitalAssetDetails": {"traffic": dict(values)}}


FULL_TRAFFIC = {
    "organicTrafficPercentage": 40,
    "directTrafficPercentage": 30,
    "referralTrafficPercentage": 10,
    "socialTrafficPercentage": 10,
    "otherTrafficPercentage": 10,
}


class TestSlotIssue:
    """Per-field checks."""

    def test_blank_is_fine(self):
        assert slot_issue("advertising", "") is None
        assert slot_issue("advertising", None) is None

    def test_not_a_number(self):
        assert slot_issue("advertising", "lots") == "advertising: Must be a number"

    def test_out_of_range(self):
        assert slot_issue("advertising", 120) == "advertising: Must be between 0% and 100%"
        assert slot_issue("advertising", "-1") == "advertising: Must be between 0% and 100%"

    def test_in_range(self):
        assert slot_issue("advertising", "55.5") is None


class TestValidateBreakdowns:
    """Whole-record checks."""

    def test_valid_traffic(self):
        assert validate_breakdown(traffic_record(**FULL_TRAFFIC), TRAFFIC_SOURCES) == []

    def test_total_off(self):
        values = dict(FULL_TRAFFIC, otherTrafficPercentage=5)

        issues = validate_breakdown(traffic_record(**values), TRAFFIC_SOURCES)

        assert issues == [
            "Traffic source percentages should add up to 100%. Current total: 95%"
        ]

    def test_partial_breakdown_not_flagged(self):
        issues = validate_breakdown(
            traffic_record(organicTrafficPercentage=30), TRAFFIC_SOURCES
        )
        assert issues == []

    def test_missing_sections_are_fine(self):
        assert validate_breakdowns({}, [TRAFFIC_SOURCES, REVENUE_SOURCES]) == []

    def test_field_and_total_issues_combined(self):
        values = dict(FULL_TRAFFIC, organicTrafficPercentage="abc")

        issues = validate_breakdowns(traffic_record(**values), [TRAFFIC_SOURCES])

        assert issues[0] == "organicTrafficPercentage: Must be a number"
        # unparseable input counts as 0 towards the total
        assert issues[1].endswith("Current total: 60%")
