"""Domain Types: enum vocabularies and season mapping."""

import pytest

from pothole_api.core.domain_types import (
    FOCUS_AREAS,
    AlertSeverity,
    OrganizationType,
    ReportStatus,
    Season,
    season_for_month,
)


def test_report_status_values():
    assert [s.value for s in ReportStatus] == ["new", "confirmed", "fixed"]


def test_alert_severity_order():
    assert [s.value for s in AlertSeverity] == ["critical", "high", "medium", "low"]


def test_organization_types():
    assert {t.value for t in OrganizationType} == {
        "government", "nonprofit", "civic_tech", "advocacy",
    }


def test_fifteen_unique_focus_areas():
    assert len(FOCUS_AREAS) == 15
    assert len(set(FOCUS_AREAS)) == 15


@pytest.mark.parametrize("month, season", [
    (1, Season.WINTER), (3, Season.SPRING), (7, Season.SUMMER),
    (10, Season.FALL), (12, Season.WINTER),
])
def test_season_for_month(month, season):
    assert season_for_month(month) == season
