"""Tests for per-category breakdown counts: zero-filled, unknowns excluded."""

from pothole_api.core.breakdowns import (
    count_by,
    organization_type_breakdown,
    risk_level_breakdown,
    severity_breakdown,
)
from pothole_api.core.domain_types import AlertSeverity


def test_severity_breakdown_counts_each_level():
    severities = [
        "critical", "critical", "high", "medium", "low",
        "low", "low", "high", "medium", "critical",
    ]
    alerts = [{"severity": s} for s in severities]
    assert severity_breakdown(alerts) == {
        "critical": 3, "high": 2, "medium": 2, "low": 3,
    }


def test_empty_collection_is_zero_filled():
    assert severity_breakdown([]) == {"critical": 0, "high": 0, "medium": 0, "low": 0}
    assert risk_level_breakdown([]) == {"high": 0, "medium": 0, "low": 0}


def test_unknown_and_missing_values_land_in_no_bucket():
    alerts = [{"severity": "severe"}, {"message": "no severity"}, {"severity": "low"}]
    counts = severity_breakdown(alerts)
    assert counts == {"critical": 0, "high": 0, "medium": 0, "low": 1}
    assert sum(counts.values()) < len(alerts)


def test_enum_values_are_unwrapped():
    alerts = [{"severity": AlertSeverity.HIGH}, {"severity": "high"}]
    assert severity_breakdown(alerts)["high"] == 2


def test_risk_levels_read_camel_case_key():
    cycles = [{"riskLevel": "high"}, {"riskLevel": "low"}, {"risk_level": "high"}]
    assert risk_level_breakdown(cycles) == {"high": 1, "medium": 0, "low": 1}


def test_organization_types():
    orgs = [{"type": "civic_tech"}, {"type": "civic_tech"}, {"type": "government"}]
    assert organization_type_breakdown(orgs) == {
        "government": 1, "nonprofit": 0, "civic_tech": 2, "advocacy": 0,
    }


def test_count_by_preserves_category_order():
    counts = count_by([{"k": "b"}], "k", ["c", "b", "a"])
    assert list(counts) == ["c", "b", "a"]
