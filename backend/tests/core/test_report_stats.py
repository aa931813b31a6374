"""Tests for report statistics: pure derivations, no IO."""

from datetime import datetime, timezone

from pothole_api.core.report_stats import compute_activity_stats, summarize_report_counts


def _report(status, day, hour=12):
    return {
        "status": status,
        "created_at": datetime(2024, 3, day, hour, tzinfo=timezone.utc).isoformat(),
    }


def test_summary_with_twenty_reports():
    stats = summarize_report_counts(
        {"total": 20, "new": 12, "confirmed": 5, "fixed": 3, "active_days": 6},
    )
    assert stats == {
        "totalReports": 20,
        "newReports": 12,
        "confirmedReports": 5,
        "fixedReports": 3,
        "activeDays": 6,
        "communityMembers": 14,
        "activeAreas": 4,
    }


def test_summary_rounds_areas_up_and_members_down():
    stats = summarize_report_counts({"total": 7})
    assert stats["communityMembers"] == 4  # floor(4.9)
    assert stats["activeAreas"] == 2  # ceil(1.4)


def test_summary_treats_missing_and_null_counts_as_zero():
    stats = summarize_report_counts({"total": None})
    assert stats["totalReports"] == 0
    assert stats["newReports"] == 0
    assert stats["communityMembers"] == 0
    assert stats["activeAreas"] == 0


def test_activity_stats_for_no_reports():
    stats = compute_activity_stats([])
    assert stats["totalReports"] == 0
    assert stats["activeDays"] == 0
    assert stats["avgReportsPerDay"] == 0
    assert stats["lastReportTime"] is None
    assert stats["communityMembers"] == 12
    assert stats["impactScore"] == 0


def test_activity_stats_buckets_statuses():
    reports = [
        _report("new", 1), _report("new", 1, 15), _report("confirmed", 2),
        _report("fixed", 3), _report("archived", 3),
    ]
    stats = compute_activity_stats(reports)
    assert stats["totalReports"] == 5
    assert stats["reportedCount"] == 2
    assert stats["inProgressCount"] == 1
    assert stats["fixedCount"] == 1
    assert stats["activeDays"] == 3
    assert stats["avgReportsPerDay"] == 2  # 5 / 3 rounds to 2
    assert stats["lastReportTime"] == "2024-03-03T12:00:00+00:00"
    assert stats["impactScore"] == 65  # 5 * 8 + 1 * 25


def test_activity_stats_caps_impact_score():
    reports = [_report("fixed", d) for d in range(1, 11)]
    assert compute_activity_stats(reports)["impactScore"] == 100


def test_activity_stats_accepts_datetimes():
    reports = [{"status": "new", "created_at": datetime(2024, 5, 1, tzinfo=timezone.utc)}]
    stats = compute_activity_stats(reports)
    assert stats["activeDays"] == 1
    assert stats["lastReportTime"] == "2024-05-01T00:00:00+00:00"
