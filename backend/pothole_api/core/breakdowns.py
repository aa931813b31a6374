"""Breakdowns: per-category counts over a returned collection.

Invariants:
    - Output has exactly one key per known category, in the order given, zero-filled
    - Items whose discriminant is missing or not a known category land in no bucket
    - sum(counts) <= len(items); equal when every value is known

Design Decisions:
    - Unknown values are excluded rather than surfaced as an "other" bucket, matching
      what existing clients already render
    - Accepts mappings only: services hand the gateway plain dicts
"""

from collections.abc import Iterable, Mapping
from enum import Enum

from pothole_api.core.domain_types import AlertSeverity, OrganizationType, RiskLevel


def count_by(
    items: Iterable[Mapping], discriminant: str, categories: Iterable[str],
) -> dict[str, int]:
    """Count items per known category of `discriminant`."""
    counts = {category: 0 for category in categories}
    for item in items:
        value = item.get(discriminant)
        if isinstance(value, Enum):
            value = value.value
        if value in counts:
            counts[value] += 1
    return counts


def severity_breakdown(alerts: Iterable[Mapping]) -> dict[str, int]:
    return count_by(alerts, "severity", [s.value for s in AlertSeverity])


def risk_level_breakdown(cycles: Iterable[Mapping]) -> dict[str, int]:
    return count_by(cycles, "riskLevel", [r.value for r in RiskLevel])


def organization_type_breakdown(organizations: Iterable[Mapping]) -> dict[str, int]:
    return count_by(organizations, "type", [t.value for t in OrganizationType])
