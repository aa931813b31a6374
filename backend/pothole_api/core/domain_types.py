"""Domain Types: enums and identity types shared across gateway, services and tests.

Invariants:
    - All valid categorical states encoded as Enums; breakdown buckets derive from them
    - Bucket order follows enum declaration order (most severe first)
    - ReportId wraps UUID; never pass a bare string id into the repository

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ReportId = NewType("ReportId", UUID)
OrganizationId = NewType("OrganizationId", int)

# Version stamped on every pothole prediction and echoed by the predictions envelope
PREDICTION_MODEL_VERSION = "v1.0"


# ─── Enums ───────────────────────────────────────────────────────

class ReportStatus(str, Enum):
    """Pothole report lifecycle; maps to the `status` column."""
    NEW = "new"
    CONFIRMED = "confirmed"
    FIXED = "fixed"


class AlertSeverity(str, Enum):
    """Severity shared by accountability and weather alerts."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(str, Enum):
    """Freeze-thaw cycle risk."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class OrganizationType(str, Enum):
    GOVERNMENT = "government"
    NONPROFIT = "nonprofit"
    CIVIC_TECH = "civic_tech"
    ADVOCACY = "advocacy"


class RepresentativeLevel(str, Enum):
    FEDERAL = "federal"
    STATE = "state"
    LOCAL = "local"


class ContactMethodType(str, Enum):
    """How a citizen can reach a representative; also the logged contactType."""
    EMAIL = "email"
    PHONE = "phone"
    MAIL = "mail"
    SOCIAL = "social"


class Trend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


FOCUS_AREAS: tuple[str, ...] = (
    "infrastructure",
    "civic_engagement",
    "social_services",
    "emergency_assistance",
    "job_training",
    "digital_equity",
    "civic_tech",
    "open_data",
    "community_development",
    "environmental",
    "transportation",
    "housing",
    "public_safety",
    "education",
    "healthcare",
)


def season_for_month(month: int) -> Season:
    """Meteorological season for a 1-based month."""
    if month in (3, 4, 5):
        return Season.SPRING
    if month in (6, 7, 8):
        return Season.SUMMER
    if month in (9, 10, 11):
        return Season.FALL
    return Season.WINTER
