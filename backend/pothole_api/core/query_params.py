"""Query Parameters: pure parsing and validation of raw request strings.

Invariants:
    - Every function takes the raw string (or None) exactly as received
    - Failures raise ParameterValidationError/MissingParameterError carrying the client message
    - Absent optional values yield the default (or None); blank strings count as absent
    - Integers are parsed strictly: "7abc", "1.5" and "" are rejected, never truncated
    - Integers past the interpreter digit limit and dates whose UTC instant leaves
      years 1..9999 are rejected with the same client message

Design Decisions:
    - Validation in core, not as FastAPI Query constraints: messages are per-route
      and must name the parameter exactly as clients know it
    - Dates are parsed with datetime.fromisoformat and normalized to UTC so the echoed
      value is always an unambiguous ISO string
"""

import math
import re
from datetime import datetime, timezone

from pothole_api.core.errors import MissingParameterError, ParameterValidationError

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def require_text(value: str | None, parameter: str, message: str) -> str:
    """Return the stripped value or raise MissingParameterError."""
    if _blank(value):
        raise MissingParameterError(message, parameter)
    return value.strip()


def optional_text(value: str | None) -> str | None:
    return None if _blank(value) else value.strip()


def parse_optional_int(value: str | None, parameter: str, message: str) -> int | None:
    if _blank(value):
        return None
    raw = value.strip()
    if not _INTEGER.fullmatch(raw):
        raise ParameterValidationError(message, parameter)
    try:
        return int(raw)
    except ValueError:
        # beyond the interpreter's int digit limit
        raise ParameterValidationError(message, parameter)


def parse_bounded_int(
    value: str | None,
    parameter: str,
    *,
    default: int,
    minimum: int,
    maximum: int | None,
    message: str,
) -> int:
    """Parse an integer within [minimum, maximum]; one message covers both failures."""
    parsed = parse_optional_int(value, parameter, message)
    if parsed is None:
        return default
    if parsed < minimum or (maximum is not None and parsed > maximum):
        raise ParameterValidationError(message, parameter)
    return parsed


def parse_optional_float(value: str | None, parameter: str, message: str) -> float | None:
    if _blank(value):
        return None
    try:
        parsed = float(value.strip())
    except ValueError:
        raise ParameterValidationError(message, parameter)
    if not math.isfinite(parsed):
        raise ParameterValidationError(message, parameter)
    return parsed


def parse_optional_date(value: str | None, parameter: str, message: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    if _blank(value):
        return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        # OverflowError: offsets that push the UTC instant past year 1..9999
        raise ParameterValidationError(message, parameter)


def parse_csv_list(value: str | None) -> list[str]:
    """Split a comma-separated list, dropping blanks."""
    if _blank(value):
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


CITY_REQUIRED = "City parameter is required"


def require_city(value: str | None) -> str:
    return require_text(value, "city", CITY_REQUIRED)


def current_fiscal_year() -> int:
    return datetime.now(timezone.utc).year
