"""
RFC 3339 timestamp normalization.

Client requests carry start times as RFC 3339 text with an explicit offset.
Everything stored and compared by the repository is an aware datetime in UTC.
"""

import re
from datetime import datetime, timezone

from api.src.errors import InvalidTimestamp

# date-time = full-date "T" full-time; "t" and a single space are accepted too
_RFC3339_PATTERN = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"[Tt ]"
    r"(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?P<fraction>\.\d+)?"
    r"(?P<offset>[Zz]|[+-](?:[01]\d|2[0-3]):[0-5]\d)$",
    re.ASCII,
)


def parse_rfc3339(value: str) -> datetime:
    """
    Parse RFC 3339 text and return the same instant in UTC.

    Args:
        value: Timestamp text, e.g. ``2024-05-01T09:30:00+07:00``

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        InvalidTimestamp: If the text is not RFC 3339 (missing offset,
            invalid calendar fields, wrong separators)
    """
    if not isinstance(value, str):
        raise InvalidTimestamp(repr(value), "expected text")

    match = _RFC3339_PATTERN.match(value)
    if match is None:
        raise InvalidTimestamp(value)

    offset = match.group("offset")
    if offset in ("Z", "z"):
        offset = "+00:00"

    fraction = match.group("fraction") or ""
    # datetime keeps microseconds only
    fraction = fraction[:7]

    normalized = f"{match.group('date')}T{match.group('time')}{fraction}{offset}"
    try:
        # the UTC instant can fall outside year 1..9999 near either end
        return datetime.fromisoformat(normalized).astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise InvalidTimestamp(value, str(e)) from e


def to_rfc3339(value: datetime) -> str:
    """Format an aware datetime as RFC 3339 in UTC with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def utc_now() -> datetime:
    """Current instant in UTC."""
    return datetime.now(timezone.utc)
