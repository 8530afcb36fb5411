"""Pure helpers for timestamps and identifiers."""

from .timestamps import parse_rfc3339, to_rfc3339, utc_now
from .identifiers import parse_object_id

__all__ = ["parse_rfc3339", "to_rfc3339", "utc_now", "parse_object_id"]
