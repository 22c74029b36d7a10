"""Typed access to the front matter of a single source file."""

import calendar
import datetime
from collections.abc import Mapping
from typing import Any

from . import errors

DISPLAY_DATE_FORMAT = '{d:%B} {d.day}, {d.year}'


def format_date(value: datetime.date) -> str:
    """Format a date in long form, e.g. ``January 2, 2006``."""
    return DISPLAY_DATE_FORMAT.format(d=value)


def to_timestamp(value: datetime.date) -> int:
    """UNIX timestamp of a date (midnight UTC) or of a datetime (naive is UTC)."""
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.UTC)
        return int(value.timestamp())
    return calendar.timegm(value.timetuple())


class MetadataExtractor:
    """Extracts typed fields from a raw front matter mapping.

    ``label`` names the source in error messages (usually its slug).
    Values of the wrong type raise FieldTypeError instead of being coerced.
    """

    def __init__(self, metadata: Mapping[str, Any], label: str) -> None:
        self.metadata = metadata
        self.label = label

    def exists(self, key: str) -> bool:
        return key in self.metadata

    def get_bool(self, key: str, default: bool) -> bool:
        if not self.exists(key):
            return default
        return self._typed(key, bool)

    def get_string(self, key: str, default: str) -> str:
        if not self.exists(key):
            return default
        return self._typed(key, str)

    def require_string(self, key: str) -> str:
        if not self.exists(key):
            raise errors.MissingFieldError(key, self.label)
        return self._typed(key, str)

    def get_date(self, key: str) -> tuple[str, int]:
        """Return ``(display, timestamp)``, or ``('', 0)`` when the key is absent."""
        if not self.exists(key):
            return '', 0
        return self._parse_date(key)

    def require_date(self, key: str) -> tuple[str, int]:
        if not self.exists(key):
            raise errors.MissingFieldError(key, self.label)
        return self._parse_date(key)

    def _typed(self, key: str, expected: type) -> Any:
        value = self.metadata[key]
        if not isinstance(value, expected):
            raise errors.FieldTypeError(key, self.label, expected, value)
        return value

    def _parse_date(self, key: str) -> tuple[str, int]:
        raw = self.metadata[key]
        if isinstance(raw, datetime.date):
            value = raw
        elif isinstance(raw, str):
            # Strings are date-only; a time component is rejected.
            try:
                value = datetime.date.fromisoformat(raw.strip())
            except ValueError:
                raise errors.InvalidDateError(key, self.label, raw) from None
        else:
            raise errors.InvalidDateError(key, self.label, raw)
        return format_date(value), to_timestamp(value)
