"""
Scalar value types for Open Graph records: determiners and temporal values.

Both parsers are lenient: anything that does not match the expected literal
returns ``None`` so the enclosing record simply leaves the field unset.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

# Straight and curly, single and double quotation marks.
_QUOTATION_MARKS = frozenset({'"', "'", "‘", "’", "“", "”"})

_TEMPORAL_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})(?:T([0-9]{2}):([0-9]{2}))?")


class Determiner(Enum):
    """The word that appears before an object's title in a sentence."""

    A = "a"
    AN = "an"
    BLANK = ""
    THE = "the"
    QUOTES = '"'
    AUTO = "auto"

    @classmethod
    def parse(cls, value: str) -> Optional[Determiner]:
        """Match ``value`` case-insensitively, or return None."""
        if value in _QUOTATION_MARKS:
            return cls.QUOTES
        try:
            return cls(value.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class TemporalValue:
    """A partial date: year, month and day, optionally hour and minute."""

    year: int
    month: int
    day: int
    hour: Optional[int] = None
    minute: Optional[int] = None

    @classmethod
    def parse(cls, literal: str) -> Optional[TemporalValue]:
        """
        Parse a ``YYYY-MM-DD[THH:MM]`` literal.

        Only the leading fixed-width fields are read, so full ISO 8601 values
        such as ``2023-12-01T10:00:00Z`` decompose to their date, hour and
        minute. Out-of-range components (month 13, 25:00) are rejected.
        """
        match = _TEMPORAL_PATTERN.match(literal.strip())
        if match is None:
            return None

        year, month, day = (int(part) for part in match.group(1, 2, 3))
        try:
            date(year, month, day)
        except ValueError:
            return None

        hour: Optional[int] = None
        minute: Optional[int] = None
        if match.group(4) is not None:
            hour, minute = int(match.group(4)), int(match.group(5))
            if hour > 23 or minute > 59:
                return None

        return cls(year=year, month=month, day=day, hour=hour, minute=minute)

    def to_datetime(self) -> datetime:
        """Return a naive datetime; missing time components become zero."""
        return datetime(self.year, self.month, self.day, self.hour or 0, self.minute or 0)

    def __str__(self) -> str:
        text = f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
        if self.hour is not None:
            text += f"T{self.hour:02d}:{self.minute or 0:02d}"
        return text
