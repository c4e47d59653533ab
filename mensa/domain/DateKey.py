"""DateKey value type: the calendar date a plan belongs to.

``month`` is zero-based (0 = January), the same convention the upstream
data source uses for the ``date`` object inside every plan record. Only the
canonical string form ``YYYY-MM-DD`` uses the usual one-based month.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date as _date
from typing import Any, Mapping, Optional

from mensa.utilities.constants import DATE_PATTERN


class InvalidDateError(ValueError):
    """Raised for strings or triples that are not a valid calendar date."""


@dataclass(frozen=True, order=True)
class DateKey:
    year: int
    month: int
    day: int

    def __post_init__(self):
        try:
            _date(self.year, self.month + 1, self.day)
        except (TypeError, ValueError) as e:
            raise InvalidDateError(f"invalid date {self.year}/{self.month}/{self.day}: {e}") from None

    @classmethod
    def parse(cls, text: str) -> DateKey:
        """Parse ``YYYY-MM-DD`` strictly (fixed width, real calendar date)."""
        match = DATE_PATTERN.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise InvalidDateError(f"malformed date string: {text!r}")
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month - 1, day)

    @classmethod
    def try_parse(cls, text: str) -> Optional[DateKey]:
        try:
            return cls.parse(text)
        except InvalidDateError:
            return None

    @classmethod
    def from_date(cls, value: _date) -> DateKey:
        return cls(value.year, value.month - 1, value.day)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DateKey:
        try:
            return cls(int(data["year"]), int(data["month"]), int(data["day"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDateError(f"invalid date object: {data!r}") from e

    @classmethod
    def today(cls) -> DateKey:
        return cls.from_date(_date.today())

    def to_date(self) -> _date:
        return _date(self.year, self.month + 1, self.day)

    def to_dict(self) -> dict:
        return {"year": self.year, "month": self.month, "day": self.day}

    def format(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.format()
