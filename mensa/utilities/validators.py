"""
Response schemas (pydantic) and request parameter parsing for the HTTP layer.
"""
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field


class PlanSummary(BaseModel):
    """One entry of the plan listing: only the date a plan exists for."""
    date: Dict[str, int]


class CanteenRef(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None


class PlanDetail(BaseModel):
    """A cached plan as presented by the API.

    ``lines`` is passed through as stored, so meal entries keep every field.
    """
    canteen: CanteenRef
    date: Dict[str, Any]
    lines: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "PlanDetail":
        return cls(
            canteen=CanteenRef(id=record.get("id"), name=record.get("name")),
            date=record.get("date") or {},
            lines=record.get("lines") or [],
        )


def parse_comma_filter(value: Optional[str], allowed: Iterable[str]) -> Optional[List[str]]:
    """Split 'a,b,a' into unique entries ['a', 'b'], all of which must be allowed.

    Returns None for empty input or when any entry is not allowed.
    """
    if not value:
        return None
    allowed_set = set(allowed)
    items = list(dict.fromkeys(value.split(',')))
    if not all(item in allowed_set for item in items):
        return None
    return items
