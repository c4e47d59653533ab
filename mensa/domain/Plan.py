"""Plan records as they are stored in the cache and produced by the fetch sources.

Records stay plain JSON dicts end to end; these TypedDicts only describe the
fields the application reads. Anything else in a record (meal texts, prices,
classifiers, ...) is carried along untouched.
"""
from typing import Any, Dict, List, Optional, TypedDict


class DateSpec(TypedDict):
    year: int
    month: int
    day: int


class LineRecord(TypedDict):
    id: Optional[str]
    name: str
    meals: List[Dict[str, Any]]


class PlanRecord(TypedDict):
    id: Optional[str]
    name: str
    date: DateSpec
    lines: List[LineRecord]
