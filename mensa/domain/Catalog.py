"""Reference catalog of canteens, their lines and the meal legend.

The catalog is read-only. It is used by the HTTP layer to describe canteens
and by the fixup pass to resolve ids from the human-readable names stored in
plans fetched before those names were known.
"""
from __future__ import annotations

import json
import logging
import re
import unicodedata
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import BaseModel, Field

from mensa.infra.paths import CANTEENS_FILE, LEGEND_FILE

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')


def canonical_name(name: str) -> str:
    """Normalize a display name for lenient comparison (unicode form, case, whitespace)."""
    normalized = unicodedata.normalize('NFKC', name)
    return _WHITESPACE.sub(' ', normalized).strip().casefold()


class Line(BaseModel):
    id: str
    name: str
    alternative_names: List[str] = Field(default_factory=list)

    def names(self) -> List[str]:
        return [self.name, *self.alternative_names]


class Canteen(BaseModel):
    id: str
    name: str
    alternative_names: List[str] = Field(default_factory=list)
    lines: List[Line] = Field(default_factory=list)

    def names(self) -> List[str]:
        return [self.name, *self.alternative_names]


class LegendItem(BaseModel):
    short: str
    label: str


class _NameIndex:
    """Name -> id lookup with an exact pass and a canonicalized pass.

    A canonical name shared by entries with different ids is ambiguous and
    resolves to nothing.
    """

    def __init__(self, entries: Iterable[Union[Canteen, Line]]):
        self._exact: Dict[str, str] = {}
        self._canonical: Dict[str, Optional[str]] = {}
        for entry in entries:
            for name in entry.names():
                self._exact.setdefault(name, entry.id)
                key = canonical_name(name)
                known = self._canonical.get(key, entry.id)
                self._canonical[key] = entry.id if known == entry.id else None

    def match(self, name: Optional[str]) -> Optional[str]:
        if not isinstance(name, str) or not name:
            return None
        if name in self._exact:
            return self._exact[name]
        return self._canonical.get(canonical_name(name))


class Catalog:
    def __init__(self, canteens: List[Canteen], legend: Optional[List[LegendItem]] = None):
        self.canteens = list(canteens)
        self.legend = list(legend or [])
        self._by_id = {c.id: c for c in self.canteens}
        self._lines_by_id = {c.id: {line.id: line for line in c.lines} for c in self.canteens}
        self._canteen_names = _NameIndex(self.canteens)
        self._line_names = {c.id: _NameIndex(c.lines) for c in self.canteens}

    @classmethod
    def load(cls, canteens_file: Union[str, Path] = CANTEENS_FILE,
             legend_file: Union[str, Path, None] = LEGEND_FILE) -> Catalog:
        with open(canteens_file, 'r', encoding='utf-8') as f:
            canteens = [Canteen.model_validate(entry) for entry in json.load(f)]
        legend = []
        if legend_file is not None:
            with open(legend_file, 'r', encoding='utf-8') as f:
                legend = [LegendItem.model_validate(entry) for entry in json.load(f)]
        logger.info("Loaded catalog with %d canteens and %d legend entries", len(canteens), len(legend))
        return cls(canteens, legend)

    @classmethod
    def default(cls) -> Catalog:
        return cls.load(CANTEENS_FILE, LEGEND_FILE)

    @property
    def canteen_ids(self) -> List[str]:
        return [c.id for c in self.canteens]

    def get_canteen(self, canteen_id: str) -> Optional[Canteen]:
        return self._by_id.get(canteen_id)

    def get_line(self, canteen_id: str, line_id: str) -> Optional[Line]:
        return self._lines_by_id.get(canteen_id, {}).get(line_id)

    def match_canteen_by_name(self, name: str) -> Optional[str]:
        return self._canteen_names.match(name)

    def match_line_by_name(self, canteen_id: str, name: str) -> Optional[str]:
        index = self._line_names.get(canteen_id)
        if index is None:
            return None
        return index.match(name)
