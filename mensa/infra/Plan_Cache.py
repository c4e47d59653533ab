import json
import logging
from typing import List, Optional, Set

from mensa.domain.DateKey import DateKey
from mensa.domain.Plan import PlanRecord
from mensa.infra.Presence_Tracker import Presence, PresenceTracker
from mensa.infra.storage import StorageAdapter, StorageError
from mensa.utilities.constants import CACHE_FILE_PATTERN, CACHE_FILE_SUFFIX

logger = logging.getLogger(__name__)


def build_file_name(date: DateKey) -> str:
    return f"{date.format()}{CACHE_FILE_SUFFIX}"


def parse_file_name(name: str) -> Optional[DateKey]:
    """Return the DateKey for a cache file name, or None if the name is not one."""
    match = CACHE_FILE_PATTERN.fullmatch(name)
    if match is None:
        return None
    return DateKey.try_parse(match.group(1))


class PlanCache:
    """Date-keyed store of plan records, one JSON file per date.

    ``get`` returns None when nothing is stored for a date. Any other failure
    (unreadable file, invalid JSON, ...) is raised to the caller unchanged.
    """

    def __init__(self, adapter: StorageAdapter, presence: Optional[PresenceTracker] = None):
        self.adapter = adapter
        self.presence = presence if presence is not None else PresenceTracker()

    def get(self, date: DateKey) -> Optional[List[PlanRecord]]:
        if self.presence.get(date) is Presence.ABSENT:
            return None
        try:
            contents = self.adapter.read(build_file_name(date))
        except FileNotFoundError:
            self.presence.set(date, Presence.ABSENT)
            return None
        plans = json.loads(contents)
        if not isinstance(plans, list):
            raise StorageError(f"cache file for {date} holds {type(plans).__name__}, not a list of plans")
        self.presence.set(date, Presence.PRESENT)
        return plans

    def put(self, date: DateKey, plans: List[PlanRecord]) -> None:
        contents = json.dumps(plans, ensure_ascii=False, separators=(",", ":"))
        self.adapter.write(build_file_name(date), contents)
        self.presence.set(date, Presence.PRESENT)

    def list(self) -> Set[DateKey]:
        dates = set()
        for name in self.adapter.list_files():
            date = parse_file_name(name)
            if date is not None:
                dates.add(date)
        return dates
