"""In-memory record of which cache keys are known to exist on disk.

The tracker only answers "is there a file for this key?"; it never holds
content. Each PlanCache owns its own tracker, nothing is shared between
processes.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Hashable


class Presence(Enum):
    UNKNOWN = 0
    ABSENT = -1
    PRESENT = 1


class PresenceTracker:
    def __init__(self):
        self._states: Dict[Hashable, Presence] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Presence:
        """Return the last recorded presence for key, or UNKNOWN."""
        with self._lock:
            return self._states.get(key, Presence.UNKNOWN)

    def set(self, key: Hashable, value: Presence) -> None:
        """Record ABSENT/PRESENT for key; UNKNOWN forgets the key."""
        if value is Presence.UNKNOWN:
            with self._lock:
                self._states.pop(key, None)
            return
        if value is not Presence.ABSENT and value is not Presence.PRESENT:
            raise ValueError(f"invalid presence value {value!r}, must be ABSENT or PRESENT")
        with self._lock:
            self._states[key] = value

    def clear(self) -> None:
        with self._lock:
            self._states.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)
