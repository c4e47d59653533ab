"""Where the fetch job gets its plans from.

``MirrorSource`` pulls plans from another running instance of this API
(``GET /plans/{date}``) for a window of days starting today.
"""
import logging
from typing import List, Optional, Protocol, Tuple

import httpx

from mensa.domain.Plan import PlanRecord
from mensa.logic.fetch.dates import get_fetch_dates
from mensa.utilities.config import Settings
from mensa.utilities.constants import FETCH_SOURCES

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class PlanSource(Protocol):
    name: str

    def fetch(self) -> List[PlanRecord]:
        ...


def detail_to_record(detail: dict) -> PlanRecord:
    """Convert an API plan detail ({canteen: {id, name}, date, lines}) back to a cache record."""
    canteen = detail.get('canteen') or {}
    return {
        'id': canteen.get('id'),
        'name': canteen.get('name'),
        'date': detail.get('date'),
        'lines': detail.get('lines') or [],
    }


class MirrorSource:
    name = "mirror"

    def __init__(self, base_url: str, future_days: int = 14,
                 auth: Optional[Tuple[str, str]] = None,
                 client: Optional[httpx.Client] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.future_days = future_days
        self.auth = auth
        self.timeout = timeout
        self._client = client

    def _get(self, client: httpx.Client, path: str) -> httpx.Response:
        return client.get(f"{self.base_url}{path}", auth=self.auth, timeout=self.timeout)

    def fetch(self) -> List[PlanRecord]:
        client = self._client or httpx.Client()
        try:
            records: List[PlanRecord] = []
            for date in get_fetch_dates(self.future_days):
                response = self._get(client, f"/plans/{date}")
                if response.status_code == 404:
                    logger.info("mirror has no plan for %s", date)
                    continue
                response.raise_for_status()
                payload = response.json()
                records.extend(detail_to_record(detail) for detail in payload.get('data', []))
            return records
        finally:
            if self._client is None:
                client.close()


def create_source(settings: Settings) -> Optional[PlanSource]:
    """Build the configured source, or None when fetching is disabled."""
    source = settings.fetch_source
    if source not in FETCH_SOURCES:
        raise ValueError("invalid source setting")
    if source == "none":
        return None
    if not settings.mirror_url:
        raise ValueError("MENSA_MIRROR_URL is required for the mirror source")
    auth = None
    if settings.mirror_user:
        auth = (settings.mirror_user, settings.mirror_password or '')
    return MirrorSource(settings.mirror_url, settings.fetch_future_days, auth=auth)
