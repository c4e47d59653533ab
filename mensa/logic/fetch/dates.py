from datetime import date as _date, timedelta
from typing import List, Optional

from mensa.domain.DateKey import DateKey


def get_fetch_dates(day_count: int, today: Optional[_date] = None) -> List[DateKey]:
    """Today plus the following ``day_count`` days (0 -> just today)."""
    start = today or _date.today()
    return [DateKey.from_date(start + timedelta(days=i)) for i in range(max(day_count, 0) + 1)]
