import re
from datetime import timedelta
from typing import Final

DATE_PATTERN: Final[re.Pattern] = re.compile(r'([0-9]{4})-([0-9]{2})-([0-9]{2})')

CACHE_FILE_SUFFIX: Final[str] = ".json"
CACHE_FILE_PATTERN: Final[re.Pattern] = re.compile(r'([0-9]{4}-[0-9]{2}-[0-9]{2})\.json')
CACHE_FILE_ENCODING: Final[str] = "utf-8"

# Plans older than this were most likely misdated by the source (wrong month/year)
PLAN_AGE_MAXIMUM: Final[timedelta] = timedelta(days=10)

FETCH_SOURCES: Final[tuple] = ("none", "mirror")

# Error messages sent by the HTTP layer
MSG_MALFORMED_DATE: Final[str] = "malformed date"
MSG_MALFORMED_INPUT: Final[str] = "malformed input"
MSG_INVALID_CANTEENS_FILTER: Final[str] = "invalid filter: canteens"
MSG_INTERNAL_SERVER_ERROR: Final[str] = "internal_server_error"
