"""Configuration management for the mensa API.

Values come from the environment (optionally a ``.env`` file next to the
package). The module-level constants are read once at import; ``Settings``
takes a snapshot of them so the app factory and tests can pass their own.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _get_bool(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes')


def _get_optional(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or value == '':
        return None
    return value


# Server
APP_HOST: Final[str] = os.getenv('MENSA_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('MENSA_PORT', '8080'))
BASE_PATH: Final[str] = os.getenv('MENSA_BASE_PATH', '/')
CORS_ALLOW_ORIGIN: Final[Optional[str]] = _get_optional('MENSA_CORS_ALLOWORIGIN')
LOG_LEVEL: Final[str] = os.getenv('MENSA_LOG_LEVEL', 'INFO').upper()

# Cache
CACHE_DIRECTORY: Final[Path] = Path(os.getenv('MENSA_CACHE_DIRECTORY') or './cache').resolve()
FIXUP_DRY_RUN: Final[bool] = _get_bool('MENSA_FIXUP_DRY_RUN')

# Reference catalog (defaults to the bundled data files)
CATALOG_FILE: Final[Optional[str]] = _get_optional('MENSA_CATALOG_FILE')
LEGEND_FILE: Final[Optional[str]] = _get_optional('MENSA_LEGEND_FILE')

# Fetch job
FETCH_SOURCE: Final[str] = os.getenv('MENSA_FETCH_SOURCE', 'none').strip().lower()
FETCH_INTERVAL_HOURS: Final[float] = float(os.getenv('MENSA_FETCH_INTERVAL_HOURS', '6'))
FETCH_FUTURE_DAYS: Final[int] = int(os.getenv('MENSA_FETCH_FUTURE_DAYS', '14'))
MIRROR_URL: Final[Optional[str]] = _get_optional('MENSA_MIRROR_URL')
MIRROR_USER: Final[Optional[str]] = _get_optional('MENSA_MIRROR_USER')
MIRROR_PASSWORD: Final[Optional[str]] = _get_optional('MENSA_MIRROR_PASSWORD')


@dataclass(frozen=True)
class Settings:
    host: str = '0.0.0.0'
    port: int = 8080
    base_path: str = '/'
    cors_allow_origin: Optional[str] = None
    log_level: str = 'INFO'
    cache_directory: Path = Path('./cache').resolve()
    fixup_dry_run: bool = False
    catalog_file: Optional[str] = None
    legend_file: Optional[str] = None
    fetch_source: str = 'none'
    fetch_interval_hours: float = 6
    fetch_future_days: int = 14
    mirror_url: Optional[str] = None
    mirror_user: Optional[str] = None
    mirror_password: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=APP_HOST,
            port=APP_PORT,
            base_path=BASE_PATH,
            cors_allow_origin=CORS_ALLOW_ORIGIN,
            log_level=LOG_LEVEL,
            cache_directory=CACHE_DIRECTORY,
            fixup_dry_run=FIXUP_DRY_RUN,
            catalog_file=CATALOG_FILE,
            legend_file=LEGEND_FILE,
            fetch_source=FETCH_SOURCE,
            fetch_interval_hours=FETCH_INTERVAL_HOURS,
            fetch_future_days=FETCH_FUTURE_DAYS,
            mirror_url=MIRROR_URL,
            mirror_user=MIRROR_USER,
            mirror_password=MIRROR_PASSWORD,
        )
