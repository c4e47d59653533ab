import logging

import uvicorn

from mensa.api.api_run import create_app
from mensa.domain.Catalog import Catalog
from mensa.infra.Plan_Cache import PlanCache
from mensa.infra.paths import CANTEENS_FILE, LEGEND_FILE
from mensa.infra.storage import DirectoryAdapter
from mensa.logic.fixup.reconciliation import fixup_cache
from mensa.logic.fetch.sources import create_source
from mensa.utilities.config import Settings

logger = logging.getLogger("mensa")


def fixup_cached_files(cache: PlanCache, catalog: Catalog, dry_run: bool = False):
    """Fill in ids that became resolvable since the plans were cached."""
    def _log_and_decide(date):
        logger.info("fixup %s%s", date, " (dry run)" if dry_run else "")
        return not dry_run

    return fixup_cache(cache, catalog, _log_and_decide)


def build_app(settings: Settings):
    logger.info('Using cache directory "%s"', settings.cache_directory)
    adapter = DirectoryAdapter(settings.cache_directory)
    adapter.init()
    cache = PlanCache(adapter)

    catalog = Catalog.load(settings.catalog_file or CANTEENS_FILE, settings.legend_file or LEGEND_FILE)

    fixup_cached_files(cache, catalog, dry_run=settings.fixup_dry_run)
    source = create_source(settings)
    if source is None:
        logger.info("No fetch source configured, serving cached plans only")
    return create_app(cache, catalog, settings, source=source)


if __name__ == "__main__":
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s: %(message)s")
    app = build_app(settings)
    print(f"Uvicorn running on http://localhost:{settings.port} (Press CTRL+C to quit)")
    uvicorn.run(app, host=settings.host, port=settings.port)
