import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mensa.api.responses import register_error_handlers
from mensa.domain.Catalog import Catalog
from mensa.infra.Plan_Cache import PlanCache
from mensa.logic.fetch.job import start_fetch_scheduler
from mensa.logic.fetch.sources import PlanSource
from mensa.utilities.config import Settings

# Routers
from mensa.api.routes import canteens, default, meta, plans

logger = logging.getLogger(__name__)


def _route_prefix(base_path: str) -> str:
    base = '/' + base_path.strip('/')
    return '' if base == '/' else base


def create_app(cache: PlanCache, catalog: Catalog, settings: Optional[Settings] = None,
               source: Optional[PlanSource] = None) -> FastAPI:
    """Build the API around an existing plan cache and catalog.

    When a source is given, the fetch job is started on application startup
    and stopped on shutdown.
    """
    settings = settings or Settings()

    app = FastAPI(title="Mensa API")
    app.state.cache = cache
    app.state.catalog = catalog
    app.state.scheduler = None

    if settings.cors_allow_origin:
        app.add_middleware(CORSMiddleware, allow_origins=[settings.cors_allow_origin])

    register_error_handlers(app)

    prefix = _route_prefix(settings.base_path)
    app.include_router(default.router, prefix=prefix)
    app.include_router(meta.router, prefix=prefix)
    app.include_router(canteens.router, prefix=prefix)
    app.include_router(plans.router, prefix=prefix)

    if source is not None:
        @app.on_event("startup")
        def _start_fetch_job():
            app.state.scheduler = start_fetch_scheduler(cache, source, settings.fetch_interval_hours)

        @app.on_event("shutdown")
        def _stop_fetch_job():
            scheduler = app.state.scheduler
            if scheduler is not None:
                scheduler.shutdown(wait=False)
                app.state.scheduler = None
                logger.info("fetch job stopped")

    return app
