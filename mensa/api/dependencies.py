from fastapi import Request

from mensa.domain.Catalog import Catalog
from mensa.infra.Plan_Cache import PlanCache


def get_cache(request: Request) -> PlanCache:
    return request.app.state.cache


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog
