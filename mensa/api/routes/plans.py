from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from mensa.api.dependencies import get_cache, get_catalog
from mensa.api.errors import BadRequestError, NotFoundError
from mensa.api.responses import send_result
from mensa.domain.Catalog import Catalog
from mensa.domain.DateKey import DateKey
from mensa.infra.Plan_Cache import PlanCache
from mensa.utilities.constants import DATE_PATTERN, MSG_INVALID_CANTEENS_FILTER, MSG_MALFORMED_DATE
from mensa.utilities.validators import PlanDetail, PlanSummary, parse_comma_filter

router = APIRouter(prefix="/plans")


def _request_date(raw: str) -> DateKey:
    # only YYYY-MM-DD shaped paths belong to this route at all
    if not DATE_PATTERN.fullmatch(raw):
        raise NotFoundError("route")
    date = DateKey.try_parse(raw)
    if date is None:
        raise BadRequestError(MSG_MALFORMED_DATE)
    return date


def _canteens_filter(request: Request, catalog: Catalog) -> Optional[List[str]]:
    values = request.query_params.getlist("canteens")
    if not values:
        return None
    canteens = parse_comma_filter(values[0], catalog.canteen_ids) if len(values) == 1 else None
    if canteens is None:
        raise BadRequestError(MSG_INVALID_CANTEENS_FILTER)
    return canteens


@router.get("")
def list_plans(cache: PlanCache = Depends(get_cache)):
    """Summaries (just the date) of every cached plan, oldest first."""
    summaries = [PlanSummary(date=date.to_dict()) for date in sorted(cache.list())]
    return send_result([summary.model_dump() for summary in summaries])


@router.get("/{date}")
def get_plan(date: str, request: Request,
             cache: PlanCache = Depends(get_cache),
             catalog: Catalog = Depends(get_catalog)):
    """Plans of all canteens for one date, optionally limited by ?canteens=id1,id2."""
    key = _request_date(date)
    canteens = _canteens_filter(request, catalog)
    plans = cache.get(key)
    if plans is None:
        raise NotFoundError("plan")
    if canteens is not None:
        plans = [plan for plan in plans if plan.get("id") is not None and plan.get("id") in canteens]
    return send_result([PlanDetail.from_record(plan).model_dump() for plan in plans])
