"""Background job that keeps the plan cache filled.

A single run does not guarantee a complete set of plans; it fetches enough
that, when run regularly, no gaps appear.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from mensa.domain.DateKey import DateKey, InvalidDateError
from mensa.domain.Plan import PlanRecord
from mensa.infra.Plan_Cache import PlanCache
from mensa.logic.fetch.sources import PlanSource
from mensa.utilities.constants import PLAN_AGE_MAXIMUM

logger = logging.getLogger(__name__)


def group_by_date(plans: List[PlanRecord]) -> Dict[DateKey, List[PlanRecord]]:
    groups: Dict[DateKey, List[PlanRecord]] = {}
    for plan in plans:
        try:
            date = DateKey.from_dict(plan.get('date') or {})
        except InvalidDateError as e:
            logger.warning("skipping plan for %r without a valid date: %s", plan.get('name'), e)
            continue
        groups.setdefault(date, []).append(plan)
    return groups


def run_fetch_job(cache: PlanCache, source: PlanSource, now: Optional[datetime] = None) -> int:
    """Fetch plans from source and store them per date. Returns the number of dates stored.

    Never raises: source errors abort the run, storage errors skip one date.
    """
    logger.info("fetching plans (source=%s)", getattr(source, 'name', type(source).__name__))
    try:
        plans = source.fetch()
    except Exception:
        logger.exception("fetching plans failed")
        return 0

    now = now or datetime.now()
    stored = 0
    for date, plans_for_date in group_by_date(plans).items():
        plan_time = datetime.combine(date.to_date(), datetime.min.time())
        if now - plan_time > PLAN_AGE_MAXIMUM:
            logger.warning("data for %s will not be stored due to its age", date)
            continue

        canteens = ','.join(str(plan.get('id')) for plan in plans_for_date)
        logger.info("caching %s with %d canteens: [%s]", date, len(plans_for_date), canteens)
        try:
            cache.put(date, plans_for_date)
        except Exception:
            logger.exception("could not cache plans for %s", date)
            continue
        stored += 1
    return stored


def start_fetch_scheduler(cache: PlanCache, source: PlanSource, interval_hours: float) -> BackgroundScheduler:
    """Run the job once now, then every ``interval_hours`` in a background thread."""
    run_fetch_job(cache, source)
    scheduler = BackgroundScheduler()
    scheduler.add_job(run_fetch_job, "interval", hours=interval_hours, args=[cache, source],
                      id="fetch-plans", max_instances=1, coalesce=True)
    scheduler.start()
    logger.info("fetch job scheduled every %s hours", interval_hours)
    return scheduler
